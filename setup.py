from setuptools import setup, find_packages

setup(
    name="orders-graphql-service",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.15.0",
        "python-dotenv>=0.19.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dateutil>=2.8.2",
        "pyyaml>=6.0",
        "structlog>=23.1.0",
        "langchain-core>=0.2.0",
        "langchain-openai>=0.1.0",
        "graphql-core>=3.2.0,<3.4",
        "pymongo>=4.13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.27.0",
            "mongomock>=4.1.0",
        ],
    },
)
