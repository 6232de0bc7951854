"""FastAPI application serving orders over GraphQL plus natural-language query endpoints."""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from handlers import graphql_handler, query_handler
from core.exceptions import OrderServiceError
from models.ai import llm_configured
from models.model import HealthResponse
from models.config import config
from services.order_store import OrderStore
import structlog
import logging
from datetime import datetime
import time

# Configure structured logging
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(config.app.log_level.upper())
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the order store on startup and close it on shutdown."""
    logger.info("Starting Orders GraphQL Service", version=config.app.app_version)
    app.state.order_store = OrderStore.connect(config.mongo)

    yield

    logger.info("Shutting down Orders GraphQL Service")
    await app.state.order_store.close()


# Create FastAPI app
app = FastAPI(
    title=config.app.app_name,
    description="Warehouse orders over GraphQL with natural-language query generation",
    version=config.app.app_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.app.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Add request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    # Log incoming request
    logger.info(
        "🔵 INCOMING REQUEST",
        method=request.method,
        path=request.url.path,
        query_params=str(request.url.query),
        client=request.client.host if request.client else None
    )

    response = await call_next(request)

    # Log response
    process_time = time.time() - start_time
    logger.info(
        "✅ REQUEST COMPLETED",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        process_time=f"{process_time:.4f}s"
    )

    return response


@app.exception_handler(OrderServiceError)
async def order_service_error_handler(request: Request, exc: OrderServiceError):
    logger.warning("Request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Invalid request body", path=request.url.path, errors=str(exc.errors()))
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# Include routers
app.include_router(graphql_handler.router, prefix="/graphql", tags=["graphql"])
app.include_router(query_handler.router, tags=["query"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": config.app.app_name,
        "version": config.app.app_version,
        "graphql": "/graphql",
        "status": "operational"
    }


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Health check endpoint."""
    order_store = getattr(request.app.state, "order_store", None)
    mongo_status = "healthy" if order_store and await order_store.ping() else "unavailable"
    llm_status = "healthy" if llm_configured() else "unavailable"

    return HealthResponse(
        status="healthy" if mongo_status == "healthy" else "degraded",
        version=config.app.app_version,
        timestamp=datetime.now(),
        components={
            "llm": llm_status,
            "mongodb": mongo_status,
        }
    )


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Server running at http://localhost:{config.app.port}/graphql")
    uvicorn.run(app, host="0.0.0.0", port=config.app.port)
