"""Configuration management using Pydantic Settings."""
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, List
import yaml
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file explicitly at module load time
load_dotenv()


class LLMConfig(BaseSettings):
    """LLM Provider Configuration."""
    provider: str = Field(default="openai", alias="LLM_PROVIDER")

    # OpenAI
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-3.5-turbo", alias="OPENAI_MODEL")
    openai_base_url: Optional[str] = Field(default=None, alias="OPENAI_BASE_URL")

    # Gemini through its OpenAI-compatible endpoint
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = "gemini-2.0-flash"

    temperature: float = 0.0
    request_timeout: float = Field(default=30.0, alias="LLM_REQUEST_TIMEOUT")

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True


class MongoConfig(BaseSettings):
    """MongoDB Configuration."""
    uri: str = Field(default="mongodb://localhost:27017/test", alias="MONGO_URI")
    # Used when the URI carries no database path
    database: str = Field(default="test", alias="MONGO_DATABASE")
    collection: str = "orders"
    server_selection_timeout_ms: int = 5000

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True


class AppConfig(BaseSettings):
    """Application Configuration."""
    app_name: str = "Orders GraphQL Service"
    app_version: str = "1.0.0"
    environment: str = "production"
    log_level: str = "INFO"
    port: int = Field(default=4000, alias="PORT")

    # CORS
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True


class Config:
    """Main configuration class."""

    def __init__(self):
        self.app = AppConfig()
        self.llm = LLMConfig()
        self.mongo = MongoConfig()

        # Load YAML config if exists
        self._load_yaml_config()

        # Also check environment directly for API keys
        self._load_env_overrides()

    def _load_yaml_config(self):
        """Load additional configuration from YAML file."""
        config_path = Path(__file__).parent.parent / "config.yaml"
        if config_path.exists():
            with open(config_path, 'r') as f:
                yaml_config = yaml.safe_load(f)

            # Override with YAML values if present
            if yaml_config and 'llm' in yaml_config:
                llm_config = yaml_config['llm']
                if 'model' in llm_config:
                    self.llm.openai_model = llm_config['model']
                if 'temperature' in llm_config:
                    self.llm.temperature = llm_config['temperature']
                if 'timeout' in llm_config:
                    self.llm.request_timeout = llm_config['timeout']

    def _load_env_overrides(self):
        """Load API keys directly from environment if not set."""
        if not self.llm.openai_api_key:
            self.llm.openai_api_key = os.getenv("OPENAI_API_KEY")
        if not self.llm.gemini_api_key:
            self.llm.gemini_api_key = os.getenv("GEMINI_API_KEY")


# Global config instance
config = Config()
