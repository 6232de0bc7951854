"""Chat-completion client factory for the query generator."""

from typing import Optional
from langchain_openai import ChatOpenAI
from langchain_core.language_models import BaseChatModel
from models.config import config
import structlog

logger = structlog.get_logger()

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class AIClientFactory:
    """Factory for creating the chat-completion client."""

    def __init__(self, llm_config=None):
        self.config = llm_config or config.llm

    def create_client(self) -> Optional[BaseChatModel]:
        """Create the LLM client for the configured provider."""
        provider = self.config.provider

        if provider == "openai":
            if not self.config.openai_api_key:
                logger.warning("OpenAI API key not found")
                return None

            return ChatOpenAI(
                model=self.config.openai_model,
                api_key=self.config.openai_api_key,
                base_url=self.config.openai_base_url,
                temperature=self.config.temperature,
                timeout=self.config.request_timeout,
                max_retries=0,
            )

        elif provider == "gemini":
            if not self.config.gemini_api_key:
                logger.warning("Gemini API key not found")
                return None

            # ChatOpenAI works against Gemini's OpenAI-compatible API
            return ChatOpenAI(
                model=self.config.gemini_model,
                api_key=self.config.gemini_api_key,
                base_url=GEMINI_OPENAI_BASE_URL,
                temperature=self.config.temperature,
                timeout=self.config.request_timeout,
                max_retries=0,
            )

        logger.warning(f"Unknown provider: {provider}")
        return None

    def get_client(self) -> BaseChatModel:
        """Get the LLM client, raising when none can be built."""
        client = self.create_client()
        if client is None:
            raise ValueError("No LLM client available. Check API keys in .env file.")
        return client


# Global AI client factory instance
ai_factory = AIClientFactory()


def get_llm() -> BaseChatModel:
    """Get the configured LLM client."""
    return ai_factory.get_client()


def llm_configured() -> bool:
    """Whether an API key is present for the configured provider."""
    llm_config = ai_factory.config
    if llm_config.provider == "gemini":
        return bool(llm_config.gemini_api_key)
    return bool(llm_config.openai_api_key)
