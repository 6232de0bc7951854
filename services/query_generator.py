"""Natural language to GraphQL query generation using LangChain."""
from datetime import datetime, timezone
from typing import Any, Optional
import json
import re

from langchain_core.language_models import BaseChatModel
import structlog

from core.schema import get_schema_sdl
from models.ai import get_llm
from models.prompt import get_query_generation_prompt

logger = structlog.get_logger()

CODE_FENCE = re.compile(r"```[\w+-]*")
LINE_BREAK = re.compile(r"\s*(?:\r\n|\r|\n)\s*")


def clean_query_text(text: str) -> str:
    """Strip code fences and fold the query onto one line."""
    text = CODE_FENCE.sub("", text)
    text = LINE_BREAK.sub(" ", text)
    return text.strip()


class QueryGeneratorService:
    """Service for turning free text into a GraphQL ``orders`` query."""

    def __init__(self, llm: Optional[BaseChatModel] = None, schema_sdl: Optional[str] = None):
        self._llm = llm
        self.prompt = get_query_generation_prompt()
        self.schema_sdl = schema_sdl or get_schema_sdl()

    async def generate_query(self, user_input: Any) -> Optional[str]:
        """Generate a single-line GraphQL query, or None when nothing usable came back."""
        logger.info("Generating GraphQL query", user_input=user_input)

        try:
            llm = self._llm or get_llm()

            messages = self.prompt.format_messages(
                today=datetime.now(timezone.utc).isoformat(),
                schema=self.schema_sdl,
                conditions=json.dumps(user_input),
            )

            response = await llm.ainvoke(messages)
        except Exception as e:
            logger.error("Error generating GraphQL query", error=str(e), exc_info=True)
            return None

        content = response.content
        if not isinstance(content, str):
            logger.error("Completion returned non-text content", content_type=type(content).__name__)
            return None

        graphql_query = clean_query_text(content)
        if not graphql_query:
            logger.error("Completion returned an empty query")
            return None

        logger.info("Generated GraphQL query", graphql_query=graphql_query)
        return graphql_query


def get_query_generator() -> QueryGeneratorService:
    """Get query generator service instance."""
    return QueryGeneratorService()
