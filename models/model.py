"""Pydantic models for API requests and responses."""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime


class NaturalLanguageRequest(BaseModel):
    """Free-text description of the orders to look for."""
    userInput: Optional[Any] = Field(None, description="Natural language filter conditions")


class GenerateQueryResponse(BaseModel):
    """Generated GraphQL query."""
    graphqlQuery: str = Field(..., description="Single-line GraphQL query")


class ErrorResponse(BaseModel):
    """Error body returned by every failing route."""
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=datetime.now)
    components: Dict[str, str] = Field(default_factory=dict)
