"""Handlers turning natural language into GraphQL queries and running them."""
from fastapi import APIRouter, Depends, HTTPException
from typing import Any, Optional
import structlog

from core.exceptions import BridgeFailure, MissingInputError
from core.schema import execute_query
from models.model import ErrorResponse, GenerateQueryResponse, NaturalLanguageRequest
from services.order_store import OrderStore, get_order_store
from services.query_generator import QueryGeneratorService, get_query_generator

logger = structlog.get_logger()
router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def require_user_input(body: Optional[NaturalLanguageRequest] = None) -> Any:
    """Reject the request before any other dependency is resolved."""
    user_input = body.userInput if body else None
    if not user_input:
        raise MissingInputError("User input is required")
    return user_input


@router.post("/generate-query", response_model=GenerateQueryResponse, responses=ERROR_RESPONSES)
async def generate_query(
    user_input: Any = Depends(require_user_input),
    generator: QueryGeneratorService = Depends(get_query_generator),
):
    """Generate a GraphQL orders query from a natural language description."""
    graphql_query = await generator.generate_query(user_input)
    if not graphql_query:
        raise BridgeFailure("Failed to generate GraphQL query")

    return GenerateQueryResponse(graphqlQuery=graphql_query)


@router.post("/fetch-orders", responses=ERROR_RESPONSES)
async def fetch_orders(
    user_input: Any = Depends(require_user_input),
    generator: QueryGeneratorService = Depends(get_query_generator),
    order_store: OrderStore = Depends(get_order_store),
):
    """Generate a GraphQL query from natural language and execute it."""
    graphql_query = await generator.generate_query(user_input)
    if not graphql_query:
        raise BridgeFailure("Failed to generate GraphQL query")

    try:
        result = await execute_query(graphql_query, order_store)
    except Exception as e:
        logger.error("Error in fetching orders", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch orders")

    # No data at all means the query never ran (syntax or validation error)
    if result.data is None:
        logger.error(
            "Generated query could not be executed",
            graphql_query=graphql_query,
            errors=[error.message for error in result.errors or []],
        )
        raise HTTPException(status_code=500, detail="Failed to fetch orders")

    logger.info("Orders fetched", graphql_query=graphql_query, errors=len(result.errors or []))
    return {"data": result.formatted}
