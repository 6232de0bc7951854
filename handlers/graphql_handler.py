"""GraphQL endpoint backed by the orders schema."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel
from typing import Any, Dict, Optional
import json
import structlog

from core.schema import execute_query
from services.order_store import OrderStore, get_order_store

logger = structlog.get_logger()
router = APIRouter()

GRAPHIQL_HTML = """<!DOCTYPE html>
<html>
  <head>
    <title>GraphiQL</title>
    <link rel="stylesheet" href="https://unpkg.com/graphiql@3/graphiql.min.css" />
  </head>
  <body style="margin: 0;">
    <div id="graphiql" style="height: 100vh;"></div>
    <script crossorigin src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
    <script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"></script>
    <script crossorigin src="https://unpkg.com/graphiql@3/graphiql.min.js"></script>
    <script>
      const fetcher = GraphiQL.createFetcher({ url: window.location.pathname });
      ReactDOM.createRoot(document.getElementById("graphiql")).render(
        React.createElement(GraphiQL, { fetcher })
      );
    </script>
  </body>
</html>
"""


class GraphQLRequest(BaseModel):
    """GraphQL over HTTP request body."""
    query: Optional[str] = None
    variables: Optional[Dict[str, Any]] = None
    operationName: Optional[str] = None


async def _run(query: Optional[str], variables, operation_name, order_store: OrderStore) -> JSONResponse:
    if not query:
        return JSONResponse(
            status_code=400,
            content={"errors": [{"message": "Must provide query string."}]},
        )

    result = await execute_query(
        query,
        order_store,
        variables=variables,
        operation_name=operation_name,
    )

    # data is None only when the document failed to parse or validate
    status_code = 200 if result.data is not None else 400
    return JSONResponse(status_code=status_code, content=result.formatted)


@router.post("")
async def graphql_post(
    body: Optional[GraphQLRequest] = None,
    order_store: OrderStore = Depends(get_order_store),
):
    """Execute a GraphQL document against the orders schema."""
    body = body or GraphQLRequest()
    return await _run(body.query, body.variables, body.operationName, order_store)


@router.get("")
async def graphql_get(
    query: Optional[str] = Query(None),
    variables: Optional[str] = Query(None),
    operationName: Optional[str] = Query(None),
    order_store: OrderStore = Depends(get_order_store),
):
    """Execute a query passed as URL parameters, or serve GraphiQL."""
    if query is None:
        return HTMLResponse(GRAPHIQL_HTML)

    try:
        parsed_variables = json.loads(variables) if variables else None
    except json.JSONDecodeError:
        return JSONResponse(
            status_code=400,
            content={"errors": [{"message": "Variables are invalid JSON."}]},
        )

    return await _run(query, parsed_variables, operationName, order_store)
