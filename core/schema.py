"""GraphQL schema for orders.

``ORDER_SCHEMA_SDL`` is the single definition of the schema: the executable
``schema`` is built from it and the query generator hands the same text to
the language model.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from graphql import ExecutionResult, GraphQLError, build_schema, graphql
import structlog

from models.order import OrderDocument, OrderFilter
from services.order_service import resolve_orders

logger = structlog.get_logger()

ORDER_SCHEMA_SDL = """
enum Status {
  open
  closed
  picking
  picked
  packed
  shipped
  cancelled
}

type ShippingAddress {
  verified: Boolean
  name: String
  company: String
  address_line1: String
  city: String
  state: String
  state_code: String
  country: String
  country_code: String
  zip: String
}

type Item {
  sku: String
  name: String
  total_qty: Int
  remaining_qty: Int
}

type Shipment {
  shipment_id: String
  carrier: String
  service: String
  tracking_number: String
}

type Order {
  id: ID!
  client_name: String
  code: Int
  status: Status
  created_at: String
  closed_at: String
  shipping_address: ShippingAddress
  items: [Item]
  shipments: [Shipment]
}

input FilterInput {
  client_name: String
  status: [Status]
  created_at_start: String
  created_at_end: String
  closed_at_start: String
  closed_at_end: String
  item_name: String
}

type Query {
  orders(filter: FilterInput): [Order]
  order(id: ID!): Order
}
""".strip()

schema = build_schema(ORDER_SCHEMA_SDL)


def get_schema_sdl() -> str:
    """SDL text of the executable schema."""
    return ORDER_SCHEMA_SDL


def _timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    # The driver hands back naive datetimes in UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def order_to_graphql(doc: OrderDocument) -> Dict[str, Any]:
    """Project a stored order onto the GraphQL ``Order`` shape."""
    data = doc.model_dump()
    data["status"] = doc.status.value if doc.status else None
    data["created_at"] = _timestamp(doc.created_at)
    data["closed_at"] = _timestamp(doc.closed_at)
    return data


class QueryRoot:
    """Root value holding the ``Query`` field resolvers."""

    async def orders(self, info, filter: Optional[Dict[str, Any]] = None):
        order_filter = OrderFilter.model_validate(filter) if filter is not None else None
        # Results keep the store's natural order
        documents = await resolve_orders(info.context["order_store"], order_filter)
        return [order_to_graphql(doc) for doc in documents]

    def order(self, info, id: str):
        # Declared in the schema but never backed by a resolver
        raise GraphQLError("Resolver for Query.order is not implemented")


async def execute_query(
    query: str,
    order_store,
    variables: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
) -> ExecutionResult:
    """Parse, validate and run a GraphQL document against the orders schema.

    Syntax and validation problems come back in ``result.errors`` with
    ``result.data`` set to None; resolver errors leave the field null.
    """
    result = await graphql(
        schema,
        query,
        root_value=QueryRoot(),
        context_value={"order_store": order_store},
        variable_values=variables,
        operation_name=operation_name,
    )

    for error in result.errors or []:
        logger.warning("GraphQL error", message=error.message, path=error.path)

    return result
