from unittest.mock import AsyncMock, MagicMock

import pytest

from core.exceptions import StoreUnavailableError
from core.schema import execute_query, get_schema_sdl, schema


def codes(result):
    return {order["code"] for order in result.data["orders"]}


def test_schema_declares_query_fields():
    query_type = schema.query_type
    assert set(query_type.fields) == {"orders", "order"}
    assert str(query_type.fields["orders"].type) == "[Order]"
    assert str(query_type.fields["orders"].args["filter"].type) == "FilterInput"
    assert str(query_type.fields["order"].args["id"].type) == "ID!"


def test_status_enum_values():
    assert set(schema.get_type("Status").values) == {
        "open", "closed", "picking", "picked", "packed", "shipped", "cancelled",
    }


def test_prompt_schema_is_the_executable_schema():
    sdl = get_schema_sdl()
    assert "orders(filter: FilterInput): [Order]" in sdl
    assert "order(id: ID!): Order" in sdl


@pytest.mark.asyncio
async def test_orders_without_filter_returns_everything(order_store):
    result = await execute_query(
        "{ orders { id client_name code status created_at closed_at } }", order_store
    )

    assert result.errors is None
    assert codes(result) == {1001, 1002, 1003, 1004}
    acme = next(o for o in result.data["orders"] if o["code"] == 1001)
    assert acme == {
        "id": "ord-1001",
        "client_name": "Acme Corp",
        "code": 1001,
        "status": "shipped",
        "created_at": "2024-01-01T00:00:00+00:00",
        "closed_at": "2024-01-05T00:00:00+00:00",
    }


@pytest.mark.asyncio
async def test_nested_fields_are_resolved(order_store):
    result = await execute_query(
        """{ orders(filter: {client_name: "acme corp"}) {
              shipping_address { city state_code verified }
              items { sku name total_qty remaining_qty }
              shipments { carrier tracking_number }
        } }""",
        order_store,
    )

    assert result.errors is None
    [order] = result.data["orders"]
    assert order["shipping_address"] == {"city": "Springfield", "state_code": "IL", "verified": True}
    assert order["items"] == [{"sku": "W-1", "name": "Blue Widget", "total_qty": 3, "remaining_qty": 0}]
    assert order["shipments"] == [{"carrier": "UPS", "tracking_number": "1Z999"}]


@pytest.mark.asyncio
async def test_status_filter(order_store):
    result = await execute_query(
        "{ orders(filter: {status: [shipped, cancelled]}) { code } }", order_store
    )
    assert codes(result) == {1001, 1003}


@pytest.mark.asyncio
async def test_filter_from_variables(order_store):
    result = await execute_query(
        "query Orders($filter: FilterInput) { orders(filter: $filter) { code } }",
        order_store,
        variables={"filter": {"created_at_end": "2024-01-15", "item_name": "gadget"}},
    )
    assert codes(result) == {1002}


@pytest.mark.asyncio
async def test_invalid_date_is_reported_as_graphql_error(order_store):
    result = await execute_query(
        '{ orders(filter: {created_at_start: "not-a-date"}) { code } }', order_store
    )

    assert result.data == {"orders": None}
    assert "Invalid date for created_at_start" in result.errors[0].message


@pytest.mark.asyncio
async def test_store_failure_is_reported_as_graphql_error():
    store = MagicMock()
    store.find = AsyncMock(side_effect=StoreUnavailableError("Order store unavailable: timed out"))

    result = await execute_query("{ orders { code } }", store)

    assert result.data == {"orders": None}
    assert result.errors[0].message == "Order store unavailable: timed out"


@pytest.mark.asyncio
async def test_order_by_id_is_not_implemented(order_store):
    result = await execute_query('{ order(id: "ord-1001") { id } }', order_store)

    assert result.data == {"order": None}
    assert "not implemented" in result.errors[0].message


@pytest.mark.asyncio
async def test_syntax_error_returns_no_data(order_store):
    result = await execute_query("this is not graphql", order_store)

    assert result.data is None
    assert result.errors
