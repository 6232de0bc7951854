from unittest.mock import MagicMock

import mongomock
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from core.exceptions import StoreUnavailableError
from models.order import OrderStatus
from services.order_store import OrderStore
from tests.conftest import AsyncCollection


@pytest.mark.asyncio
async def test_find_returns_validated_documents(order_store):
    orders = await order_store.find({"status": {"$in": ["open"]}})

    assert [order.id for order in orders] == ["ord-1002"]
    order = orders[0]
    assert order.status is OrderStatus.open
    assert order.closed_at is None
    assert order.shipping_address is None
    assert order.items[0].name == "Red Gadget"


@pytest.mark.asyncio
async def test_connection_failure_raises_store_unavailable():
    collection = MagicMock()
    collection.find.side_effect = ServerSelectionTimeoutError("No servers found")
    store = OrderStore(collection)

    with pytest.raises(StoreUnavailableError):
        await store.find({})


@pytest.mark.asyncio
async def test_malformed_document_is_skipped(sample_orders):
    collection = mongomock.MongoClient().db.orders
    collection.insert_many(sample_orders)
    collection.insert_one({"_id": "ord-odd", "status": "on_hold"})
    store = OrderStore(AsyncCollection(collection))

    orders = await store.find({})

    assert [order.id for order in orders] == ["ord-1001", "ord-1002", "ord-1003", "ord-1004"]


@pytest.mark.asyncio
async def test_ping_without_client_is_healthy(order_store):
    assert await order_store.ping() is True
