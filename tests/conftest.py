import copy
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from langchain_core.language_models.fake_chat_models import FakeListChatModel
import mongomock

from main import app
from services.order_store import OrderStore, get_order_store
from services.query_generator import QueryGeneratorService, get_query_generator

ORDERS = [
    {
        "_id": "ord-1001",
        "client_name": "Acme Corp",
        "code": 1001,
        "status": "shipped",
        "created_at": datetime(2024, 1, 1),
        "closed_at": datetime(2024, 1, 5),
        "shipping_address": {
            "verified": True,
            "name": "Jane Doe",
            "company": "Acme Corp",
            "address_line1": "1 Main St",
            "city": "Springfield",
            "state": "Illinois",
            "state_code": "IL",
            "country": "United States",
            "country_code": "US",
            "zip": "62701",
        },
        "items": [
            {"sku": "W-1", "name": "Blue Widget", "total_qty": 3, "remaining_qty": 0},
        ],
        "shipments": [
            {
                "shipment_id": "shp-1",
                "carrier": "UPS",
                "service": "Ground",
                "tracking_number": "1Z999",
            },
        ],
    },
    {
        "_id": "ord-1002",
        "client_name": "Globex",
        "code": 1002,
        "status": "open",
        "created_at": datetime(2024, 1, 15),
        "items": [
            {"sku": "G-7", "name": "Red Gadget", "total_qty": 1, "remaining_qty": 1},
        ],
        "shipments": [],
    },
    {
        "_id": "ord-1003",
        "client_name": "ACME Logistics",
        "code": 1003,
        "status": "cancelled",
        "created_at": datetime(2024, 2, 1),
        "closed_at": datetime(2024, 2, 2),
        "items": [
            {"sku": "W-9", "name": "Widget Pro", "total_qty": 2, "remaining_qty": 2},
            {"sku": "C-1", "name": "Cable", "total_qty": 5, "remaining_qty": 5},
        ],
        "shipments": [],
    },
    {
        "_id": "ord-1004",
        "client_name": "Initech",
        "code": 1004,
        "status": "packed",
        "created_at": datetime(2024, 3, 10),
        "items": [],
        "shipments": [],
    },
]

FENCED_QUERY = """```graphql
query {
  orders(filter: {status: [shipped]}) {
    id
    client_name
  }
}
```"""


@pytest.fixture
def sample_orders():
    return copy.deepcopy(ORDERS)


class AsyncCursor:
    """Awaitable cursor over mongomock results, as the async driver returns."""

    def __init__(self, cursor):
        self._cursor = cursor

    async def to_list(self, length=None):
        documents = list(self._cursor)
        return documents if length is None else documents[:length]


class AsyncCollection:
    """Async facade over a mongomock collection."""

    def __init__(self, collection):
        self._collection = collection

    def find(self, query):
        return AsyncCursor(self._collection.find(query))


# Fresh in-memory collection per test
@pytest.fixture
def order_store(sample_orders):
    collection = mongomock.MongoClient().db.orders
    collection.insert_many(sample_orders)
    return OrderStore(AsyncCollection(collection))


def make_generator(*responses: str) -> QueryGeneratorService:
    """Query generator answering with canned completions."""
    return QueryGeneratorService(llm=FakeListChatModel(responses=list(responses)))


@pytest.fixture
def query_generator():
    return make_generator(FENCED_QUERY)


# Client
@pytest_asyncio.fixture(scope="function")
async def client(order_store, query_generator):
    app.dependency_overrides[get_order_store] = lambda: order_store
    app.dependency_overrides[get_query_generator] = lambda: query_generator

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
