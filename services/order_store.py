"""Read-only access to the orders collection in MongoDB."""
from typing import Any, Dict, List, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from pydantic import ValidationError
import structlog

from core.exceptions import StoreUnavailableError
from models.config import config
from models.order import OrderDocument

logger = structlog.get_logger()


class OrderStore:
    """Runs find queries against the orders collection."""

    def __init__(self, collection, client=None):
        self.collection = collection
        self.client = client

    @classmethod
    def connect(cls, mongo_config=None) -> "OrderStore":
        """Create a client for the configured URI. The driver connects lazily."""
        mongo_config = mongo_config or config.mongo
        client = AsyncMongoClient(
            mongo_config.uri,
            serverSelectionTimeoutMS=mongo_config.server_selection_timeout_ms,
        )
        database = client.get_default_database(default=mongo_config.database)
        logger.info(
            "MongoDB client created",
            database=database.name,
            collection=mongo_config.collection,
        )
        return cls(database[mongo_config.collection], client=client)

    async def find(self, query: Dict[str, Any]) -> List[OrderDocument]:
        """Return every order matching ``query`` in the store's natural order."""
        try:
            documents = await self.collection.find(query).to_list(length=None)
        except PyMongoError as e:
            logger.error("Order query failed", query=query, error=str(e))
            raise StoreUnavailableError(f"Order store unavailable: {e}")

        orders = []
        for doc in documents:
            try:
                orders.append(OrderDocument.model_validate(doc))
            except ValidationError as e:
                # Skip the bad row, keep the rest of the result
                logger.warning(
                    "Skipping stored order with unexpected shape",
                    order_id=str(doc.get("_id")),
                    error=str(e),
                )
        return orders

    async def ping(self) -> bool:
        """Check the server answers a ping."""
        if self.client is None:
            return True
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed", error=str(e))
            return False

    async def close(self):
        if self.client is not None:
            await self.client.close()
            logger.info("MongoDB client closed")


def get_order_store(request: Request) -> OrderStore:
    """FastAPI dependency returning the store created at startup."""
    store: Optional[OrderStore] = getattr(request.app.state, "order_store", None)
    if store is None:
        raise StoreUnavailableError("Order store is not connected")
    return store
