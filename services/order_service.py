"""Resolves the ``orders`` query against the order store."""
from typing import List, Optional

import structlog

from core.filter_translator import build_order_query
from models.order import OrderDocument, OrderFilter

logger = structlog.get_logger()


async def resolve_orders(store, order_filter: Optional[OrderFilter] = None) -> List[OrderDocument]:
    """Return orders matching ``order_filter``, or all orders when it is None.

    Results come back in the store's natural order; no sort is applied and
    the order is not guaranteed to be stable between calls.
    """
    query = build_order_query(order_filter) if order_filter is not None else {}
    logger.info("Resolving orders", query=query)

    orders = await store.find(query)

    logger.info("Orders resolved", count=len(orders))
    return orders
