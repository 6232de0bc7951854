"""Translate an order filter into a MongoDB query document."""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dateutil import parser as date_parser
import structlog

from core.exceptions import InvalidFilterError
from models.order import OrderFilter

logger = structlog.get_logger()

# (start attribute, end attribute, document field)
DATE_RANGE_FIELDS = (
    ("created_at_start", "created_at_end", "created_at"),
    ("closed_at_start", "closed_at_end", "closed_at"),
)


@dataclass
class DateRange:
    """Inclusive bounds on one timestamp field, emitted as a single constraint."""
    gte: Optional[datetime] = None
    lte: Optional[datetime] = None

    def is_empty(self) -> bool:
        return self.gte is None and self.lte is None

    def to_query(self) -> Dict[str, datetime]:
        query = {}
        if self.gte is not None:
            query["$gte"] = self.gte
        if self.lte is not None:
            query["$lte"] = self.lte
        return query


def parse_filter_date(field: str, value: str) -> datetime:
    """Parse a filter bound, normalising aware values to naive UTC."""
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError, TypeError):
        raise InvalidFilterError(field, value)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def contains_ignore_case(value: str) -> Dict[str, str]:
    """Case-insensitive literal substring match."""
    return {"$regex": re.escape(value), "$options": "i"}


def build_order_query(order_filter: Optional[OrderFilter]) -> Dict[str, Any]:
    """Build the MongoDB query for a filter; every present field is ANDed.

    ``None`` or a filter with nothing set yields ``{}``, which matches every
    order. Empty strings count as absent, while an explicit empty ``status``
    list matches nothing. Raises ``InvalidFilterError`` for an unparseable
    date bound.
    """
    query: Dict[str, Any] = {}
    if order_filter is None:
        return query

    if order_filter.status is not None:
        query["status"] = {
            "$in": [status.value for status in order_filter.status if status is not None]
        }

    if order_filter.client_name:
        query["client_name"] = contains_ignore_case(order_filter.client_name)

    for start_attr, end_attr, field in DATE_RANGE_FIELDS:
        date_range = DateRange()

        start = getattr(order_filter, start_attr)
        if start:
            date_range.gte = parse_filter_date(start_attr, start)

        end = getattr(order_filter, end_attr)
        if end:
            date_range.lte = parse_filter_date(end_attr, end)

        if not date_range.is_empty():
            query[field] = date_range.to_query()

    if order_filter.item_name:
        query["items.name"] = contains_ignore_case(order_filter.item_name)

    logger.debug("Generated MongoDB query", query=query)
    return query
