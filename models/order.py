"""Persisted shape of an order document in the ``orders`` collection."""
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderStatus(str, Enum):
    """Fulfilment status of an order."""
    open = "open"
    closed = "closed"
    picking = "picking"
    picked = "picked"
    packed = "packed"
    shipped = "shipped"
    cancelled = "cancelled"


class ShippingAddressDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    verified: Optional[bool] = None
    name: Optional[str] = None
    company: Optional[str] = None
    address_line1: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    state_code: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    zip: Optional[str] = None


class ItemDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sku: Optional[str] = None
    name: Optional[str] = None
    total_qty: Optional[int] = None
    remaining_qty: Optional[int] = None


class ShipmentDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    shipment_id: Optional[str] = None
    carrier: Optional[str] = None
    service: Optional[str] = None
    tracking_number: Optional[str] = None


class OrderDocument(BaseModel):
    """Order as read from MongoDB. Never written back by this service."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: str = Field(..., alias="_id")
    client_name: Optional[str] = None
    code: Optional[int] = None
    status: Optional[OrderStatus] = None
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    shipping_address: Optional[ShippingAddressDocument] = None
    items: List[ItemDocument] = Field(default_factory=list)
    shipments: List[ShipmentDocument] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        # ObjectId and any other id type render as an opaque string
        return str(value)

    @field_validator("items", "shipments", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class OrderFilter(BaseModel):
    """``FilterInput`` arguments; every field is optional and present fields are ANDed."""
    model_config = ConfigDict(extra="forbid")

    client_name: Optional[str] = None
    status: Optional[List[Optional[OrderStatus]]] = None
    created_at_start: Optional[str] = None
    created_at_end: Optional[str] = None
    closed_at_start: Optional[str] = None
    closed_at_end: Optional[str] = None
    item_name: Optional[str] = None
