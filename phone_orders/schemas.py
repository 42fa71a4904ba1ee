"""
Pydantic Schemas for Request/Response Validation

Webhook payloads arrive from a voice assistant tool call, so the intake
schema is forgiving: missing fields get defaults and ``items`` may be sent
either as a list or as a (JSON) string. All bodies use camelCase keys;
snake_case is accepted on input as well.
"""

import json
import logging
from datetime import datetime
from typing import Any, Optional, List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from phone_orders.models import (
    DEFAULT_BUSINESS_ID,
    DEFAULT_CUSTOMER_NAME,
    decode_items,
)

logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# ITEM PARSING
# =============================================================================

def parse_items_string(raw: str) -> list:
    """
    Interpret ``items`` sent as a string.

    JSON lists are used as-is and a single JSON object becomes a one-item
    list. Anything else is treated as the name of a single item.
    """
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Failed to parse items string ({e}); using it as a single item")
        parsed = None

    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        return [parsed]
    return [{"name": raw, "quantity": 1, "modifications": []}]


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderItem(CamelModel):
    """Single line item on a kitchen ticket."""
    name: str = Field(..., examples=["Burger"])
    quantity: int = Field(default=1, ge=1, examples=[2])
    modifications: List[str] = Field(default_factory=list, examples=[["no onions"]])

    @model_validator(mode="before")
    @classmethod
    def coerce_bare_name(cls, data: Any) -> Any:
        """Allow an item given as just its name."""
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("modifications", mode="before")
    @classmethod
    def coerce_modifications(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v else []
        return v


class OrderCreate(CamelModel):
    """Inbound phone order payload."""

    business_id: str = Field(default=DEFAULT_BUSINESS_ID, examples=["pizza-palace"])
    customer_name: str = Field(default=DEFAULT_CUSTOMER_NAME, examples=["Alice"])
    customer_phone: str = Field(default="", examples=["555-123-4567"])
    items: List[OrderItem] = Field(...)
    special_instructions: str = Field(default="")
    total: float = Field(default=0.0, ge=0, examples=[15.5])

    @field_validator("business_id", mode="before")
    @classmethod
    def default_business_id(cls, v: Any) -> Any:
        return v or DEFAULT_BUSINESS_ID

    @field_validator("customer_name", mode="before")
    @classmethod
    def default_customer_name(cls, v: Any) -> Any:
        return v or DEFAULT_CUSTOMER_NAME

    @field_validator("customer_phone", "special_instructions", mode="before")
    @classmethod
    def default_empty_text(cls, v: Any) -> Any:
        return v or ""

    @field_validator("total", mode="before")
    @classmethod
    def default_total(cls, v: Any) -> Any:
        return v or 0.0

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_items_string(v)
        if isinstance(v, dict):
            return [v]
        return v


class StatusUpdate(CamelModel):
    """Request body for PATCH /api/orders/{id}."""
    status: str = Field(..., examples=["preparing"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderResponse(CamelModel):
    """A stored order with its items deserialized."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    business_id: str
    order_number: str
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    items: List[OrderItem]
    special_instructions: Optional[str] = None
    total: float = 0.0
    status: str
    created_at: datetime

    @field_validator("items", mode="before")
    @classmethod
    def decode_stored_items(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = decode_items(v)
        if not isinstance(v, list):
            return v

        items = []
        for raw in v:
            try:
                items.append(OrderItem.model_validate(raw))
            except ValidationError as e:
                logger.error(f"Dropping malformed stored item {raw!r}: {e.error_count()} error(s)")
        return items

    @field_validator("total", mode="before")
    @classmethod
    def default_total(cls, v: Any) -> Any:
        return v or 0.0


class OrderCreateResponse(CamelModel):
    """Response after creating an order."""
    success: bool = True
    order: OrderResponse


class StatusUpdateResponse(CamelModel):
    """Response after a status update."""
    success: bool = True
    result: str


class PrintResultResponse(CamelModel):
    """Outcome of a print attempt."""
    success: bool
    channel: str
    skipped: bool = False
    job_id: Optional[str] = None
    error_message: Optional[str] = None


class ReprintResponse(CamelModel):
    """Response after re-sending an order to the printer."""
    success: bool = True
    print_result: PrintResultResponse


class ErrorResponse(CamelModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None
    result: Optional[str] = None


class HealthResponse(CamelModel):
    """Health check response."""
    status: str
    database: str
    print_method: str
    timestamp: datetime
