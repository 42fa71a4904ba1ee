"""
SQLAlchemy Database Models

Single ``orders`` table holding phone orders as received from the
voice assistant webhook. Line items are stored as a JSON string.
"""

import enum
import json
import logging
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime, Text

from phone_orders.database import Base

logger = logging.getLogger(__name__)


class OrderStatus(str, enum.Enum):
    """Kitchen workflow: new -> preparing -> completed."""
    NEW = "new"
    PREPARING = "preparing"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


DEFAULT_BUSINESS_ID = "default"
DEFAULT_CUSTOMER_NAME = "Guest"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def encode_items(items: list[dict]) -> str:
    """Serialize line items for the ``items`` column."""
    return json.dumps(items)


def decode_items(raw: str) -> list:
    """
    Deserialize the ``items`` column.

    A blob that is not a JSON list yields an empty list so one bad row
    cannot break the order listing.
    """
    try:
        items = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.error(f"Stored items are not valid JSON: {e}")
        return []
    if not isinstance(items, list):
        logger.error(f"Stored items are not a list: {type(items).__name__}")
        return []
    return items


class Order(Base):
    """
    Main Order table - stores all phone orders.

    Status is kept as plain text; the known values live in OrderStatus.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    business_id = Column(String(100), nullable=False, default=DEFAULT_BUSINESS_ID, index=True)
    order_number = Column(String(20), nullable=False)

    customer_name = Column(String(100), nullable=True, default=DEFAULT_CUSTOMER_NAME)
    customer_phone = Column(String(30), nullable=True, default="")

    items = Column(Text, nullable=False)  # JSON string of ordered items
    special_instructions = Column(Text, nullable=True, default="")
    total = Column(Float, nullable=True, default=0.0)

    status = Column(String(20), nullable=False, default=OrderStatus.NEW.value, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def __repr__(self):
        return f"<Order #{self.id} {self.order_number} - {self.business_id} - {self.status}>"
