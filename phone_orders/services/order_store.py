"""
Order Store

Persistence layer for phone orders on top of an AsyncSession.
Every operation is a single insert/select/update; SQLite serializes
concurrent writers, so no application-level locking is needed.
"""

import enum
import logging
import time
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from phone_orders.models import Order, OrderStatus, encode_items
from phone_orders.schemas import OrderCreate, OrderResponse

logger = logging.getLogger(__name__)

MAX_LIST_ORDERS = 100


class UpdateResult(str, enum.Enum):
    """Outcome of a status update."""
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    INVALID_STATUS = "invalid_status"


def generate_order_number() -> str:
    """
    Display number from the last six digits of the epoch in milliseconds.

    Not collision-free: two orders in the same millisecond (or exactly
    1000 seconds apart) share a number.
    """
    return f"#{str(int(time.time() * 1000))[-6:]}"


class OrderStore:
    """
    Reads and writes the ``orders`` table.

    Example:
        >>> store = OrderStore(session)
        >>> order = await store.create_order(OrderCreate(items="2 burgers"))
        >>> order.items[0].name
        '2 burgers'
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_order(self, data: OrderCreate) -> OrderResponse:
        """
        Insert a new order with status ``new``.

        Defaults for missing optional fields are already applied by
        OrderCreate; the id, order number and creation time are assigned here.
        """
        order = Order(
            business_id=data.business_id,
            order_number=generate_order_number(),
            customer_name=data.customer_name,
            customer_phone=data.customer_phone,
            items=encode_items([item.model_dump() for item in data.items]),
            special_instructions=data.special_instructions,
            total=data.total,
            status=OrderStatus.NEW.value,
        )

        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)

        logger.info(f"Order {order.order_number} (id={order.id}) stored for {order.business_id}")
        return OrderResponse.model_validate(order)

    async def get_order(self, order_id: int) -> Optional[OrderResponse]:
        """Fetch a single order, or None if the id is unknown."""
        order = await self.session.get(Order, order_id)
        if order is None:
            return None
        return OrderResponse.model_validate(order)

    async def list_orders(
        self,
        business_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = MAX_LIST_ORDERS,
    ) -> list[OrderResponse]:
        """
        Most recent orders first, filtered by exact business id and status.

        Args:
            business_id: Only orders for this business
            status: Only orders in this status
            limit: Maximum number of rows, never more than MAX_LIST_ORDERS
        """
        query = select(Order).order_by(Order.created_at.desc(), Order.id.desc())

        if business_id:
            query = query.where(Order.business_id == business_id)
        if status:
            query = query.where(Order.status == status)

        query = query.limit(min(limit, MAX_LIST_ORDERS))
        result = await self.session.execute(query)

        return [OrderResponse.model_validate(order) for order in result.scalars().all()]

    async def update_status(
        self,
        order_id: Union[int, str],
        status: str,
        strict: bool = False,
    ) -> UpdateResult:
        """
        Overwrite the status of an order.

        Args:
            order_id: Target order id; a non-numeric id matches no order
            status: New status value
            strict: Refuse statuses outside OrderStatus

        Returns:
            UpdateResult: NOT_FOUND and INVALID_STATUS leave the row untouched
        """
        if strict and status not in OrderStatus.values():
            logger.warning(f"Rejected status {status!r} for order {order_id}")
            return UpdateResult.INVALID_STATUS

        try:
            order = await self.session.get(Order, int(order_id))
        except ValueError:
            order = None
        if order is None:
            logger.info(f"Status update for unknown order {order_id} ignored")
            return UpdateResult.NOT_FOUND

        if status not in OrderStatus.values():
            logger.warning(f"Order {order_id} set to unknown status {status!r}")

        order.status = status
        await self.session.commit()

        logger.info(f"Order {order_id} status -> {status}")
        return UpdateResult.UPDATED
