"""
Print Dispatcher

Formats an order as a kitchen ticket and hands it to the configured
channel. Printing is best-effort: the dispatcher logs every failure and
never raises, so order intake succeeds whatever the printer does.
"""

import logging
from datetime import datetime
from typing import Optional

from phone_orders.schemas import OrderResponse
from phone_orders.services.printing.base import BasePrintChannel, PrintResult
from phone_orders.services.tickets import format_kitchen_ticket

logger = logging.getLogger(__name__)


class PrintDispatcher:
    """
    Sends orders to the kitchen printer.

    Args:
        channel: Active print channel, or None when printing is disabled
    """

    def __init__(self, channel: Optional[BasePrintChannel]):
        self.channel = channel

    @property
    def channel_name(self) -> str:
        return self.channel.name if self.channel else "disabled"

    async def dispatch(
        self,
        business_id: str,
        order: OrderResponse,
        printed_at: Optional[datetime] = None,
    ) -> PrintResult:
        """
        Print an order for a business.

        Returns:
            PrintResult: Outcome of the attempt (never raises)
        """
        if self.channel is None:
            logger.info("No print method configured")
            return PrintResult.skip("disabled", "No print method configured")

        try:
            ticket = format_kitchen_ticket(order, printed_at=printed_at)
            result = await self.channel.submit(business_id, ticket)
        except Exception as e:
            logger.exception(f"Print error for order {order.order_number}: {e}")
            return PrintResult(success=False, channel=self.channel.name, error_message=str(e))

        if not result.success and not result.skipped:
            logger.warning(
                f"Order {order.order_number} not printed via {result.channel}: {result.error_message}"
            )
        return result
