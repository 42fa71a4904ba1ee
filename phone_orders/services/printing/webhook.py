"""
Webhook Print Channel

POSTs the ticket to a per-business URL (PRINT_WEBHOOKS), for print bridges
and custom kitchen displays. Used when PRINT_METHOD=webhook.
"""

import logging
from typing import Mapping, Optional

import httpx

from phone_orders.services.printing.base import BasePrintChannel, PrintResult

logger = logging.getLogger(__name__)


class WebhookChannel(BasePrintChannel):
    """Fire-and-forget JSON webhook: ``{"content": ticket, "businessId": id}``."""

    def __init__(
        self,
        webhooks: Mapping[str, str],
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._webhooks = dict(webhooks)
        self._timeout = timeout
        self._transport = transport
        logger.info(f"WebhookChannel initialized ({len(self._webhooks)} webhooks)")

    @property
    def name(self) -> str:
        return "webhook"

    async def submit(self, business_id: str, ticket: str) -> PrintResult:
        webhook_url = self._webhooks.get(business_id)
        if not webhook_url:
            logger.info(f"No print webhook configured for business {business_id}")
            return PrintResult.skip(self.name, f"No print webhook configured for business {business_id}")

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                webhook_url,
                json={"content": ticket, "businessId": business_id},
            )

        if not response.is_success:
            logger.error(f"Print webhook {webhook_url} returned {response.status_code}")
            return PrintResult(
                success=False,
                channel=self.name,
                error_message=f"HTTP {response.status_code}",
            )

        logger.info(f"Ticket posted to print webhook for business {business_id}")
        return PrintResult(success=True, channel=self.name)
