"""
Star CloudPRNT Print Channel (placeholder)

CloudPRNT printers poll the server for jobs instead of receiving pushes,
which needs a job queue endpoint this service does not expose yet.
"""

import logging

from phone_orders.services.printing.base import BasePrintChannel, PrintResult

logger = logging.getLogger(__name__)


class CloudPRNTChannel(BasePrintChannel):
    """Accepts tickets and drops them."""

    @property
    def name(self) -> str:
        return "cloudprnt"

    async def submit(self, business_id: str, ticket: str) -> PrintResult:
        logger.info("CloudPRNT implementation pending")
        return PrintResult.skip(self.name, "CloudPRNT implementation pending")
