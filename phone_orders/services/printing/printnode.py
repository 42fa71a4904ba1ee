"""
PrintNode Print Channel

Submits raw kitchen tickets through the PrintNode cloud printing API.
Used when PRINT_METHOD=printnode.

Requirements:
    - PRINTNODE_API_KEY must be set in environment
    - PRINTER_IDS must map each business id to a PrintNode printer id

API Documentation:
    https://www.printnode.com/en/docs/api/curl#printjob-creating
"""

import base64
import logging
from typing import Mapping, Optional, Union

import httpx

from phone_orders.services.printing.base import BasePrintChannel, PrintResult

logger = logging.getLogger(__name__)

PRINTNODE_API_URL = "https://api.printnode.com/printjobs"


class PrintNodeChannel(BasePrintChannel):
    """
    PrintNode implementation of the print channel.

    Tickets are sent as ``raw_base64`` jobs so the printer receives the
    exact text layout.
    """

    def __init__(
        self,
        api_key: Optional[str],
        printer_ids: Mapping[str, Union[int, str]],
        api_url: str = PRINTNODE_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._printer_ids = dict(printer_ids)
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport

        if not api_key:
            logger.warning("PrintNode API key not configured")
        logger.info(f"PrintNodeChannel initialized ({len(self._printer_ids)} printers)")

    @property
    def name(self) -> str:
        return "printnode"

    def _build_job(self, printer_id: Union[int, str], ticket: str) -> dict:
        """PrintNode job payload for a raw text ticket."""
        return {
            "printerId": int(printer_id),
            "title": "Kitchen Order",
            "contentType": "raw_base64",
            "content": base64.b64encode(ticket.encode("utf-8")).decode("ascii"),
            "source": "Phone Order System",
        }

    async def submit(self, business_id: str, ticket: str) -> PrintResult:
        """Create a PrintNode print job for the business's printer."""
        if not self._api_key:
            logger.info("PrintNode API key not configured")
            return PrintResult.skip(self.name, "PrintNode API key not configured")

        printer_id = self._printer_ids.get(business_id)
        if not printer_id:
            logger.info(f"No printer configured for business {business_id}")
            logger.info(f"Available business IDs: {list(self._printer_ids)}")
            return PrintResult.skip(self.name, f"No printer configured for business {business_id}")

        logger.info(f"Printing to PrintNode printer {printer_id} for business {business_id}")

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                self._api_url,
                json=self._build_job(printer_id, ticket),
                auth=(self._api_key, ""),
            )

        if not response.is_success:
            logger.error(f"PrintNode error ({response.status_code}): {response.text}")
            return PrintResult(
                success=False,
                channel=self.name,
                error_message=f"HTTP {response.status_code}: {response.text}",
            )

        logger.info("Print job sent successfully")
        return PrintResult(success=True, channel=self.name, job_id=self._parse_job_id(response))

    @staticmethod
    def _parse_job_id(response: httpx.Response) -> Optional[str]:
        """PrintNode answers with the new job id as a bare JSON number."""
        try:
            job_id = response.json()
        except ValueError:
            logger.warning(f"Unexpected PrintNode response body: {response.text[:200]!r}")
            return None
        if isinstance(job_id, bool) or not isinstance(job_id, int):
            logger.warning(f"Unexpected PrintNode job id: {job_id!r}")
            return None
        return str(job_id)
