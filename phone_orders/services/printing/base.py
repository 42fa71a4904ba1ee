"""
Print Channel Abstract Base Class

Defines the interface contract for every kitchen-printer integration.
A channel receives an already formatted ticket and reports what happened;
it never raises for expected failures (missing config, HTTP errors).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class PrintResult:
    """
    Standardized result from a print attempt.

    Attributes:
        success: Whether the job was accepted by the print endpoint
        channel: Name of the channel that handled the ticket
        skipped: Nothing was sent (channel or business not configured)
        job_id: Provider job identifier, when one is returned
        error_message: Error description if the attempt failed
    """
    success: bool
    channel: str
    skipped: bool = False
    job_id: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def skip(cls, channel: str, reason: str) -> "PrintResult":
        return cls(success=False, channel=channel, skipped=True, error_message=reason)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class BasePrintChannel(ABC):
    """
    Abstract base class for print channels.

    Example:
        >>> channel = get_print_channel()
        >>> result = await channel.submit("pizza-palace", ticket)
        >>> if not result.success:
        ...     print(result.error_message)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the channel name.

        Returns:
            str: Channel name (e.g., "printnode", "webhook")
        """
        pass

    @abstractmethod
    async def submit(self, business_id: str, ticket: str) -> PrintResult:
        """
        Send a formatted ticket to the printer of a business.

        Args:
            business_id: Business whose printer receives the ticket
            ticket: Plain-text kitchen ticket

        Returns:
            PrintResult: Outcome of the attempt
        """
        pass
