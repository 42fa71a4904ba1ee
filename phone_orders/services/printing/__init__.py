"""
Print Channel Factory

Selects the print channel once from PRINT_METHOD and caches it for the
lifetime of the process.

Usage:
    from phone_orders.services.printing import get_print_dispatcher

    dispatcher = get_print_dispatcher()
    await dispatcher.dispatch(order.business_id, order)
"""

import logging
from functools import lru_cache
from typing import Optional

from phone_orders.core.config import PrintMethod, get_settings
from phone_orders.services.printing.base import BasePrintChannel, PrintResult
from phone_orders.services.printing.cloudprnt import CloudPRNTChannel
from phone_orders.services.printing.dispatcher import PrintDispatcher
from phone_orders.services.printing.printnode import PrintNodeChannel
from phone_orders.services.printing.webhook import WebhookChannel

logger = logging.getLogger(__name__)


@lru_cache()
def get_print_channel() -> Optional[BasePrintChannel]:
    """
    Get the configured print channel.

    Returns:
        BasePrintChannel, or None when PRINT_METHOD is unset
    """
    settings = get_settings()
    method = settings.print_method

    if method is None:
        logger.info("Print Channel: none (printing disabled)")
        return None

    logger.info(f"Print Channel: {method.value}")

    if method == PrintMethod.PRINTNODE:
        return PrintNodeChannel(
            api_key=settings.printnode_api_key,
            printer_ids=settings.printer_ids,
            api_url=settings.printnode_api_url,
            timeout=settings.print_timeout_seconds,
        )
    if method == PrintMethod.WEBHOOK:
        return WebhookChannel(
            webhooks=settings.print_webhooks,
            timeout=settings.print_timeout_seconds,
        )
    return CloudPRNTChannel()


def get_print_dispatcher() -> PrintDispatcher:
    """Dispatcher bound to the cached print channel (FastAPI dependency)."""
    return PrintDispatcher(get_print_channel())


def reset_print_channel() -> None:
    """
    Clear the cached channel instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_print_channel.cache_clear()
    logger.debug("Print channel cache cleared")


__all__ = [
    "get_print_channel",
    "get_print_dispatcher",
    "reset_print_channel",
    "BasePrintChannel",
    "PrintResult",
    "PrintDispatcher",
    "PrintNodeChannel",
    "WebhookChannel",
    "CloudPRNTChannel",
]
