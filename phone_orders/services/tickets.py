"""
Kitchen Ticket Formatter

Renders an order as a 32-column plain-text ticket for thermal printers.
The banner and separator widths must not change: printer drivers
downstream match on them.
"""

from datetime import datetime
from typing import Optional

from phone_orders.schemas import OrderResponse

TICKET_WIDTH = 32
BANNER = "=" * TICKET_WIDTH
SEPARATOR = "-" * TICKET_WIDTH


def format_ticket_time(moment: datetime) -> str:
    """12-hour clock without a leading zero, e.g. '3:04:05 PM'."""
    return moment.strftime("%I:%M:%S %p").lstrip("0")


def format_kitchen_ticket(
    order: OrderResponse,
    printed_at: Optional[datetime] = None,
) -> str:
    """
    Format an order as a kitchen ticket.

    Args:
        order: Stored order
        printed_at: Time printed in the header (default: now, local time)

    Returns:
        str: Ticket text, lines separated by newlines
    """
    printed_at = printed_at or datetime.now()

    lines = [
        BANNER,
        f"ORDER {order.order_number}     {format_ticket_time(printed_at)}",
        BANNER,
        "",
        f"Customer: {order.customer_name}",
    ]
    if order.customer_phone:
        lines.append(f"Phone: {order.customer_phone}")
    lines.append("")
    lines.append(SEPARATOR)

    for item in order.items:
        lines.append(f"{item.quantity}x {item.name}")
        for mod in item.modifications:
            lines.append(f"   - {mod}")

    lines.append(SEPARATOR)

    if order.special_instructions:
        lines.append("")
        lines.append("Special Instructions:")
        lines.append(order.special_instructions)

    lines.append("")
    lines.append(f"TOTAL: ${order.total:.2f}")
    lines.append(BANNER)
    lines.append("")
    lines.append("")

    return "\n".join(lines)
