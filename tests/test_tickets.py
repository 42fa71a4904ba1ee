from datetime import datetime

from phone_orders.schemas import OrderResponse
from phone_orders.services.tickets import (
    BANNER,
    SEPARATOR,
    format_kitchen_ticket,
    format_ticket_time,
)

PRINTED_AT = datetime(2024, 5, 17, 15, 4, 5)


def _order(**overrides) -> OrderResponse:
    data = {
        "id": 1,
        "business_id": "default",
        "order_number": "#123456",
        "customer_name": "Alice",
        "customer_phone": "555-0100",
        "items": [{"name": "Burger", "quantity": 2, "modifications": ["no onions"]}],
        "special_instructions": "",
        "total": 15.5,
        "status": "new",
        "created_at": datetime(2024, 5, 17, 15, 3, 0),
    }
    data.update(overrides)
    return OrderResponse(**data)


def test_full_ticket_layout():
    ticket = format_kitchen_ticket(
        _order(
            items=[
                {"name": "Burger", "quantity": 2, "modifications": ["no onions", "extra cheese"]},
                {"name": "Fries", "quantity": 1},
            ],
            special_instructions="Ring the bell",
        ),
        printed_at=PRINTED_AT,
    )

    assert ticket == "\n".join([
        "================================",
        "ORDER #123456     3:04:05 PM",
        "================================",
        "",
        "Customer: Alice",
        "Phone: 555-0100",
        "",
        "--------------------------------",
        "2x Burger",
        "   - no onions",
        "   - extra cheese",
        "1x Fries",
        "--------------------------------",
        "",
        "Special Instructions:",
        "Ring the bell",
        "",
        "TOTAL: $15.50",
        "================================",
        "",
        "",
    ])


def test_phone_and_instructions_are_optional():
    ticket = format_kitchen_ticket(_order(customer_phone=""), printed_at=PRINTED_AT)

    assert "Phone:" not in ticket
    assert "Special Instructions:" not in ticket
    assert "Customer: Alice\n\n" + SEPARATOR in ticket


def test_total_has_two_decimals():
    assert "TOTAL: $7.50" in format_kitchen_ticket(_order(total=7.5), printed_at=PRINTED_AT)
    assert "TOTAL: $0.00" in format_kitchen_ticket(_order(total=0), printed_at=PRINTED_AT)
    assert "TOTAL: $12.30" in format_kitchen_ticket(_order(total=12.3), printed_at=PRINTED_AT)


def test_formatting_is_deterministic():
    order = _order()
    first = format_kitchen_ticket(order, printed_at=PRINTED_AT)
    second = format_kitchen_ticket(order, printed_at=PRINTED_AT)

    assert first == second
    assert first.encode("utf-8") == second.encode("utf-8")


def test_banner_and_separator_width():
    assert BANNER == "=" * 32
    assert SEPARATOR == "-" * 32


def test_ticket_time_has_no_leading_zero():
    assert format_ticket_time(datetime(2024, 1, 1, 9, 5, 7)) == "9:05:07 AM"
    assert format_ticket_time(datetime(2024, 1, 1, 23, 59, 0)) == "11:59:00 PM"


def test_defaults_to_current_time():
    ticket = format_kitchen_ticket(_order())
    header = ticket.splitlines()[1]

    assert header.startswith("ORDER #123456     ")
    assert header.endswith(("AM", "PM"))
