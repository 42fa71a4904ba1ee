import pytest
from pydantic import ValidationError

from phone_orders.schemas import OrderCreate, OrderItem, parse_items_string


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('[{"name": "Fries"}]', [{"name": "Fries"}]),
        ('{"name": "Shake", "quantity": 2}', [{"name": "Shake", "quantity": 2}]),
        ("large pepperoni", [{"name": "large pepperoni", "quantity": 1, "modifications": []}]),
        ("null", [{"name": "null", "quantity": 1, "modifications": []}]),
        ("", [{"name": "", "quantity": 1, "modifications": []}]),
    ],
)
def test_parse_items_string(raw, expected):
    assert parse_items_string(raw) == expected


def test_items_may_be_bare_names():
    order = OrderCreate(items=["Burger", {"name": "Fries", "quantity": 2}])

    assert order.items == [
        OrderItem(name="Burger"),
        OrderItem(name="Fries", quantity=2),
    ]


def test_single_item_object_is_wrapped():
    order = OrderCreate(items={"name": "Burger"})

    assert [item.name for item in order.items] == ["Burger"]


def test_null_modifications_become_empty():
    item = OrderItem.model_validate({"name": "Burger", "modifications": None})

    assert item.modifications == []


def test_single_modification_string_becomes_list():
    item = OrderItem.model_validate({"name": "Burger", "modifications": "no onions"})

    assert item.modifications == ["no onions"]


def test_camel_case_payload():
    order = OrderCreate.model_validate({
        "businessId": "pizza",
        "customerName": "Alice",
        "customerPhone": "555-0100",
        "specialInstructions": "Ring twice",
        "items": "[]",
        "total": "12.5",
    })

    assert order.business_id == "pizza"
    assert order.customer_name == "Alice"
    assert order.customer_phone == "555-0100"
    assert order.special_instructions == "Ring twice"
    assert order.items == []
    assert order.total == 12.5


def test_negative_total_is_rejected():
    with pytest.raises(ValidationError):
        OrderCreate(items=[], total=-1)
