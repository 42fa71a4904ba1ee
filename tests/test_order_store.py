import re

from phone_orders.models import Order
from phone_orders.schemas import OrderCreate
from phone_orders.services import order_store
from phone_orders.services.order_store import (
    MAX_LIST_ORDERS,
    UpdateResult,
    generate_order_number,
)


def _payload(**overrides) -> OrderCreate:
    data = {"items": [{"name": "Burger", "quantity": 2, "modifications": ["no onions"]}]}
    data.update(overrides)
    return OrderCreate(**data)


def test_create_order_returns_stored_representation(with_store):
    order = with_store(lambda store: store.create_order(_payload(customer_name="Alice", total=15.5)))

    assert order.id >= 1
    assert order.status == "new"
    assert order.customer_name == "Alice"
    assert order.business_id == "default"
    assert order.total == 15.5
    assert order.items[0].name == "Burger"
    assert order.items[0].modifications == ["no onions"]
    assert re.fullmatch(r"#\d{6}", order.order_number)
    assert order.created_at is not None


def test_ids_increase(with_store):
    async def _two(store):
        first = await store.create_order(_payload())
        second = await store.create_order(_payload())
        return first, second

    first, second = with_store(_two)

    assert second.id > first.id


def test_get_order(with_store):
    async def _roundtrip(store):
        created = await store.create_order(_payload(customer_phone="555-0100"))
        return created, await store.get_order(created.id), await store.get_order(created.id + 100)

    created, fetched, missing = with_store(_roundtrip)

    assert fetched == created
    assert missing is None


def test_list_orders_limit_never_exceeds_cap(with_store):
    async def _fill(store):
        for _ in range(3):
            await store.create_order(_payload())
        return (
            await store.list_orders(limit=2),
            await store.list_orders(limit=MAX_LIST_ORDERS * 10),
        )

    limited, everything = with_store(_fill)

    assert len(limited) == 2
    assert len(everything) == 3
    assert limited == everything[:2]


def test_update_status_results(with_store):
    async def _updates(store):
        order = await store.create_order(_payload())
        results = [
            await store.update_status(order.id, "preparing"),
            await store.update_status(order.id + 100, "completed"),
            await store.update_status(order.id, "burnt", strict=True),
        ]
        return results, await store.get_order(order.id)

    results, order = with_store(_updates)

    assert results == [UpdateResult.UPDATED, UpdateResult.NOT_FOUND, UpdateResult.INVALID_STATUS]
    assert order.status == "preparing"


def test_lenient_update_writes_unknown_status(with_store):
    async def _update(store):
        order = await store.create_order(_payload())
        result = await store.update_status(order.id, "on hold")
        return result, await store.get_order(order.id)

    result, order = with_store(_update)

    assert result == UpdateResult.UPDATED
    assert order.status == "on hold"


def test_corrupt_items_blob_reads_as_empty(with_store):
    async def _corrupt(store):
        store.session.add(Order(business_id="default", order_number="#000001", items="not json"))
        store.session.add(Order(business_id="default", order_number="#000002", items='{"name": "x"}'))
        await store.session.commit()
        return await store.list_orders()

    orders = with_store(_corrupt)

    assert [o.items for o in orders] == [[], []]


def test_order_number_uses_last_six_millisecond_digits(monkeypatch):
    monkeypatch.setattr(order_store.time, "time", lambda: 1700000456.5)

    assert generate_order_number() == "#456500"


def test_malformed_stored_items_are_dropped(with_store):
    async def _corrupt(store):
        store.session.add(Order(
            business_id="default",
            order_number="#000003",
            items='[{"qty": 1}, {"name": "x", "quantity": 0}, {"name": "Fries", "quantity": 2}, 7]',
        ))
        store.session.add(Order(business_id="default", order_number="#000004", items='[{"qty": 1}]'))
        await store.session.commit()
        return await store.list_orders()

    orders = with_store(_corrupt)

    assert {o.order_number: [(i.name, i.quantity) for i in o.items] for o in orders} == {
        "#000003": [("Fries", 2)],
        "#000004": [],
    }


def test_non_numeric_id_is_not_found(with_store):
    async def _update(store):
        order = await store.create_order(_payload())
        return (
            await store.update_status("abc", "completed"),
            await store.update_status("abc", "burnt", strict=True),
            await store.update_status(str(order.id), "preparing"),
        )

    assert with_store(_update) == (
        UpdateResult.NOT_FOUND,
        UpdateResult.INVALID_STATUS,
        UpdateResult.UPDATED,
    )
