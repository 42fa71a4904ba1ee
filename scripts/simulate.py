"""
Phone Order Simulation Script

Fires a burst of phone orders at a running server, the way the voice
assistant webhook would, then walks a few of them through the kitchen
status flow.
Run from project root: python scripts/simulate.py --orders 50
"""

import asyncio
import random
import time
import argparse
import json
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:3000"
TOTAL_ORDERS = 50

# Sample data for random orders
BUSINESS_IDS = ["default", "pizza-palace", "burger-barn"]
FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
MENU_ITEMS = [
    "Pizza Margherita",
    "Pepperoni Pizza",
    "Burger",
    "Caesar Salad",
    "Garlic Bread",
    "Pasta Carbonara",
    "Tiramisu",
    "Coke",
]
MODIFICATIONS = ["no onions", "extra cheese", "well done", "gluten free", "sauce on the side"]


def generate_random_items() -> list[dict]:
    """Generate random line items."""
    items = []
    for _ in range(random.randint(1, 4)):
        items.append({
            "name": random.choice(MENU_ITEMS),
            "quantity": random.randint(1, 3),
            "modifications": random.sample(MODIFICATIONS, k=random.randint(0, 2)),
        })
    return items


def generate_order_payload() -> dict[str, Any]:
    """
    Generate a payload for POST /api/orders.

    Voice assistants often send ``items`` as a string, so a third of the
    payloads carry JSON-encoded items and a few carry free text.
    """
    items: Any = generate_random_items()
    roll = random.random()
    if roll < 0.3:
        items = json.dumps(items)
    elif roll < 0.4:
        items = "2 large pepperoni pizzas and a coke"

    return {
        "businessId": random.choice(BUSINESS_IDS),
        "customerName": random.choice(FIRST_NAMES + [None]),
        "customerPhone": f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}",
        "items": items,
        "specialInstructions": random.choice([None, "Extra napkins", "Ring doorbell", "Call on arrival"]),
        "total": round(random.uniform(8, 80), 2),
    }


async def send_order(
    client: httpx.AsyncClient,
    order_num: int
) -> dict[str, Any]:
    """Send one order."""
    payload = generate_order_payload()
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/orders",
            json=payload,
            timeout=30.0
        )
        elapsed = round(time.time() - start_time, 3)

        if response.status_code == 200:
            order = response.json()["order"]
            return {
                "order_num": order_num,
                "success": True,
                "order_id": order["id"],
                "order_number": order["orderNumber"],
                "total": order["total"],
                "time": elapsed,
            }
        return {
            "order_num": order_num,
            "success": False,
            "error": response.text[:100],
            "time": elapsed,
        }
    except httpx.HTTPError as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


async def advance_orders(client: httpx.AsyncClient, order_ids: list[int]) -> None:
    """Move orders through new -> preparing -> completed like the dashboard does."""
    for order_id in order_ids:
        for status in ("preparing", "completed"):
            response = await client.patch(
                f"{API_BASE_URL}/api/orders/{order_id}",
                json={"status": status},
            )
            print(f"   Order {order_id} -> {status}: {response.json().get('result')}")


async def run_simulation(num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Fire ``num_orders`` concurrent orders and report the results.

    Args:
        num_orders: Number of orders to simulate
    """
    print("=" * 70)
    print("📞 PHONE ORDER SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        health = await client.get(f"{API_BASE_URL}/health")
        print(f"\n🩺 Health: {health.json().get('status')} (print: {health.json().get('printMethod')})")

        tasks = [send_order(client, i + 1) for i in range(num_orders)]
        results = await asyncio.gather(*tasks)

        successful = [r for r in results if r["success"]]
        failed = [r for r in results if not r["success"]]

        if successful:
            print("\n🍳 Kitchen flow for the first 3 orders:")
            await advance_orders(client, [r["order_id"] for r in successful[:3]])

        listed = (await client.get(f"{API_BASE_URL}/api/orders")).json()

    total_time = round(time.time() - start_time, 2)

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"📋 Orders visible on dashboard: {len(listed)}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        numbers = {r["order_number"] for r in successful}
        print(f"\n📈 Average Response: {avg_time}s")
        print(f"   Distinct order numbers: {len(numbers)}/{len(successful)}")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Phone Order Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")
    asyncio.run(run_simulation(args.orders))
