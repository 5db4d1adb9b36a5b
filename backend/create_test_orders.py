#!/usr/bin/env python3
"""Place sample orders against a running partner API"""
import sys
import httpx
import asyncio
import random

SAMPLE_ITEMS = [
    {"name": "Paneer Tikka", "price": 180},
    {"name": "Chicken 65", "price": 220},
    {"name": "Butter Chicken", "price": 320},
    {"name": "Dal Makhani", "price": 240},
    {"name": "Chicken Biryani", "price": 280},
    {"name": "Butter Naan", "price": 55},
    {"name": "Garlic Naan", "price": 65},
    {"name": "Mango Lassi", "price": 80},
    {"name": "Masala Chai", "price": 40},
]

CUSTOMERS = ["Yug Patel", "Aksh Maheshwari", "Nayan Chellani", "Riya Shah", "Kabir Mehta"]


def build_order() -> dict:
    picks = random.sample(SAMPLE_ITEMS, k=random.randint(1, 3))
    items = [{**item, "quantity": random.randint(1, 3)} for item in picks]
    return {
        "customer_name": random.choice(CUSTOMERS),
        "items": items,
        "total": sum(i["price"] * i["quantity"] for i in items),
    }


async def create_test_orders(base_url: str, count: int, restaurant_id: str = None):
    """Create test orders through POST /api/orders"""
    params = {"restaurantId": restaurant_id} if restaurant_id else None
    print(f"Creating {count} test orders at {base_url}...\n")

    async with httpx.AsyncClient(base_url=base_url, timeout=30.0) as client:
        success_count = 0

        for i in range(1, count + 1):
            payload = build_order()
            try:
                resp = await client.post("/api/orders", json=payload, params=params)
            except httpx.HTTPError as e:
                print(f"  ✗ {i}. Exception: {e}")
                continue

            if resp.status_code == 200:
                order = resp.json()["data"]
                print(f"  ✓ {i}. Created: {order['order_id']} for {order['customer_name']} - ₹{payload['total']:.2f}")
                success_count += 1
            else:
                print(f"  ✗ {i}. Failed: {resp.status_code} - {resp.text[:100]}")

        print(f"\n✓ Successfully created {success_count}/{count} test orders")


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("Usage: python create_test_orders.py <base_url> [count] [restaurant_id]")
        sys.exit(1)

    count = int(sys.argv[2]) if len(sys.argv) > 2 else 10
    restaurant_id = sys.argv[3] if len(sys.argv) > 3 else None
    asyncio.run(create_test_orders(sys.argv[1], count, restaurant_id))
