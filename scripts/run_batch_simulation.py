"""
End-to-end simulation over a generated dataset:
restaurants + menu + orders -> courier batches -> loyalty accrual -> analytics.

Run scripts/generate_mock_data.py first.
"""
import os
from datetime import datetime, timedelta
from typing import Dict, List, Tuple

import pandas as pd

from dispatch import Dispatcher
from orders.batching import peak_batching_policy
from orders.models import UserRole
from pricing import PricingContext
from storage import InMemoryStore


def load_orders(filepath="mock_orders.csv", limit=120) -> pd.DataFrame:
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    absolute_path = filepath if os.path.isabs(filepath) else os.path.join(base_dir, filepath)
    df = pd.read_csv(absolute_path, parse_dates=["created_at"])
    return df.head(limit)


def seed(dispatcher: Dispatcher, df: pd.DataFrame) -> Dict[str, Tuple[str, List[str], List[str]]]:
    """
    Creates one owner + restaurant + menu item per restaurant name and one
    customer per customer ref, then the orders.
    Returns restaurant id -> (depot, dropoff stops, order ids).
    """
    owner = dispatcher.create_user("owner", "owner@example.com", "+263771000000", UserRole.RESTAURANT_OWNER)

    restaurant_ids: Dict[str, str] = {}
    menu_ids: Dict[str, str] = {}
    depots: Dict[str, str] = {}
    for name, group in df.groupby("restaurant_name"):
        first = group.iloc[0]
        restaurant = dispatcher.create_restaurant(owner.id, name, "Generated", f"{first.restaurant_lat},{first.restaurant_lon}")
        item = dispatcher.create_menu_item(restaurant.id, "Combo", "Generated", first.item_price, 1.0)
        restaurant_ids[name] = restaurant.id
        menu_ids[name] = item.id
        depots[restaurant.id] = f"{first.restaurant_lat},{first.restaurant_lon}"

    customer_ids: Dict[str, str] = {}
    for index, ref in enumerate(sorted(df["customer_ref"].unique())):
        customer = dispatcher.create_user(ref, f"{ref}@example.com", f"+26377{index:07d}", UserRole.CUSTOMER)
        customer_ids[ref] = customer.id

    stops: Dict[str, List[str]] = {restaurant_id: [] for restaurant_id in restaurant_ids.values()}
    order_ids: Dict[str, List[str]] = {restaurant_id: [] for restaurant_id in restaurant_ids.values()}
    for row in df.itertuples():
        restaurant_id = restaurant_ids[row.restaurant_name]
        order = dispatcher.create_order(
            customer_ids[row.customer_ref],
            restaurant_id,
            [menu_ids[row.restaurant_name]] * int(row.items_count),
        )
        stops[restaurant_id].append(f"{row.dropoff_lat},{row.dropoff_lon}")
        order_ids[restaurant_id].append(order.id)

    return {restaurant_id: (depots[restaurant_id], stops[restaurant_id], order_ids[restaurant_id]) for restaurant_id in stops}


def run_simulation(batch_size: int = 4):
    print("=== STARTING END-TO-END BATCH SIMULATION ===")

    df = load_orders()
    policy = peak_batching_policy()
    # the depot takes one of the stops
    batch_size = min(batch_size, policy.max_stops - 1)
    dispatcher = Dispatcher(InMemoryStore(), batching_policy=policy)
    plan = seed(dispatcher, df)
    print(f"Loaded {len(df)} orders across {len(plan)} restaurants.\n")

    couriers = [
        dispatcher.create_user(f"courier{i}", f"courier{i}@example.com", f"+26378{i:07d}", UserRole.DELIVERY_PERSON)
        for i in range(5)
    ]

    batches = []
    for index, (restaurant_id, (depot, dropoffs, order_ids)) in enumerate(plan.items()):
        for start in range(0, len(order_ids), batch_size):
            courier = couriers[(index + start) % len(couriers)]
            batch = dispatcher.create_batch(
                courier.id,
                order_ids[start:start + batch_size],
                [depot] + dropoffs[start:start + batch_size],
            )
            batches.append(batch)
            print(f"Batch {batch.id[:8]} -> {len(batch.order_ids)} orders, {batch.total_distance:.2f} km")

    for order in dispatcher.list_orders():
        dispatcher.earn_points(order.customer_id, order.id)

    tiers = pd.Series([program.tier.value for program in dispatcher.list_loyalty_programs()]).value_counts()
    print("\n--- Loyalty Tiers ---")
    for tier, count in tiers.items():
        print(f"  {tier}: {count}")

    restaurant_id = next(iter(plan))
    quote = dispatcher.quote_price(restaurant_id, 20, PricingContext(time=datetime.utcnow().time()))
    print(f"\nQuote at restaurant {restaurant_id[:8]}: {quote.price}")

    now = datetime.utcnow()
    analytics = dispatcher.restaurant_analytics(restaurant_id, now - timedelta(days=2), now)
    print(f"Orders in window: {analytics.order_count}, average value {analytics.average_order_value}")

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Batches created: {len(batches)}")
    print(f"Total distance: {sum(batch.total_distance for batch in batches):.2f} km")


if __name__ == "__main__":
    run_simulation()
