import pandas as pd
import numpy as np
from datetime import datetime, timedelta

def generate_mock_orders(num_orders=300, num_restaurants=10, output_file="mock_orders.csv", seed=None):
    """
    Generates a delivery dataset for the batch simulation.
    A fixed set of restaurants (the depots) means several orders share a starting
    point, which is what a courier batch looks like in practice.
    """
    rng = np.random.default_rng(seed)

    # Center around Harare, Zimbabwe
    CENTER_LAT = -17.824858
    CENTER_LON = 31.053028

    # 1. Fixed restaurants within roughly 5km of the center
    restaurants = []
    for restaurant_index in range(num_restaurants):
        restaurants.append({
            "name": f"Restaurant {restaurant_index + 1}",
            "lat": CENTER_LAT + rng.uniform(-0.05, 0.05),
            "lon": CENTER_LON + rng.uniform(-0.05, 0.05),
        })

    data = []
    now = datetime.utcnow()

    # 2. Orders with dropoffs within roughly 5-10km of their restaurant
    for order_index in range(num_orders):
        restaurant = restaurants[rng.integers(0, num_restaurants)]

        data.append({
            "order_ref": f"o_{str(order_index + 1).zfill(6)}",
            "created_at": (now - timedelta(minutes=int(rng.integers(0, 24 * 60)))).isoformat(),
            "customer_ref": f"c_{rng.integers(1000, 1100)}",
            "restaurant_name": restaurant["name"],
            "restaurant_lat": np.round(restaurant["lat"], 6),
            "restaurant_lon": np.round(restaurant["lon"], 6),
            "dropoff_lat": np.round(restaurant["lat"] + rng.uniform(-0.08, 0.08), 6),
            "dropoff_lon": np.round(restaurant["lon"] + rng.uniform(-0.08, 0.08), 6),
            "items_count": int(rng.integers(1, 6)),
            "item_price": np.round(rng.uniform(5.0, 60.0), 2),
        })

    # 3. Save to CSV
    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_orders} orders and saved to '{output_file}'")

    print("\nTop 5 Restaurants (Batching Potential):")
    counts = df["restaurant_name"].value_counts().head(5)
    for name, count in counts.items():
        print(f"  {name}: {count} orders")

if __name__ == "__main__":
    generate_mock_orders()
