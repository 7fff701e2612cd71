"""Generate fake shopper purchase history for demos and testing.

This module creates synthetic purchase records over the store's default
inventory. The resulting CSV can seed the recommendation engine through
``SUPERMARKET_HISTORY_CSV`` or ``scripts/shop_cli.py --history-csv``.

Example:
    Run the script directly to generate default data:
        $ python scripts/generate_fake_data.py

    Or import and use programmatically:
        from scripts.generate_fake_data import generate_fake_purchases
        df = generate_fake_purchases(num_users=20, num_purchases=200)
"""

import argparse
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from supermarket.catalog.inventory import DEFAULT_INVENTORY

# Default configuration constants
DEFAULT_NUM_USERS = 20
DEFAULT_NUM_PURCHASES = 200
DEFAULT_DAYS_BACK = 30
SECONDS_PER_DAY = 86400


def generate_fake_purchases(
    num_users: int = DEFAULT_NUM_USERS,
    num_purchases: int = DEFAULT_NUM_PURCHASES,
    product_names: Optional[Sequence[str]] = None,
    end_date: Optional[datetime] = None,
    random_seed: Optional[int] = None,
) -> pd.DataFrame:
    """Generate synthetic purchases for recommendation demos.

    Args:
        num_users: Number of shoppers, named ``Shopper1`` .. ``ShopperN``.
        num_purchases: Total purchase rows to generate.
        product_names: Products to draw from; defaults to the store's
            opening inventory.
        end_date: Latest timestamp; defaults to now. Timestamps spread over
            the 30 days before it.
        random_seed: Seed for reproducible output.

    Returns:
        DataFrame with ``user``, ``product`` and ``timestamp`` columns,
        sorted by timestamp.

    Raises:
        ValueError: If num_users or num_purchases is not positive, or the
            product list is empty.
    """
    if num_users <= 0 or num_purchases <= 0:
        raise ValueError("num_users and num_purchases must be positive")

    if product_names is None:
        product_names = [row[0] for row in DEFAULT_INVENTORY]
    if not product_names:
        raise ValueError("product_names must not be empty")

    rng = random.Random(random_seed)
    if end_date is None:
        end_date = datetime.now()
    start_date = end_date - timedelta(days=DEFAULT_DAYS_BACK)

    purchases = []
    for _ in range(num_purchases):
        timestamp = start_date + timedelta(
            days=rng.randrange(DEFAULT_DAYS_BACK),
            seconds=rng.randrange(SECONDS_PER_DAY),
        )
        purchases.append({
            "user": f"Shopper{rng.randint(1, num_users)}",
            "product": rng.choice(list(product_names)),
            "timestamp": timestamp,
        })

    df = pd.DataFrame(purchases)
    df = df.sort_values("timestamp").reset_index(drop=True)

    return df


def main() -> None:
    """Write fake purchases to a CSV file and print a short summary."""
    parser = argparse.ArgumentParser(description="Generate fake purchase history")
    parser.add_argument("--users", type=int, default=DEFAULT_NUM_USERS)
    parser.add_argument("--purchases", type=int, default=DEFAULT_NUM_PURCHASES)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--output",
        type=str,
        default=str(project_root / "data" / "fake_purchases.csv"),
        help="Output CSV path (default: data/fake_purchases.csv)",
    )
    args = parser.parse_args()

    print(f"Generating {args.purchases} fake purchases for {args.users} shoppers...")

    try:
        df = generate_fake_purchases(
            num_users=args.users,
            num_purchases=args.purchases,
            random_seed=args.seed,
        )
    except ValueError as e:
        print(f"Error generating data: {e}")
        sys.exit(1)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)

    print(f"\nData generated successfully!")
    print(f"Saved to: {output_path}")
    print(f"\nData summary:")
    print(f"  Total purchases: {len(df)}")
    print(f"  Unique shoppers: {df['user'].nunique()}")
    print(f"  Unique products: {df['product'].nunique()}")
    print(f"\nTop products:")
    print(df["product"].value_counts().head(5).to_string())


if __name__ == "__main__":
    main()
