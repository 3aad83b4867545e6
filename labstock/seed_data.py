#!/usr/bin/env python3
"""
seed_data.py

Generates a realistic lab-consumables dataset as CSVs under a local folder
(default: the configured data_dir) that CsvStockStore can read.

Files:
- products.csv, observations.csv, orders.csv, settings.csv

Each product is counted roughly weekly. Between counts stock drains at a
product-specific rate with some noise, and a resupply lands whenever the
shelf runs low, so histories contain both consumption and restocking jumps.

Run:
  python -m labstock.seed_data --products 12 --weeks 12
"""

from __future__ import annotations

import argparse
import csv
import os
import random
import sys
import uuid
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from labstock.config import get_config
from labstock.data.backends.csv_backend import (
    OBSERVATION_COLUMNS,
    OBSERVATIONS_FILE,
    ORDER_COLUMNS,
    ORDERS_FILE,
    PRODUCT_COLUMNS,
    PRODUCTS_FILE,
    SETTINGS_FILE,
)

# -----------------------------
# Catalog & helper structures
# -----------------------------

CONSUMABLES = [
    ("Nitrile gloves (M, box of 100)", 10),
    ("Nitrile gloves (L, box of 100)", 10),
    ("Pipette tips 200 uL (rack)", 20),
    ("Pipette tips 1000 uL (rack)", 20),
    ("Kimwipes (box)", 12),
    ("Weighing paper (pack)", 5),
    ("Syringe filters 0.45 um (pack of 50)", 4),
    ("Centrifuge tubes 15 mL (bag)", 6),
    ("Centrifuge tubes 50 mL (bag)", 6),
    ("TLC plates silica (box)", 2),
    ("Acetone (2.5 L)", 4),
    ("Ethanol 99.5% (500 mL)", 6),
    ("Parafilm (roll)", 2),
    ("Glass vials 4 mL (pack of 100)", 3),
    ("Aluminium foil (roll)", 3),
    ("Lab tissue wipes (case)", 2),
]

CHECKERS = ["Aoki", "Sato", "Nguyen", "Martin", "Okafor"]


# -----------------------------
# Core generators
# -----------------------------

def gen_products(n: int) -> List[Dict]:
    products = []
    for i in range(n):
        name, default_qty = CONSUMABLES[i % len(CONSUMABLES)]
        if i >= len(CONSUMABLES):
            name = f"{name} #{i // len(CONSUMABLES) + 1}"
        products.append({
            "product_id": f"P{i + 1:03d}",
            "name": name,
            "url": "",
            "default_order_qty": default_qty,
            "is_active": random.random() > 0.08,
        })
    return products


def gen_observations(products: List[Dict], start_d: date, weeks: int) -> List[Dict]:
    observations: List[Dict] = []
    for p in products:
        capacity = p["default_order_qty"] * random.randint(2, 4)
        daily_rate = capacity / random.uniform(20, 60)
        drift = random.choice([-0.01, 0.0, 0.0, 0.015])  # per-week change in rate
        stock = capacity
        count_date = start_d
        for week in range(weeks):
            counted_at = datetime.combine(count_date, time(9, 0, 0)) + timedelta(minutes=random.randint(0, 240))
            observations.append({
                "observation_id": uuid.uuid4().hex,
                "product_id": p["product_id"],
                "stock_count": int(stock),
                "observed_at": counted_at.isoformat(timespec="seconds"),
                "observer_name": random.choice(CHECKERS),
            })
            gap = random.choice([6, 7, 7, 7, 8])
            rate = max(0.0, daily_rate * (1 + drift * week) * random.uniform(0.7, 1.3))
            stock = max(0.0, stock - rate * gap)
            if stock <= p["default_order_qty"] * 0.3:
                stock += p["default_order_qty"]  # resupply
            count_date += timedelta(days=gap)
    return observations


def gen_settings(config) -> List[Dict]:
    return [
        {"key": "consumption_calc_days", "value": config.default_consumption_calc_days},
        {"key": "reorder_threshold_days", "value": config.default_reorder_threshold_days},
        {"key": "lead_time_days", "value": config.default_lead_time_days},
    ]


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate fake lab consumables data to CSVs.")
    parser.add_argument("--products", type=int, default=config.default_seed_products)
    parser.add_argument("--weeks", type=int, default=config.default_seed_weeks, help="Number of weekly counts per product.")
    parser.add_argument("--start-date", type=str, default=None, help="YYYY-MM-DD (defaults to today - weeks)")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)

    if args.products < 1 or args.weeks < 1:
        print("--products and --weeks must be at least 1", file=sys.stderr)
        return 2

    random.seed(args.seed)

    outdir = args.output_dir
    os.makedirs(outdir, exist_ok=True)

    files = {
        "products": os.path.join(outdir, PRODUCTS_FILE),
        "observations": os.path.join(outdir, OBSERVATIONS_FILE),
        "orders": os.path.join(outdir, ORDERS_FILE),
        "settings": os.path.join(outdir, SETTINGS_FILE),
    }
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    if args.start_date:
        start_d = date.fromisoformat(args.start_date)
    else:
        start_d = date.today() - timedelta(weeks=args.weeks)

    products = gen_products(args.products)
    observations = gen_observations(products, start_d, args.weeks)

    write_csv(files["products"], products, PRODUCT_COLUMNS)
    write_csv(files["observations"], observations, OBSERVATION_COLUMNS)
    write_csv(files["orders"], [], ORDER_COLUMNS)
    write_csv(files["settings"], gen_settings(config), ["key", "value"])

    print(f"Generated data in {outdir}")
    print(f" products: {len(products)} | observations: {len(observations)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
