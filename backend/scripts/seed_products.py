#!/usr/bin/env python3
"""
Seed the products table with sample catalogue entries, or with entries read
from a JSON file (a list of products, or an object with an "items" list).

Entries go through the admin service, so the same validation and coercion
rules apply as for the admin panel.

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --file catalogue.json --reset
"""
import argparse
import json
import logging
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import SessionLocal, init_db
from storefront.logging_config import configure_logging
from storefront.services.admin_service import AdminProductService
from storefront.services.errors import CatalogError

log = logging.getLogger("seed_products")

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Earbuds",
        "description": "Compact earbuds with high-fidelity sound",
        "price": 89.99,
        "image_url": "https://images.unsplash.com/photo-1585386959984-a415522c1f66?w=300&h=300&fit=crop&crop=center",
        "category": "Electronics",
        "stock_quantity": 30,
    },
    {
        "name": "Yoga Mat",
        "description": "Eco-friendly non-slip yoga mat",
        "price": 39.99,
        "image_url": "https://images.unsplash.com/photo-1571019613912-76c54cebb3a2?w=300&h=300&fit=crop&crop=center",
        "category": "Sports",
        "stock_quantity": 50,
    },
    {
        "name": "Stainless Steel Water Bottle",
        "description": "Keeps drinks cold for 24 hours",
        "price": 24.99,
        "image_url": "https://images.unsplash.com/photo-1526401485004-2fa5b4b5d237?w=300&h=300&fit=crop&crop=center",
        "category": "Sports",
        "stock_quantity": 80,
    },
]


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return data["items"]
    if isinstance(data, list):
        return data
    raise RuntimeError(f"{path} must hold a list of products or an object with 'items'")


def seed(entries, session_factory=SessionLocal) -> int:
    db = session_factory()
    svc = AdminProductService(db)
    created = 0
    try:
        for entry in entries:
            try:
                product = svc.create_product(entry)
            except CatalogError as e:
                name = entry.get("name") if isinstance(entry, dict) else entry
                log.warning("Skipping %r: %s", name, e)
                continue
            created += 1
            log.info("Seeded %s (%s)", product.name, product.id)
    finally:
        db.close()
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a product JSON file; defaults to the built-in samples")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate tables before seeding")
    args = parser.parse_args()

    configure_logging()
    if args.file and not os.path.exists(args.file):
        log.error("File not found: %s", args.file)
        sys.exit(1)

    init_db(reset=args.reset)
    entries = load_entries(args.file) if args.file else SAMPLE_PRODUCTS
    count = seed(entries)
    log.info("Seeded products: %d", count)
