#!/usr/bin/env python3
"""Seed demo data for screenshots.

Clears the configured pantry database and fills it with a representative
inventory: the default storage areas, a custom one, some opened items and
some items with expiry dates.

Usage:
    # From project root:
    python scripts/seed_demo_data.py

    # Or against another database:
    DATABASE_URL=sqlite:///./demo.db python scripts/seed_demo_data.py
"""

import os
import sys
from datetime import UTC, datetime, timedelta

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pantry.database import SessionLocal, init_db
from pantry.models.enums import AreaColor, AreaIcon
from pantry.services.pantry_store import PantryStore
from pantry.services.persistence import SqlPersistence


def seed_demo_data():
    """Seed the demo database with representative data."""
    init_db()
    store = PantryStore(SqlPersistence(SessionLocal))
    store.load()

    if store.list_items():
        print("Demo data already exists. Clearing and re-seeding...")
    store.clear()

    # Loading an empty database seeds the default areas
    store.load()
    if store.last_error:
        raise RuntimeError(store.last_error)

    # Same UTC day the store uses for opened expiry dates
    today = datetime.now(UTC).date()

    print("Creating storage areas...")
    basement = store.add_area("Basement Shelf", AreaIcon.BOX, AreaColor.VIOLET)

    print("Adding items...")
    milk = store.add_item("Milk", 2, "fridge", today + timedelta(days=8))
    store.add_item("Eggs", 12, "fridge", today + timedelta(days=20))
    yogurt = store.add_item("Greek Yogurt", 4, "fridge", today + timedelta(days=10))
    store.add_item("Butter", 1, "fridge")
    store.add_item("Spinach", 1, "fridge", today - timedelta(days=1))

    store.add_item("Frozen Peas", 2, "freezer")
    store.add_item("Chicken Thighs", 3, "freezer", today + timedelta(days=90))

    store.add_item("Rice", 1, "pantry")
    store.add_item("Pasta", 4, "pantry")
    store.add_item("Canned Tomatoes", 6, "pantry", today + timedelta(days=400))

    store.add_item("Paper Towels", 8, basement.id)
    store.add_item("Sparkling Water", 12, basement.id)

    print("Opening some items...")
    store.open_item(milk.id, 1)
    store.open_item(yogurt.id, 4)

    if store.last_error:
        raise RuntimeError(store.last_error)
    print("Demo data seeded successfully!")


if __name__ == "__main__":
    seed_demo_data()
