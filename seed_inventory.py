"""
Seed Mock Data for the Asset Inventory API
==========================================
Following the natural data flow of the application:

1. ASSETS - Household and office items are registered
2. COMPONENTS - Parts are attached to an asset
3. NESTED COMPONENTS - Sub-parts are attached to a component

Run: python seed_inventory.py [--reset]
"""

import argparse
import asyncio

from api.assets import db_manager as assets
from api.components import db_manager as components
from config import settings
from core.entities import AssetRecord, ComponentRecord, Warranty
from db import AsyncSessionLocal, engine
from db_base import Base

# Import all models to register them with Base.metadata
import db_models  # noqa: F401


# =============================================================================
# STEP 1: ASSETS
# =============================================================================

ASSETS = [
    {
        "name": "Workstation",
        "manufacturer": "Dell",
        "model_number": "Precision 3660",
        "serial_number": "DL-3660-0001",
        "purchase_date": "2024-03-12",
        "price": 1899.0,
        "tags": ["office", "computer"],
        "warranty": {"scope": "Parts and labour", "expiration_date": "2027-03-12"},
    },
    {
        "name": "Espresso Machine",
        "manufacturer": "Breville",
        "model_number": "BES870XL",
        "purchase_date": "2023-11-02",
        "price": 599.95,
        "tags": ["kitchen"],
        "warranty": {"scope": "Limited", "is_lifetime": False, "expiration_date": "2025-11-02"},
    },
]


# =============================================================================
# STEP 2 and 3: COMPONENTS (keyed by the asset name they belong to)
# =============================================================================
# Each entry may list its own nested components under "children".

COMPONENTS = {
    "Workstation": [
        {
            "name": "Graphics Card",
            "manufacturer": "NVIDIA",
            "model_number": "RTX A2000",
            "purchase_price": 449.0,
            "children": [
                {"name": "Cooling Fan", "manufacturer": "Noctua", "purchase_price": 24.9},
            ],
        },
        {"name": "Power Supply", "manufacturer": "Seasonic", "purchase_price": 119.0},
    ],
    "Espresso Machine": [
        {"name": "Grinder Burr Set", "purchase_price": 39.0},
    ],
}


async def reset_database():
    """Drop all tables and recreate them."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    print("Database reset complete")


async def _create_components(db, asset_id, entries, parent_sub_id=None):
    created = 0
    for entry in entries:
        entry = dict(entry)
        children = entry.pop("children", [])
        component = await components.upsert_component(
            db,
            ComponentRecord(parent_id=asset_id, parent_sub_id=parent_sub_id, **entry),
        )
        created += 1
        created += await _create_components(db, asset_id, children, component.id)
    return created


async def seed():
    async with AsyncSessionLocal() as db:
        for entry in ASSETS:
            entry = dict(entry)
            warranty = entry.pop("warranty", None)
            asset = await assets.upsert_asset(
                db,
                AssetRecord(warranty=Warranty(**warranty) if warranty else None, **entry),
            )
            count = await _create_components(db, asset.id, COMPONENTS.get(asset.name, []))
            print(f"  {asset.name} (id={asset.id}) with {count} component(s)")


async def main(reset: bool):
    print("=" * 60)
    print("SEEDING INVENTORY")
    print("=" * 60)
    print(f"Database: {settings.DATABASE_URL}")
    if reset:
        await reset_database()
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the inventory database")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate tables first")
    args = parser.parse_args()
    asyncio.run(main(args.reset))
