"""
Database setup script - creates tables and seeds a starter kitchen
"""
import asyncio

from kitchen_ops.database import AsyncSessionLocal, create_tables
from kitchen_ops.store.entity_store import (
    CRITICAL_CONTROL_POINT, HAZARD, INGREDIENT, MENU_ITEM, ASSET,
)
from kitchen_ops.store.sqlalchemy_store import SqlAlchemyEntityStore

STARTER_CCPS = [
    {
        "name": "Cooking core temperature",
        "stage": "cooking",
        "monitoring_parameter": "Core temperature",
        "critical_limit": "75",
        "unit": "celsius",
        "check_frequency": "Every batch",
        "monitoring_method": "Calibrated probe thermometer",
        "responsible_role": "Chef de partie",
    },
    {
        "name": "Chilled storage",
        "stage": "storage",
        "monitoring_parameter": "Fridge air temperature",
        "critical_limit": "5",
        "unit": "celsius",
        "check_frequency": "Twice daily",
        "monitoring_method": "Fridge display and probe check",
        "responsible_role": "Kitchen porter",
    },
    {
        "name": "Hot holding",
        "stage": "holding",
        "monitoring_parameter": "Food temperature",
        "critical_limit": "63",
        "unit": "celsius",
        "check_frequency": "Every 2 hours",
        "monitoring_method": "Probe thermometer",
        "responsible_role": "Sous chef",
    },
]

STARTER_HAZARDS = [
    {"type": "biological", "description": "Salmonella in undercooked poultry", "severity": "high"},
    {"type": "chemical", "description": "Allergen transfer from shared fryer oil", "severity": "high"},
    {"type": "physical", "description": "Metal fragments from worn can opener", "severity": "medium"},
]

STARTER_ASSETS = [
    {"name": "Walk-in fridge", "category": "fridge", "location_id": "default"},
    {"name": "Combi oven", "category": "oven", "location_id": "default"},
    {"name": "Probe thermometer #1", "category": "probe", "location_id": "default"},
]


async def setup_database():
    """Create tables and seed initial data"""
    print("Creating database tables...")
    await create_tables()
    print("Tables created")

    async with AsyncSessionLocal() as session:
        store = SqlAlchemyEntityStore(session)

        if await store.list(CRITICAL_CONTROL_POINT, limit=1):
            print("Data already present, skipping seed")
            return

        for ccp in STARTER_CCPS:
            await store.create(CRITICAL_CONTROL_POINT, ccp)
        for hazard in STARTER_HAZARDS:
            await store.create(HAZARD, hazard)
        for asset in STARTER_ASSETS:
            await store.create(ASSET, asset)

        chicken = await store.create(INGREDIENT, {"name": "Chicken Breast", "unit": "kg", "current_stock": 20})
        rice = await store.create(INGREDIENT, {"name": "Rice", "unit": "kg", "current_stock": 25})
        await store.create(MENU_ITEM, {
            "name": "Chicken & Rice Bowl",
            "category": "mains",
            "price": 12.5,
            "cost": 3.8,
            "ingredients": [
                {"ingredient_id": chicken["id"], "ingredient_name": "Chicken Breast", "quantity": 0.18, "unit": "kg"},
                {"ingredient_id": rice["id"], "ingredient_name": "Rice", "quantity": 0.12, "unit": "kg"},
            ],
        })
        print("Seed data created")

    print("\nDatabase setup complete!")


if __name__ == "__main__":
    asyncio.run(setup_database())
