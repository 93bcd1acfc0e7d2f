"""
Inventory deduction tests - recipes deducted from stock on sale.
"""
import re

import pytest

from kitchen_ops.services.inventory_service import (
    SaleData,
    SaleLine,
    process_menu_item_sale,
    process_sale_transaction,
)
from kitchen_ops.store.entity_store import INGREDIENT, MENU_ITEM, SALE


async def _stock(store, ingredient):
    return (await store.get(INGREDIENT, ingredient["id"]))["current_stock"]


# ===================== SINGLE MENU ITEM =====================


class TestMenuItemSale:

    async def test_deducts_recipe_times_quantity(self, store, seed_data):
        result = await process_menu_item_sale(store, seed_data["margherita"]["id"], 2)

        assert result.success is True
        assert result.menu_item_name == "Margherita"
        assert result.errors == []
        assert await _stock(store, seed_data["flour"]) == pytest.approx(9.5)
        assert await _stock(store, seed_data["cheese"]) == pytest.approx(1.7)

        flour_entry = result.deduction_log[0]
        assert flour_entry.ingredient_name == "Flour"
        assert flour_entry.quantity_deducted == pytest.approx(0.5)
        assert flour_entry.stock_before == pytest.approx(10)
        assert flour_entry.stock_after == pytest.approx(9.5)

    async def test_insufficient_stock_skips_only_that_ingredient(self, store, seed_data):
        result = await process_menu_item_sale(store, seed_data["margherita"]["id"], 20)

        assert result.success is False
        assert len(result.errors) == 1
        assert result.errors[0].startswith('Insufficient stock for "Mozzarella"')
        assert await _stock(store, seed_data["flour"]) == pytest.approx(5)
        assert await _stock(store, seed_data["cheese"]) == pytest.approx(2)

    async def test_no_recipe(self, store, seed_data):
        result = await process_menu_item_sale(store, seed_data["salad"]["id"])

        assert result.success is False
        assert result.error == (
            'Menu item "Side Salad" has no recipe/ingredients defined. Cannot process sale.'
        )

    async def test_unknown_menu_item(self, store, seed_data):
        result = await process_menu_item_sale(store, "nope")

        assert result.success is False
        assert result.error == "Menu item nope not found"

    async def test_recipe_line_problems_reported(self, memory_store):
        butter = memory_store.seed(INGREDIENT, name="Butter", unit="kg", current_stock=1)
        item = memory_store.seed(MENU_ITEM, name="Toast", ingredients=[
            {"ingredient_name": "Bread", "quantity": 2, "unit": "slice"},
            {"ingredient_id": "gone", "ingredient_name": "Jam", "quantity": 0.02, "unit": "kg"},
            {"ingredient_id": butter["id"], "ingredient_name": "Butter", "quantity": 0.01, "unit": "kg"},
        ])

        result = await process_menu_item_sale(memory_store, item["id"])

        assert result.success is False
        assert result.errors == [
            'Ingredient "Bread" has no ingredient_id. Skipping deduction.',
            'Ingredient "Jam" (ID: gone) not found in inventory. Cannot deduct stock.',
        ]
        assert [e.ingredient_name for e in result.deduction_log] == ["Butter"]
        assert memory_store.records[INGREDIENT][0]["current_stock"] == pytest.approx(0.99)


# ===================== SALE TRANSACTION =====================


class TestSaleTransaction:

    async def test_priced_sale_recorded(self, store, seed_data):
        sale_data = SaleData(
            items=[
                SaleLine(menu_item_id=seed_data["margherita"]["id"], quantity=1),
                SaleLine(menu_item_id=seed_data["garlic_bread"]["id"], quantity=2),
            ],
            staff_email="till@x.com",
            sale_type="takeaway",
        )

        result = await process_sale_transaction(store, sale_data)

        assert result.success is True
        assert result.warnings is None
        sale = result.sale
        assert re.fullmatch(r"SALE-\d+-[A-Z0-9]{7}", sale["sale_number"])
        assert sale["sale_type"] == "takeaway"
        assert sale["subtotal"] == pytest.approx(20)
        assert sale["total_cost"] == pytest.approx(5)
        assert sale["gross_profit"] == pytest.approx(15)
        assert sale["gp_percentage"] == pytest.approx(75)
        assert sale["stock_deducted"] is True
        assert len(sale["deduction_log"]) == 3
        assert await _stock(store, seed_data["flour"]) == pytest.approx(9.55)

        saved = await store.list(SALE)
        assert [s["id"] for s in saved] == [sale["id"]]

    async def test_failed_line_still_records_sale(self, store, seed_data):
        sale_data = SaleData(items=[
            SaleLine(menu_item_id=seed_data["garlic_bread"]["id"]),
            SaleLine(menu_item_id="nope", quantity=3),
        ])

        result = await process_sale_transaction(store, sale_data)

        assert result.success is False
        assert result.warnings == "Some items had stock deduction errors. Check deduction_log."
        assert result.sale["stock_deducted"] is False
        assert result.sale["items"][1]["menu_item_name"] == "Unknown Item"
        assert result.sale["subtotal"] == pytest.approx(5)
        assert result.deduction_results[1].error == "Menu item nope not found"

    async def test_empty_sale_rejected(self, memory_store):
        result = await process_sale_transaction(memory_store, SaleData(items=[]))

        assert result.success is False
        assert result.error == "Sale must contain at least one item"
        assert memory_store.writes == []
