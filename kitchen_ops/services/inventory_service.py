"""
Inventory deduction engine.

Sale of menu item -> recipe -> ingredients -> stock deduction -> logged transaction.
Every sale goes through process_menu_item_sale so stock levels have a single
writer.
"""
import random
import string
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from kitchen_ops.store.entity_store import EntityStore, MENU_ITEM, INGREDIENT, SALE
from kitchen_ops.utils.helpers import epoch_millis
from kitchen_ops.utils.logger import get_logger

logger = get_logger(__name__, tag="INVENTORY")


class DeductionEntry(BaseModel):
    ingredient_id: str
    ingredient_name: Optional[str] = None
    quantity_deducted: float
    unit: Optional[str] = None
    stock_before: float
    stock_after: float


class MenuItemSaleResult(BaseModel):
    success: bool
    menu_item_name: Optional[str] = None
    quantity_sold: Optional[float] = None
    deduction_log: List[DeductionEntry] = []
    errors: List[str] = []
    error: Optional[str] = None
    timestamp: datetime


class SaleLine(BaseModel):
    menu_item_id: str
    quantity: float = 1


class SaleData(BaseModel):
    items: List[SaleLine] = []
    staff_email: Optional[str] = None
    staff_name: Optional[str] = None
    sale_type: str = "dine_in"


class SaleTransactionResult(BaseModel):
    success: bool
    sale: Optional[Dict[str, Any]] = None
    deduction_results: List[MenuItemSaleResult] = []
    warnings: Optional[str] = None
    error: Optional[str] = None


def _sale_number(now: datetime) -> str:
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=7))
    return f"SALE-{epoch_millis(now)}-{suffix}"


async def _get_menu_item(store: EntityStore, menu_item_id: str) -> Optional[Dict[str, Any]]:
    matches = await store.filter(MENU_ITEM, {"id": menu_item_id}, limit=1)
    return matches[0] if matches else None


async def process_menu_item_sale(
    store: EntityStore,
    menu_item_id: str,
    quantity: float = 1,
) -> MenuItemSaleResult:
    """
    Deduct one menu item's recipe from stock.

    Ingredient lines that cannot be deducted (no id, unknown ingredient,
    insufficient stock) are skipped and reported in errors; the rest are
    still deducted. A missing menu item or recipe fails the whole sale.
    """
    try:
        menu_item = await _get_menu_item(store, menu_item_id)
        if not menu_item:
            raise ValueError(f"Menu item {menu_item_id} not found")

        recipe = menu_item.get("ingredients") or []
        if not recipe:
            raise ValueError(
                f'Menu item "{menu_item.get("name")}" has no recipe/ingredients defined. '
                "Cannot process sale."
            )

        deduction_log: List[DeductionEntry] = []
        errors: List[str] = []

        for line in recipe:
            ingredient_id = line.get("ingredient_id")
            ingredient_name = line.get("ingredient_name")
            unit = line.get("unit")

            if not ingredient_id:
                errors.append(f'Ingredient "{ingredient_name}" has no ingredient_id. Skipping deduction.')
                continue

            to_deduct = (line.get("quantity") or 0) * quantity

            ingredient = await store.get(INGREDIENT, ingredient_id)
            if not ingredient:
                errors.append(
                    f'Ingredient "{ingredient_name}" (ID: {ingredient_id}) not found in inventory. '
                    "Cannot deduct stock."
                )
                continue

            current_stock = ingredient.get("current_stock") or 0
            if current_stock < to_deduct:
                errors.append(
                    f'Insufficient stock for "{ingredient_name}". '
                    f"Required: {to_deduct} {unit}, Available: {current_stock} {unit}"
                )
                continue

            new_stock = current_stock - to_deduct
            await store.update(INGREDIENT, ingredient_id, {"current_stock": new_stock})

            deduction_log.append(DeductionEntry(
                ingredient_id=ingredient_id,
                ingredient_name=ingredient_name,
                quantity_deducted=to_deduct,
                unit=unit,
                stock_before=current_stock,
                stock_after=new_stock,
            ))

        if errors:
            logger.warning(f"{menu_item.get('name')}: {len(errors)} ingredient(s) not deducted")

        return MenuItemSaleResult(
            success=not errors,
            menu_item_name=menu_item.get("name"),
            quantity_sold=quantity,
            deduction_log=deduction_log,
            errors=errors,
            timestamp=datetime.utcnow(),
        )
    except Exception as e:
        logger.error(f"Sale of {menu_item_id} failed: {e}")
        return MenuItemSaleResult(success=False, error=str(e), timestamp=datetime.utcnow())


async def process_sale_transaction(store: EntityStore, sale_data: SaleData) -> SaleTransactionResult:
    """Deduct stock for every line of a sale, then record the priced Sale"""
    try:
        if not sale_data.items:
            raise ValueError("Sale must contain at least one item")

        now = datetime.utcnow()
        deduction_results: List[MenuItemSaleResult] = []
        all_deductions: List[Dict[str, Any]] = []
        has_errors = False

        for line in sale_data.items:
            result = await process_menu_item_sale(store, line.menu_item_id, line.quantity)
            deduction_results.append(result)
            if result.success:
                all_deductions.extend(entry.model_dump() for entry in result.deduction_log)
            else:
                has_errors = True

        subtotal = 0.0
        total_cost = 0.0
        processed_items = []
        for line in sale_data.items:
            menu_item = await _get_menu_item(store, line.menu_item_id) or {}
            unit_price = menu_item.get("price") or 0
            unit_cost = menu_item.get("cost") or 0
            line_total = unit_price * line.quantity
            line_cost = unit_cost * line.quantity
            subtotal += line_total
            total_cost += line_cost
            processed_items.append({
                "menu_item_id": line.menu_item_id,
                "menu_item_name": menu_item.get("name") or "Unknown Item",
                "quantity": line.quantity,
                "unit_price": unit_price,
                "unit_cost": unit_cost,
                "total_price": line_total,
                "total_cost": line_cost,
            })

        gross_profit = subtotal - total_cost
        gp_percentage = (gross_profit / subtotal) * 100 if subtotal > 0 else 0

        sale = await store.create(SALE, {
            "sale_number": _sale_number(now),
            "sale_type": sale_data.sale_type,
            "items": processed_items,
            "subtotal": subtotal,
            "total_price": subtotal,
            "total_cost": total_cost,
            "gross_profit": gross_profit,
            "gp_percentage": gp_percentage,
            "stock_deducted": not has_errors,
            "deduction_log": all_deductions,
            "staff_email": sale_data.staff_email,
            "staff_name": sale_data.staff_name,
            "sale_date": now,
        })
        logger.info(f"Sale {sale['sale_number']} recorded: {len(processed_items)} line(s), total {subtotal:.2f}")

        return SaleTransactionResult(
            success=not has_errors,
            sale=sale,
            deduction_results=deduction_results,
            warnings="Some items had stock deduction errors. Check deduction_log." if has_errors else None,
        )
    except Exception as e:
        logger.error(f"Sale transaction failed: {e}")
        return SaleTransactionResult(success=False, error=str(e))
