"""
Inventory API endpoints - sales that deduct recipe ingredients from stock
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from kitchen_ops.services.inventory_service import (
    MenuItemSaleResult,
    SaleData,
    SaleTransactionResult,
    process_menu_item_sale,
    process_sale_transaction,
)
from kitchen_ops.store.entity_store import EntityStore
from kitchen_ops.store.sqlalchemy_store import get_store

router = APIRouter()


class MenuItemSaleRequest(BaseModel):
    menu_item_id: str
    quantity: float = 1


@router.post("/menu-item-sale", response_model=MenuItemSaleResult)
async def sell_menu_item(
    data: MenuItemSaleRequest,
    store: EntityStore = Depends(get_store),
):
    """Deduct one menu item's recipe from stock (no Sale record)"""
    return await process_menu_item_sale(store, data.menu_item_id, data.quantity)


@router.post("/sales", response_model=SaleTransactionResult)
async def record_sale(
    data: SaleData,
    store: EntityStore = Depends(get_store),
):
    """Process a full sale: stock deduction per line, then the priced Sale record"""
    return await process_sale_transaction(store, data)
