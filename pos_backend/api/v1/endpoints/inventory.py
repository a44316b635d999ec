"""
Raw-material inventory endpoints
"""
from fastapi import APIRouter, status
from typing import List
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.schemas.inventory import (
    InventoryItemCreate, InventoryItemResponse, InventoryRestock, InventoryStockSet
)
from pos_backend.services.inventory_service import InventoryService

router = APIRouter(tags=["Inventory"])


@router.get("", response_model=List[InventoryItemResponse])
async def list_inventory(db: DbDependency, current_user: CurrentUser):
    return await InventoryService.list_items(db)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InventoryItemResponse)
async def create_inventory_item(item: InventoryItemCreate, db: DbDependency, current_user: CurrentUser):
    return await InventoryService.create_item(db, item)


@router.get("/low-stock", response_model=List[InventoryItemResponse])
async def low_stock(db: DbDependency, current_user: CurrentUser):
    """Items at or below their minimum level, out-of-stock items first"""
    return await InventoryService.low_stock_items(db)


@router.post("/{item_id}/restock", response_model=InventoryItemResponse)
async def restock(item_id: int, restock: InventoryRestock, db: DbDependency, current_user: CurrentUser):
    return await InventoryService.restock(db, item_id, restock.quantity)


@router.patch("/{item_id}/stock", response_model=InventoryItemResponse)
async def set_stock(item_id: int, update: InventoryStockSet, db: DbDependency, current_user: CurrentUser):
    return await InventoryService.set_stock(db, item_id, update.current_stock)
