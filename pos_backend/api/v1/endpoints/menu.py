"""
Menu endpoints: categories and catalog items
"""
from fastapi import APIRouter, Query, status
from typing import List, Optional
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.schemas.menu_item import (
    CategoryCreate, CategoryResponse, MenuItemCreate, MenuItemResponse, MenuItemStockUpdate
)
from pos_backend.services.menu_service import MenuService

router = APIRouter(tags=["Menu"])


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(db: DbDependency, current_user: CurrentUser):
    """Active categories in display order"""
    return await MenuService.list_categories(db)


@router.post("/categories", status_code=status.HTTP_201_CREATED, response_model=CategoryResponse)
async def create_category(category: CategoryCreate, db: DbDependency, current_user: CurrentUser):
    return await MenuService.create_category(db, category)


@router.get("/items", response_model=List[MenuItemResponse])
async def list_items(
    db: DbDependency,
    current_user: CurrentUser,
    category_id: Optional[int] = Query(None, description="Only items of this category")
):
    return await MenuService.list_items(db, category_id)


@router.post("/items", status_code=status.HTTP_201_CREATED, response_model=MenuItemResponse)
async def create_item(item: MenuItemCreate, db: DbDependency, current_user: CurrentUser):
    return await MenuService.create_item(db, item)


@router.patch("/items/{item_id}/stock", response_model=MenuItemResponse)
async def set_item_stock(
    item_id: int,
    update: MenuItemStockUpdate,
    db: DbDependency,
    current_user: CurrentUser
):
    """Set the servings available for a menu item"""
    return await MenuService.set_item_stock(db, item_id, update.current_stock)


@router.delete("/items/{item_id}", response_model=MenuItemResponse)
async def deactivate_item(item_id: int, db: DbDependency, current_user: CurrentUser):
    """Soft delete: the item disappears from menus but past orders keep it"""
    return await MenuService.deactivate_item(db, item_id)
