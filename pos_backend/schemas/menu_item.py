"""
Menu category and menu item schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from config import DEFAULT_MIN_STOCK_LEVEL
from pos_backend.core.stock import StockStatus


# === Category Schemas ===

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_tamil: Optional[str] = Field(None, max_length=255)
    display_order: int = Field(0, ge=0)


class CategoryResponse(CategoryCreate):
    id: int
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# === Menu Item Schemas ===

class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_tamil: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    description_tamil: Optional[str] = None
    emoji: Optional[str] = Field(None, max_length=16)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category_id: Optional[int] = None


class MenuItemCreate(MenuItemBase):
    current_stock: int = Field(0, ge=0, description="Servings available")
    min_stock_level: int = Field(DEFAULT_MIN_STOCK_LEVEL, ge=0, description="At or below this the item is low on stock")


class MenuItemStockUpdate(BaseModel):
    current_stock: int = Field(..., ge=0)


class MenuItemResponse(MenuItemBase):
    """Also used by the dashboard as the catalog item fed to the till"""
    id: int
    current_stock: int
    min_stock_level: int
    is_active: bool
    stock_status: StockStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
