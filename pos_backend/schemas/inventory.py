"""
Raw-material inventory schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from pos_backend.core.stock import StockStatus


class InventoryItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_tamil: Optional[str] = Field(None, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    unit: str = Field(..., min_length=1, max_length=50, description="kg, liters, pieces, ...")
    min_level: Decimal = Field(..., ge=0)
    unit_price: Decimal = Field(..., ge=0)


class InventoryItemCreate(InventoryItemBase):
    current_stock: Decimal = Field(Decimal("0"), ge=0)


class InventoryRestock(BaseModel):
    quantity: Decimal = Field(..., gt=0, description="Quantity received")


class InventoryStockSet(BaseModel):
    current_stock: Decimal = Field(..., ge=0)


class InventoryItemResponse(InventoryItemBase):
    id: int
    current_stock: Decimal
    stock_status: StockStatus
    last_restocked: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
