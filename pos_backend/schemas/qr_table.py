"""
QR table schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from pos_backend.schemas.menu_item import CategoryResponse, MenuItemResponse


class QrTableCreate(BaseModel):
    table_number: int = Field(..., ge=1)
    qr_code: Optional[str] = Field(None, max_length=500, description="Defaults to the table's menu URL")


class QrTableResponse(BaseModel):
    id: int
    table_number: int
    qr_code: str
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class QrMenuCategory(CategoryResponse):
    items: List[MenuItemResponse] = []


class QrMenuResponse(BaseModel):
    """Digital menu served to a scanned table"""
    table_number: int
    categories: List[QrMenuCategory]
    uncategorized: List[MenuItemResponse] = []
