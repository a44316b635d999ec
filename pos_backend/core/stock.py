"""
Stock level classification used by menu, inventory and the assistant
"""
from decimal import Decimal
from enum import StrEnum
from typing import Union

from pos_backend.core.errors import ValidationError

Number = Union[int, float, Decimal]


class StockStatus(StrEnum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


def classify_stock(current_stock: Number, min_level: Number) -> StockStatus:
    """
    Map a stock level to its status tag.

    Zero stock is always OUT_OF_STOCK, whatever the minimum level.
    Anything above zero and at or below min_level is LOW_STOCK.

    Raises:
        ValidationError: if current_stock is negative
    """
    if current_stock < 0:
        raise ValidationError(f"Stock cannot be negative, got {current_stock}")
    if current_stock == 0:
        return StockStatus.OUT_OF_STOCK
    if current_stock <= min_level:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK
