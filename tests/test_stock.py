from decimal import Decimal

import pytest

from pos_backend.core.errors import ValidationError
from pos_backend.core.stock import StockStatus, classify_stock


@pytest.mark.parametrize("min_level", [0, 1, 5, 100])
def test_zero_stock_is_out_of_stock_for_any_minimum(min_level):
    assert classify_stock(0, min_level) == StockStatus.OUT_OF_STOCK


@pytest.mark.parametrize(
    "current, min_level, expected",
    [
        (1, 5, StockStatus.LOW_STOCK),
        (5, 5, StockStatus.LOW_STOCK),
        (6, 5, StockStatus.IN_STOCK),
        (1, 0, StockStatus.IN_STOCK),
        (Decimal("2.5"), Decimal("2.5"), StockStatus.LOW_STOCK),
        (Decimal("0.01"), Decimal("0"), StockStatus.IN_STOCK),
    ],
)
def test_low_stock_boundary(current, min_level, expected):
    assert classify_stock(current, min_level) == expected


def test_negative_stock_is_rejected():
    with pytest.raises(ValidationError):
        classify_stock(-1, 5)


def test_status_values_are_wire_tags():
    assert StockStatus.OUT_OF_STOCK == "out_of_stock"
    assert StockStatus.LOW_STOCK == "low_stock"
    assert StockStatus.IN_STOCK == "in_stock"
