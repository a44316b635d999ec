from dataclasses import dataclass
from decimal import Decimal

import pytest

from pos_backend.core.billing import (
    BillingCalculator, OrderLine, OrderLineAggregator, format_currency, quantize_money
)
from pos_backend.core.errors import ValidationError


@dataclass
class CatalogItem:
    id: int
    name: str
    price: Decimal


DOSA = CatalogItem(1, "Masala Dosa", Decimal("100"))
COFFEE = CatalogItem(2, "Filter Coffee", Decimal("50"))


def test_adding_same_item_twice_gives_one_line_with_quantity_two():
    aggregator = OrderLineAggregator()
    aggregator.add_item(DOSA)
    aggregator.add_item(COFFEE)
    aggregator.add_item(DOSA)

    lines = aggregator.lines
    assert [line.menu_item_id for line in lines] == [1, 2]
    assert lines[0].quantity == 2
    assert len(aggregator) == 2


def test_line_keeps_price_snapshot_from_first_add():
    aggregator = OrderLineAggregator()
    item = CatalogItem(3, "Pongal", Decimal("60"))
    aggregator.add_item(item)
    item.price = Decimal("75")
    aggregator.add_item(item)

    line = aggregator.get(3)
    assert line.price == Decimal("60")
    assert line.quantity == 2


def test_lines_are_copies():
    aggregator = OrderLineAggregator()
    aggregator.add_item(DOSA)
    aggregator.lines[0].quantity = 99
    assert aggregator.get(DOSA.id).quantity == 1


def test_decrement_to_zero_removes_line_and_later_increment_is_noop():
    aggregator = OrderLineAggregator()
    aggregator.add_item(DOSA)
    aggregator.add_item(DOSA)

    aggregator.change_quantity(DOSA.id, -2)
    assert aggregator.get(DOSA.id) is None
    assert aggregator.is_empty()

    aggregator.change_quantity(DOSA.id, 1)
    assert aggregator.is_empty()


def test_remove_item_and_clear_twice():
    aggregator = OrderLineAggregator()
    aggregator.add_item(DOSA)
    aggregator.add_item(COFFEE)
    aggregator.remove_item(DOSA.id)
    assert [line.name for line in aggregator] == ["Filter Coffee"]

    aggregator.clear()
    assert aggregator.is_empty()
    aggregator.clear()
    assert aggregator.is_empty()


def test_from_lines_merges_duplicate_ids():
    aggregator = OrderLineAggregator.from_lines([
        OrderLine(1, "Masala Dosa", Decimal("100"), 1),
        OrderLine(2, "Filter Coffee", Decimal("50"), 1),
        OrderLine(1, "Masala Dosa", Decimal("100"), 2),
    ])
    assert aggregator.get(1).quantity == 3
    assert [line.menu_item_id for line in aggregator.lines] == [1, 2]


def test_from_lines_rejects_non_positive_quantity():
    with pytest.raises(ValidationError):
        OrderLineAggregator.from_lines([OrderLine(1, "Masala Dosa", Decimal("100"), 0)])


def test_dosa_and_coffee_bill():
    aggregator = OrderLineAggregator()
    aggregator.add_item(DOSA)
    aggregator.add_item(DOSA)
    aggregator.add_item(COFFEE)

    totals = aggregator.totals()
    assert totals.subtotal == Decimal("250")
    assert totals.tax == Decimal("12.5")
    assert totals.total == Decimal("262.5")
    assert totals.formatted() == {"subtotal": "₹250.00", "tax": "₹12.50", "total": "₹262.50"}


def test_totals_relationship_holds_for_odd_prices():
    lines = [
        OrderLine(1, "Idli", Decimal("33.33"), 3),
        OrderLine(2, "Lassi", Decimal("45.55"), 1),
    ]
    totals = BillingCalculator().calculate(lines)
    assert totals.subtotal == Decimal("145.54")
    assert totals.total == totals.subtotal + totals.subtotal * Decimal("0.05")
    assert quantize_money(totals.tax) == Decimal("7.28")


def test_empty_order_totals_are_zero():
    totals = OrderLineAggregator().totals()
    assert totals.subtotal == totals.tax == totals.total == Decimal("0")


def test_custom_tax_rate():
    totals = BillingCalculator(tax_rate="0.18").calculate([OrderLine(1, "Thali", Decimal("200"), 1)])
    assert totals.tax == Decimal("36.00")


@pytest.mark.parametrize(
    "amount, expected",
    [
        (Decimal("262.5"), "₹262.50"),
        (Decimal("1262.5"), "₹1,262.50"),
        (0, "₹0.00"),
        (Decimal("0.125"), "₹0.13"),
        (12.3, "₹12.30"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected
