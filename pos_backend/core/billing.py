"""
In-progress order lines and bill computation

The aggregator holds the lines of the order being keyed in at the till;
the calculator derives subtotal, tax and total from a snapshot of those
lines. Amounts are Decimal at full precision and only rounded for
display or when persisted.
"""
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Union

from config import TAX_RATE, CURRENCY_SYMBOL
from pos_backend.core.errors import ValidationError

CENT = Decimal("0.01")


def to_decimal(value: Union[int, float, str, Decimal]) -> Decimal:
    """Convert via str so floats like 0.1 keep their printed value"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(amount: Decimal) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Union[int, float, Decimal], symbol: str = CURRENCY_SYMBOL) -> str:
    """Render an amount with two decimals, e.g. ₹1,262.50"""
    return f"{symbol}{quantize_money(to_decimal(amount)):,.2f}"


@dataclass
class OrderLine:
    """One line of an order that has not been submitted yet"""
    menu_item_id: int
    name: str
    price: Decimal
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class OrderLineAggregator:
    """
    Lines of the current order, keyed by menu item id.

    Display order is first-insertion order. A line exists only while its
    quantity is positive; dropping to zero removes it.
    """

    def __init__(self):
        self._lines: dict[int, OrderLine] = {}

    @classmethod
    def from_lines(cls, lines: Iterable) -> "OrderLineAggregator":
        """
        Build an aggregator from submitted lines, merging repeated ids.

        The first occurrence of an id keeps its name and price snapshot.

        Raises:
            ValidationError: if a line carries a quantity below 1
        """
        aggregator = cls()
        for line in lines:
            if line.quantity < 1:
                raise ValidationError(
                    f"Quantity for item {line.menu_item_id} must be at least 1"
                )
            existing = aggregator._lines.get(line.menu_item_id)
            if existing:
                existing.quantity += line.quantity
            else:
                aggregator._lines[line.menu_item_id] = OrderLine(
                    menu_item_id=line.menu_item_id,
                    name=line.name,
                    price=to_decimal(line.price),
                    quantity=line.quantity,
                )
        return aggregator

    @property
    def lines(self) -> List[OrderLine]:
        """Copies of the current lines, in display order"""
        return [replace(line) for line in self._lines.values()]

    def get(self, menu_item_id: int) -> Optional[OrderLine]:
        line = self._lines.get(menu_item_id)
        return replace(line) if line else None

    def add_item(self, catalog_item) -> OrderLine:
        """
        Add one unit of a catalog item.

        catalog_item needs id, name and price attributes. Name and price
        are captured the first time the item is added; later catalog
        price changes do not reach an existing line.
        """
        line = self._lines.get(catalog_item.id)
        if line:
            line.quantity += 1
        else:
            line = OrderLine(
                menu_item_id=catalog_item.id,
                name=catalog_item.name,
                price=to_decimal(catalog_item.price),
            )
            self._lines[catalog_item.id] = line
        return replace(line)

    def change_quantity(self, menu_item_id: int, delta: int) -> None:
        """Shift a line's quantity; at zero or below the line is removed"""
        line = self._lines.get(menu_item_id)
        if line is None:
            return
        line.quantity += delta
        if line.quantity <= 0:
            del self._lines[menu_item_id]

    def remove_item(self, menu_item_id: int) -> None:
        self._lines.pop(menu_item_id, None)

    def clear(self) -> None:
        self._lines.clear()

    def is_empty(self) -> bool:
        return not self._lines

    def totals(self, calculator: Optional["BillingCalculator"] = None) -> "BillTotals":
        return (calculator or BillingCalculator()).calculate(self._lines.values())

    def __len__(self):
        return len(self._lines)

    def __iter__(self):
        return iter(self.lines)


@dataclass(frozen=True)
class BillTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    def formatted(self, symbol: str = CURRENCY_SYMBOL) -> dict:
        return {
            "subtotal": format_currency(self.subtotal, symbol),
            "tax": format_currency(self.tax, symbol),
            "total": format_currency(self.total, symbol),
        }


class BillingCalculator:
    """
    subtotal = Σ price × quantity, tax = subtotal × tax_rate, total = subtotal + tax

    Nothing is cached: every call recomputes from the lines given.
    """

    def __init__(self, tax_rate: Union[Decimal, float, str] = TAX_RATE):
        self.tax_rate = to_decimal(tax_rate)

    def calculate(self, lines: Iterable[OrderLine]) -> BillTotals:
        subtotal = sum((line.price * line.quantity for line in lines), Decimal("0"))
        tax = subtotal * self.tax_rate
        return BillTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)
