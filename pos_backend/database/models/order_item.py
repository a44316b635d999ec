"""
OrderItem - one persisted line of an order with its price snapshot
"""
from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship, validates
from decimal import Decimal
from pos_backend.database.base import Base
from pos_backend.core.billing import quantize_money


class OrderItem(Base):
    """
    Line of a submitted order.

    unit_price is copied from the till line, so later menu price changes
    never rewrite history. total_price = quantity x unit_price.
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # === Relationships ===
    order = relationship("Order", back_populates="order_items")
    menu_item = relationship("MenuItem", back_populates="order_items")

    @classmethod
    def from_line(cls, line) -> "OrderItem":
        """Build the persisted line from an OrderLine snapshot"""
        unit_price = quantize_money(line.price)
        return cls(
            menu_item_id=line.menu_item_id,
            quantity=line.quantity,
            unit_price=unit_price,
            total_price=unit_price * line.quantity,
        )

    @validates('quantity')
    def validate_quantity(self, key, value):
        """Ensure quantity is positive"""
        if value < 1:
            raise ValueError("Quantity must be at least 1")
        return value

    @validates('unit_price', 'total_price')
    def validate_money(self, key, value):
        if value < Decimal("0"):
            raise ValueError(f"{key} cannot be negative")
        return value

    def __repr__(self):
        return f"<OrderItem Order:{self.order_id} - {self.quantity}x Item#{self.menu_item_id} @ {self.unit_price}>"
