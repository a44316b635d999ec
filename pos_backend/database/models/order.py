"""
Order database model
A bill rung up at the till, with totals frozen at submission time
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from enum import StrEnum
from pos_backend.database.base import Base


class OrderStatus(StrEnum):
    """Lifecycle of an order"""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(StrEnum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"


class OrderType(StrEnum):
    DINE_IN = "dine-in"
    TAKEAWAY = "takeaway"
    QR = "qr"


# Only pending orders can move; completed and cancelled are final
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
}


class Order(Base):
    """
    Persisted order.

    Everything except status is immutable once written:
    total_amount = subtotal + tax_amount, tax_amount = subtotal x TAX_RATE.
    """
    __tablename__ = "orders"

    # Primary identification
    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(50), unique=True, nullable=False, index=True)

    # Where / who
    table_number = Column(Integer, nullable=True)
    customer_name = Column(String(255), nullable=True)

    # Financial tracking
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax_amount = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(SQLAlchemyEnum(PaymentMethod), nullable=True)
    order_type = Column(SQLAlchemyEnum(OrderType), nullable=False)

    # Order lifecycle
    status = Column(SQLAlchemyEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING, index=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True  # Date-range analytics
    )

    # Relationships
    creator = relationship("User", back_populates="orders")
    order_items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS.get(self.status, set())

    def __repr__(self):
        return f"<Order {self.order_number} - {self.total_amount} - {self.status.value}>"
