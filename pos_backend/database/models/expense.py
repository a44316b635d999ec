"""
Expense database model - append-only ledger of money going out
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Text, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship, validates
from datetime import datetime, timezone
from enum import StrEnum
from pos_backend.database.base import Base


class ExpensePaymentMethod(StrEnum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CARD = "card"


class Expense(Base):
    """
    One expense entry (rent, gas, fuel, salary, ...).

    category is a free-form tag; rows are never updated or deleted.
    """
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(Text, nullable=False)
    description_tamil = Column(Text, nullable=True)
    category = Column(String(100), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(SQLAlchemyEnum(ExpensePaymentMethod), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    creator = relationship("User", back_populates="expenses")

    @validates('amount')
    def validate_amount(self, key, value):
        if value <= 0:
            raise ValueError("Expense amount must be positive")
        return value

    @validates('category')
    def normalize_category(self, key, value):
        return value.strip().lower()

    def __repr__(self):
        return f"<Expense {self.category} {self.amount} on {self.date:%Y-%m-%d}>"
