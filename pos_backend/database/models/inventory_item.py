"""
InventoryItem database model - raw materials tracked apart from the menu
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime
from sqlalchemy.orm import validates
from datetime import datetime, timezone
from decimal import Decimal
from pos_backend.database.base import Base
from pos_backend.core.stock import StockStatus, classify_stock
from pos_backend.core.i18n_logger import get_i18n_logger

logger = get_i18n_logger("inventory_item_model")


class InventoryItem(Base):
    """
    Raw material such as rice, oil or gas cylinders.

    Stock is fractional (kg, liters) and compared against min_level to
    decide whether the item needs restocking.
    """
    __tablename__ = "inventory_items"

    # === Core Identity ===
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    name_tamil = Column(String(255), nullable=True)
    category = Column(String(100), nullable=False)

    # === Stock Management ===
    current_stock = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    unit = Column(String(50), nullable=False)  # kg, pieces, liters, ...
    min_level = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))

    # === Cost Tracking ===
    unit_price = Column(Numeric(10, 2), nullable=False)

    last_restocked = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @property
    def stock_status(self) -> StockStatus:
        return classify_stock(self.current_stock or 0, self.min_level or 0)

    def restock(self, quantity: Decimal) -> Decimal:
        """Add a delivery to stock and stamp the restock time"""
        old_stock = self.current_stock or Decimal("0")
        self.current_stock = old_stock + quantity
        self.last_restocked = datetime.now(timezone.utc)
        logger.info(
            "inventory.restocked",
            item_name=self.name,
            quantity=quantity,
            unit=self.unit,
            old_stock=old_stock,
            new_stock=self.current_stock
        )
        return self.current_stock

    @validates('current_stock', 'min_level', 'unit_price')
    def validate_non_negative(self, key, value):
        if value is not None and value < 0:
            logger.error("error.validation", field=key, message=f"{key} cannot be negative, got {value}")
            raise ValueError(f"{key} cannot be negative")
        return value

    def __repr__(self):
        return f"<InventoryItem {self.name} - {self.current_stock} {self.unit}>"
