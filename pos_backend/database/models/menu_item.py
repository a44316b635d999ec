"""
Menu categories and menu items (the sellable catalog)
"""
from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship, validates
from datetime import datetime, timezone
from pos_backend.database.base import Base
from pos_backend.core.stock import StockStatus, classify_stock
from pos_backend.core.i18n_logger import get_i18n_logger
from config import DEFAULT_MIN_STOCK_LEVEL

logger = get_i18n_logger("menu_item_model")


class MenuCategory(Base):
    """Grouping shown as tabs on the billing screen and the QR menu"""
    __tablename__ = "menu_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    name_tamil = Column(String(255), nullable=True)
    display_order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    menu_items = relationship("MenuItem", back_populates="category")

    def __repr__(self):
        return f"<MenuCategory {self.name}>"


class MenuItem(Base):
    """
    A dish or drink that can be put on a bill.

    Stock counts whole servings and is decremented when an order is
    submitted. Items are never deleted; is_active=False hides them.
    """
    __tablename__ = "menu_items"

    # === Core Identity ===
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    name_tamil = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    description_tamil = Column(Text, nullable=True)
    emoji = Column(String(16), nullable=True)

    # === Pricing ===
    price = Column(Numeric(10, 2), nullable=False)

    # === Stock Management ===
    current_stock = Column(Integer, nullable=False, default=0)
    min_stock_level = Column(Integer, nullable=False, default=DEFAULT_MIN_STOCK_LEVEL)

    # === Menu Organization ===
    category_id = Column(Integer, ForeignKey("menu_categories.id"), nullable=True, index=True)
    is_active = Column(Boolean, default=True, index=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # === Relationships ===
    category = relationship("MenuCategory", back_populates="menu_items")
    order_items = relationship("OrderItem", back_populates="menu_item")

    @property
    def stock_status(self) -> StockStatus:
        return classify_stock(self.current_stock or 0, self.min_stock_level or 0)

    @validates('price')
    def validate_price(self, key, value):
        """Ensure price is positive"""
        if value is not None and value < 0:
            logger.error("error.validation", field="price", message=f"Price cannot be negative, got {value}")
            raise ValueError("Price cannot be negative")
        return value

    @validates('current_stock', 'min_stock_level')
    def validate_stock(self, key, value):
        """Ensure stock figures are non-negative"""
        if value is not None and value < 0:
            logger.error("error.validation", field=key, message=f"{key} cannot be negative, got {value}")
            raise ValueError(f"{key} cannot be negative")
        return value

    def __repr__(self):
        availability = "Available" if self.is_active and (self.current_stock or 0) > 0 else "Unavailable"
        return f"<MenuItem {self.name} - {self.price} - {availability}>"
