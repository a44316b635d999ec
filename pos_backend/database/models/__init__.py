"""
Database models package initialization
Centralized imports for all database models
"""
from pos_backend.database.models.user import User, UserRole
from pos_backend.database.models.menu_item import MenuCategory, MenuItem
from pos_backend.database.models.inventory_item import InventoryItem
from pos_backend.database.models.order import Order, OrderStatus, OrderType, PaymentMethod
from pos_backend.database.models.order_item import OrderItem
from pos_backend.database.models.expense import Expense, ExpensePaymentMethod
from pos_backend.database.models.staff import Staff, StaffAttendance, AttendanceStatus
from pos_backend.database.models.qr_table import QrTable

__all__ = [
    # User and Authentication
    'User',
    'UserRole',

    # Menu and Inventory
    'MenuCategory',
    'MenuItem',
    'InventoryItem',

    # Orders
    'Order',
    'OrderStatus',
    'OrderType',
    'PaymentMethod',
    'OrderItem',

    # Back office
    'Expense',
    'ExpensePaymentMethod',
    'Staff',
    'StaffAttendance',
    'AttendanceStatus',
    'QrTable',
]
