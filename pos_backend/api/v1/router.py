"""
API v1 router - combines all v1 endpoints
"""
from fastapi import APIRouter
from pos_backend.api.v1.endpoints import (
    auth, menu, inventory, orders, expenses, staff, qr_tables, analytics, assistant
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth")
api_router.include_router(menu.router, prefix="/menu")
api_router.include_router(inventory.router, prefix="/inventory")
api_router.include_router(orders.router, prefix="/orders")
api_router.include_router(expenses.router, prefix="/expenses")
api_router.include_router(staff.router, prefix="/staff")
api_router.include_router(qr_tables.router, prefix="/qr-tables")
api_router.include_router(analytics.router, prefix="/analytics")
api_router.include_router(assistant.router, prefix="/assistant")
