"""
Order Pydantic schemas for API requests/responses
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from pos_backend.database.models.order import OrderStatus, OrderType, PaymentMethod


# === Submission ===

class OrderLineIn(BaseModel):
    """A till line as the client holds it: id plus name/price snapshot"""
    menu_item_id: int
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(..., ge=1)


class OrderSubmit(BaseModel):
    """
    Payload for POST /orders.

    lines may be empty in the payload; the submission itself rejects it
    with EMPTY_ORDER so the client gets a domain error, not a schema one.
    """
    order_type: OrderType = OrderType.DINE_IN
    payment_method: Optional[PaymentMethod] = PaymentMethod.CASH
    table_number: Optional[int] = Field(None, ge=1)
    customer_name: Optional[str] = Field(None, max_length=255)
    lines: List[OrderLineIn] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    new_status: OrderStatus


# === Responses ===

class OrderItemResponse(BaseModel):
    id: int
    menu_item_id: int
    menu_item_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: int
    order_number: str
    table_number: Optional[int]
    customer_name: Optional[str]
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    payment_method: Optional[PaymentMethod]
    order_type: OrderType
    status: OrderStatus
    created_by: Optional[int]
    created_at: datetime

    model_config = {"from_attributes": True}


class OrderDetailedResponse(OrderResponse):
    items: List[OrderItemResponse] = []
