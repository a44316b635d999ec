"""
Order endpoints: submission from the till and order history
"""
from fastapi import APIRouter, Query, status
from typing import List
from config import RECENT_LIMIT
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.schemas.order import OrderDetailedResponse, OrderResponse, OrderStatusUpdate, OrderSubmit
from pos_backend.services.order_service import OrderService, OrderSubmissionCoordinator

router = APIRouter(tags=["Orders"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=OrderDetailedResponse,
    summary="Submit the order keyed in at the till",
    description="Totals are recomputed on the server; stock is decremented in the same transaction."
)
async def submit_order(payload: OrderSubmit, db: DbDependency, current_user: CurrentUser):
    """
    Errors:
    - 400 EMPTY_ORDER when no lines are given
    - 404 NOT_FOUND for an unknown menu item
    - 500 PERSISTENCE_ERROR when the transaction is rolled back
    """
    order = await OrderSubmissionCoordinator().submit(db, payload, current_user)
    order = await OrderService.get_order(db, order.id)
    return OrderService.to_detailed_dict(order)


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    db: DbDependency,
    current_user: CurrentUser,
    limit: int = Query(RECENT_LIMIT, ge=1, le=500)
):
    """Most recent orders first"""
    return await OrderService.list_recent(db, limit)


@router.get("/today", response_model=List[OrderResponse])
async def todays_orders(db: DbDependency, current_user: CurrentUser):
    return await OrderService.list_today(db)


@router.get("/{order_id}", response_model=OrderDetailedResponse)
async def get_order(order_id: int, db: DbDependency, current_user: CurrentUser):
    order = await OrderService.get_order(db, order_id)
    return OrderService.to_detailed_dict(order)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    update: OrderStatusUpdate,
    db: DbDependency,
    current_user: CurrentUser
):
    """Only pending orders can be completed or cancelled"""
    return await OrderService.update_status(db, order_id, update.new_status)
