"""
Order submission and order queries
"""
import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from sqlalchemy import case, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from config import ORDER_NUMBER_PREFIX, RECENT_LIMIT
from pos_backend.core.billing import BillingCalculator, OrderLineAggregator, quantize_money
from pos_backend.core.errors import EmptyOrderError, NotFoundError, PersistenceError, ValidationError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.menu_item import MenuItem
from pos_backend.database.models.order import Order, OrderStatus
from pos_backend.database.models.order_item import OrderItem
from pos_backend.database.models.user import User
from pos_backend.database.session import commit_or_raise
from pos_backend.schemas.order import OrderSubmit

logger = get_i18n_logger(__name__)


def generate_order_number(now: Optional[datetime] = None) -> str:
    """
    ORD-<year>-<last 6 digits of epoch millis>-<4 hex chars>

    The random tail keeps two orders in the same millisecond apart;
    the unique column on orders.order_number is the final guard.
    """
    now = now or datetime.now(timezone.utc)
    millis = str(int(now.timestamp() * 1000))[-6:]
    return f"{ORDER_NUMBER_PREFIX}-{now.year}-{millis}-{secrets.token_hex(2).upper()}"


class OrderSubmissionCoordinator:
    """
    Turns a till payload into a persisted order.

    Order row, its lines and the stock decrements are written in one
    transaction: either all of them land or none do. Totals are always
    recomputed here from the line snapshots; client totals are ignored.
    """

    def __init__(self, calculator: Optional[BillingCalculator] = None):
        self.calculator = calculator or BillingCalculator()

    async def submit(self, db: AsyncSession, payload: OrderSubmit, user: Optional[User] = None) -> Order:
        """
        Raises:
            EmptyOrderError: no lines (nothing touches the database)
            NotFoundError: a line references an unknown menu item
            ValidationError: a line references an inactive menu item
            PersistenceError: the transaction failed and was rolled back
        """
        aggregator = OrderLineAggregator.from_lines(payload.lines)
        if aggregator.is_empty():
            logger.warning("order.empty_rejected")
            raise EmptyOrderError()

        lines = aggregator.lines
        totals = self.calculator.calculate(lines)

        order = Order(
            order_number=generate_order_number(),
            table_number=payload.table_number,
            customer_name=payload.customer_name,
            subtotal=quantize_money(totals.subtotal),
            tax_amount=quantize_money(totals.tax),
            total_amount=quantize_money(totals.total),
            payment_method=payload.payment_method,
            order_type=payload.order_type,
            status=OrderStatus.COMPLETED,
            created_by=user.id if user else None,
        )

        try:
            menu_items = await self._load_menu_items(db, [line.menu_item_id for line in lines])
            db.add(order)
            await db.flush()

            for line in lines:
                order_item = OrderItem.from_line(line)
                order_item.order_id = order.id
                db.add(order_item)

                menu_item = menu_items[line.menu_item_id]
                if menu_item.current_stock < line.quantity:
                    logger.warning(
                        "order.stock_insufficient",
                        item_name=menu_item.name,
                        stock=menu_item.current_stock,
                        quantity=line.quantity,
                    )
                # Single UPDATE so concurrent submissions cannot lose a decrement
                await db.execute(
                    update(MenuItem)
                    .where(MenuItem.id == line.menu_item_id)
                    .values(current_stock=case(
                        (MenuItem.current_stock >= line.quantity, MenuItem.current_stock - line.quantity),
                        else_=0,
                    ))
                    .execution_options(synchronize_session=False)
                )

            await db.commit()
            await db.refresh(order)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("order.persistence_failed", error=str(e))
            raise PersistenceError("Could not save order") from e

        logger.info(
            "order.submitted",
            order_number=order.order_number,
            total=order.total_amount,
            line_count=len(lines),
        )
        return order

    @staticmethod
    async def _load_menu_items(db: AsyncSession, item_ids: List[int]) -> dict:
        result = await db.execute(select(MenuItem).where(MenuItem.id.in_(item_ids)))
        found = {item.id: item for item in result.scalars().all()}

        for item_id in item_ids:
            item = found.get(item_id)
            if item is None:
                raise NotFoundError("Menu item", item_id)
            if not item.is_active:
                raise ValidationError(f"Menu item {item.name} is not available")
        return found


class OrderService:

    @staticmethod
    async def list_recent(db: AsyncSession, limit: int = RECENT_LIMIT) -> List[Order]:
        """Newest first"""
        result = await db.execute(
            select(Order).order_by(Order.created_at.desc(), Order.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_today(db: AsyncSession) -> List[Order]:
        start = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        result = await db.execute(
            select(Order)
            .where(Order.created_at >= start, Order.created_at < end)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Order:
        result = await db.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.order_items).selectinload(OrderItem.menu_item))
        )
        order = result.scalar_one_or_none()
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    @staticmethod
    def to_detailed_dict(order: Order) -> dict:
        """Order plus its lines, each line carrying the menu item's name"""
        data = {column.name: getattr(order, column.name) for column in Order.__table__.columns}
        data["items"] = [
            {
                "id": item.id,
                "menu_item_id": item.menu_item_id,
                "menu_item_name": item.menu_item.name if item.menu_item else None,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": item.total_price,
            }
            for item in order.order_items
        ]
        return data

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, new_status: OrderStatus) -> Order:
        """
        Move an order along its lifecycle.

        Only status changes; totals and lines are frozen at submission.

        Raises:
            NotFoundError: unknown order
            ValidationError: transition not allowed from the current status
        """
        order = await db.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order", order_id)

        if not order.can_transition_to(new_status):
            raise ValidationError(
                f"Cannot change order {order.order_number} from {order.status.value} to {new_status.value}"
            )

        old_status = order.status
        order.status = new_status
        await commit_or_raise(db)
        await db.refresh(order)
        logger.info(
            "order.status_changed",
            order_number=order.order_number,
            old_status=old_status.value,
            new_status=new_status.value,
        )
        return order
