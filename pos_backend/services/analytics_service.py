"""
Sales analytics over a date range
"""
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Optional, Tuple
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import TOP_SELLING_LIMIT
from pos_backend.core.billing import quantize_money, to_decimal
from pos_backend.core.errors import ValidationError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.menu_item import MenuItem
from pos_backend.database.models.order import Order
from pos_backend.database.models.order_item import OrderItem
from pos_backend.schemas.analytics import SalesAnalytics, TopSellingItem

logger = get_i18n_logger(__name__)


def day_range(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    """
    Inclusive calendar-day range as a half-open datetime interval:
    [start_date 00:00, day after end_date 00:00) in UTC.
    """
    if end_date < start_date:
        raise ValidationError("startDate must not be after endDate")
    start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return start, end


class SalesAnalyticsAggregator:
    """
    Summarizes orders created inside a date range.

    Every order in range counts, whatever its status. Top sellers are
    ranked by quantity sold, ties going to the lower menu item id.
    """

    def __init__(self, top_limit: int = TOP_SELLING_LIMIT):
        self.top_limit = top_limit

    async def compute(
        self,
        db: AsyncSession,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> SalesAnalytics:
        today = datetime.now(timezone.utc).date()
        start, end = day_range(start_date or today, end_date or today)
        in_range = (Order.created_at >= start, Order.created_at < end)

        totals = await db.execute(
            select(
                func.coalesce(func.sum(Order.total_amount), 0),
                func.count(Order.id),
            ).where(*in_range)
        )
        total_sales, total_orders = totals.one()
        total_sales = to_decimal(total_sales)
        avg_order_value = quantize_money(total_sales / total_orders) if total_orders else Decimal("0")

        quantity = func.sum(OrderItem.quantity).label("quantity")
        top_rows = await db.execute(
            select(
                OrderItem.menu_item_id,
                MenuItem.name,
                quantity,
                func.sum(OrderItem.total_price).label("revenue"),
            )
            .join(Order, OrderItem.order_id == Order.id)
            .join(MenuItem, OrderItem.menu_item_id == MenuItem.id)
            .where(*in_range)
            .group_by(OrderItem.menu_item_id, MenuItem.name)
            .order_by(quantity.desc(), OrderItem.menu_item_id.asc())
            .limit(self.top_limit)
        )
        top_selling = [
            TopSellingItem(
                menu_item_id=row.menu_item_id,
                name=row.name,
                quantity=row.quantity,
                revenue=quantize_money(to_decimal(row.revenue)),
            )
            for row in top_rows.all()
        ]

        logger.info(
            "analytics.computed",
            start=start.date().isoformat(),
            end=(end - timedelta(days=1)).date().isoformat(),
            orders=total_orders,
        )
        return SalesAnalytics(
            total_sales=quantize_money(total_sales),
            total_orders=total_orders,
            avg_order_value=avg_order_value,
            top_selling_items=top_selling,
        )
