"""
Expense ledger business logic
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config import RECENT_LIMIT
from pos_backend.core.errors import ValidationError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.expense import Expense
from pos_backend.database.models.user import User
from pos_backend.database.session import commit_or_raise
from pos_backend.schemas.expense import ExpenseCategoryTotal, ExpenseCreate, MonthlyExpenseSummary

logger = get_i18n_logger(__name__)


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """[first day of month, first day of next month) in UTC"""
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    if not datetime.min.year <= year < datetime.max.year:
        raise ValidationError(f"Year must be between {datetime.min.year} and {datetime.max.year - 1}, got {year}")
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end


class ExpenseService:
    """Expenses are only ever added; there is no update or delete"""

    @staticmethod
    async def create_expense(db: AsyncSession, data: ExpenseCreate, user: Optional[User] = None) -> Expense:
        values = data.model_dump()
        if values["date"] is None:
            values["date"] = datetime.now(timezone.utc)

        expense = Expense(**values, created_by=user.id if user else None)
        db.add(expense)
        await commit_or_raise(db)
        await db.refresh(expense)
        logger.info("expense.created", category=expense.category, amount=expense.amount)
        return expense

    @staticmethod
    async def list_recent(db: AsyncSession, limit: int = RECENT_LIMIT) -> List[Expense]:
        result = await db.execute(
            select(Expense).order_by(Expense.date.desc(), Expense.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_by_category(db: AsyncSession, category: str) -> List[Expense]:
        result = await db.execute(
            select(Expense)
            .where(Expense.category == category.strip().lower())
            .order_by(Expense.date.desc(), Expense.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_between(db: AsyncSession, start: datetime, end: datetime) -> List[Expense]:
        """Half-open range [start, end)"""
        result = await db.execute(
            select(Expense)
            .where(Expense.date >= start, Expense.date < end)
            .order_by(Expense.date.desc(), Expense.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_today(db: AsyncSession) -> List[Expense]:
        start = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
        return await ExpenseService.list_between(db, start, start + timedelta(days=1))

    @staticmethod
    async def list_monthly(db: AsyncSession, year: int, month: int) -> List[Expense]:
        start, end = month_bounds(year, month)
        return await ExpenseService.list_between(db, start, end)

    @staticmethod
    async def monthly_summary(db: AsyncSession, year: int, month: int) -> MonthlyExpenseSummary:
        """Month total plus one row per category, largest first"""
        start, end = month_bounds(year, month)
        result = await db.execute(
            select(
                Expense.category,
                func.coalesce(func.sum(Expense.amount), 0).label("total"),
                func.count(Expense.id).label("count"),
            )
            .where(Expense.date >= start, Expense.date < end)
            .group_by(Expense.category)
            .order_by(func.sum(Expense.amount).desc(), Expense.category)
        )
        categories = [
            ExpenseCategoryTotal(category=row.category, total=Decimal(str(row.total)), count=row.count)
            for row in result.all()
        ]
        total = sum((category.total for category in categories), Decimal("0"))
        return MonthlyExpenseSummary(year=year, month=month, total=total, categories=categories)
