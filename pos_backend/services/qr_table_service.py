"""
QR tables and the public digital menu behind them
"""
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pos_backend.core.errors import NotFoundError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.qr_table import QrTable
from pos_backend.schemas.menu_item import MenuItemResponse
from pos_backend.schemas.qr_table import QrMenuCategory, QrMenuResponse, QrTableCreate
from pos_backend.database.session import commit_or_raise
from pos_backend.services.menu_service import MenuService

logger = get_i18n_logger(__name__)


class QrTableService:

    @staticmethod
    async def list_active(db: AsyncSession) -> List[QrTable]:
        result = await db.execute(
            select(QrTable).where(QrTable.is_active.is_(True)).order_by(QrTable.table_number)
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_table(db: AsyncSession, data: QrTableCreate) -> QrTable:
        table = QrTable(
            table_number=data.table_number,
            qr_code=data.qr_code or QrTable.menu_url_for(data.table_number),
        )
        db.add(table)
        await commit_or_raise(db, conflict_message=f"Table {data.table_number} already exists")
        await db.refresh(table)
        logger.info("qr.table_created", table_number=table.table_number)
        return table

    @staticmethod
    async def menu_for_table(db: AsyncSession, table_number: int) -> QrMenuResponse:
        """
        Digital menu for a scanned table: active categories with their
        active items, plus items that have no category.

        Raises:
            NotFoundError: no active table with that number
        """
        result = await db.execute(
            select(QrTable).where(
                QrTable.table_number == table_number,
                QrTable.is_active.is_(True),
            )
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Table", table_number)

        categories = await MenuService.list_categories(db)
        items = await MenuService.list_items(db)

        by_category = {category.id: [] for category in categories}
        uncategorized = []
        for item in items:
            entry = MenuItemResponse.model_validate(item)
            if item.category_id in by_category:
                by_category[item.category_id].append(entry)
            elif item.category_id is None:
                uncategorized.append(entry)

        return QrMenuResponse(
            table_number=table_number,
            categories=[
                QrMenuCategory.model_validate(category).model_copy(update={"items": by_category[category.id]})
                for category in categories
            ],
            uncategorized=uncategorized,
        )
