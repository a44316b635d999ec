"""
Raw-material inventory business logic
"""
from decimal import Decimal
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pos_backend.core.errors import NotFoundError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.inventory_item import InventoryItem
from pos_backend.database.session import commit_or_raise
from pos_backend.schemas.inventory import InventoryItemCreate

logger = get_i18n_logger(__name__)


class InventoryService:

    @staticmethod
    async def list_items(db: AsyncSession) -> List[InventoryItem]:
        result = await db.execute(select(InventoryItem).order_by(InventoryItem.name))
        return list(result.scalars().all())

    @staticmethod
    async def get_item(db: AsyncSession, item_id: int) -> InventoryItem:
        item = await db.get(InventoryItem, item_id)
        if item is None:
            raise NotFoundError("Inventory item", item_id)
        return item

    @staticmethod
    async def create_item(db: AsyncSession, data: InventoryItemCreate) -> InventoryItem:
        item = InventoryItem(**data.model_dump())
        db.add(item)
        await commit_or_raise(db)
        await db.refresh(item)
        logger.info("inventory.item_created", item_name=item.name, stock=item.current_stock, unit=item.unit)
        return item

    @staticmethod
    async def low_stock_items(db: AsyncSession) -> List[InventoryItem]:
        """
        Items at or below their minimum level, out-of-stock ones included.

        Same boundary as classify_stock: anything not IN_STOCK.
        """
        result = await db.execute(
            select(InventoryItem)
            .where(InventoryItem.current_stock <= InventoryItem.min_level)
            .order_by(InventoryItem.current_stock, InventoryItem.name)
        )
        items = list(result.scalars().all())
        if items:
            logger.warning("inventory.low_stock", count=len(items))
        return items

    @staticmethod
    async def restock(db: AsyncSession, item_id: int, quantity: Decimal) -> InventoryItem:
        item = await InventoryService.get_item(db, item_id)
        item.restock(quantity)
        await commit_or_raise(db)
        await db.refresh(item)
        return item

    @staticmethod
    async def set_stock(db: AsyncSession, item_id: int, current_stock: Decimal) -> InventoryItem:
        """Absolute correction after a physical count"""
        item = await InventoryService.get_item(db, item_id)
        old_stock = item.current_stock
        item.current_stock = current_stock
        await commit_or_raise(db)
        await db.refresh(item)
        logger.info("inventory.stock_set", item_name=item.name, old_stock=old_stock, new_stock=current_stock)
        return item
