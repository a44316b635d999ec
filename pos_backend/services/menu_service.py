"""
Menu business logic: categories and catalog items
"""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pos_backend.core.errors import NotFoundError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.database.models.menu_item import MenuCategory, MenuItem
from pos_backend.database.session import commit_or_raise
from pos_backend.schemas.menu_item import CategoryCreate, MenuItemCreate

logger = get_i18n_logger(__name__)


class MenuService:
    """Service for menu categories and items"""

    @staticmethod
    async def list_categories(db: AsyncSession) -> List[MenuCategory]:
        result = await db.execute(
            select(MenuCategory)
            .where(MenuCategory.is_active.is_(True))
            .order_by(MenuCategory.display_order, MenuCategory.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_category(db: AsyncSession, data: CategoryCreate) -> MenuCategory:
        category = MenuCategory(**data.model_dump())
        db.add(category)
        await commit_or_raise(db)
        await db.refresh(category)
        logger.info("menu.category_created", name=category.name)
        return category

    @staticmethod
    async def get_category(db: AsyncSession, category_id: int) -> MenuCategory:
        category = await db.get(MenuCategory, category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    @staticmethod
    async def list_items(db: AsyncSession, category_id: Optional[int] = None) -> List[MenuItem]:
        """Active items only; deactivated items stay in the table for history"""
        query = select(MenuItem).where(MenuItem.is_active.is_(True))
        if category_id is not None:
            query = query.where(MenuItem.category_id == category_id)
        result = await db.execute(query.order_by(MenuItem.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_item(db: AsyncSession, item_id: int) -> MenuItem:
        item = await db.get(MenuItem, item_id)
        if item is None:
            raise NotFoundError("Menu item", item_id)
        return item

    @staticmethod
    async def create_item(db: AsyncSession, data: MenuItemCreate) -> MenuItem:
        if data.category_id is not None:
            await MenuService.get_category(db, data.category_id)

        item = MenuItem(**data.model_dump())
        db.add(item)
        await commit_or_raise(db)
        await db.refresh(item)
        logger.info("menu.item_created", item_name=item.name, price=item.price)
        return item

    @staticmethod
    async def set_item_stock(db: AsyncSession, item_id: int, current_stock: int) -> MenuItem:
        item = await MenuService.get_item(db, item_id)
        old_stock = item.current_stock
        item.current_stock = current_stock
        await commit_or_raise(db)
        await db.refresh(item)
        logger.info("menu.stock_updated", item_name=item.name, old_stock=old_stock, new_stock=current_stock)
        return item

    @staticmethod
    async def deactivate_item(db: AsyncSession, item_id: int) -> MenuItem:
        """Soft delete: past order lines keep pointing at the row"""
        item = await MenuService.get_item(db, item_id)
        item.is_active = False
        await commit_or_raise(db)
        await db.refresh(item)
        logger.info("menu.item_deactivated", item_name=item.name)
        return item
