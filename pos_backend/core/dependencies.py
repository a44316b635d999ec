"""
Shared dependencies across the application (ASYNC VERSION)

Usage example:
    @router.get("/orders/today")
    async def todays_orders(db: DbDependency, current_user: CurrentUser):
        ...
"""
from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pos_backend.database.session import get_db
from pos_backend.database.models.user import User
from pos_backend.core.security import get_current_user, get_current_owner_user


# === Database Dependency ===

DbDependency = Annotated[AsyncSession, Depends(get_db)]
"""Async database session, one per request."""


# === User Authentication Dependencies ===

CurrentUser = Annotated[User, Depends(get_current_user)]
"""Authenticated user of any role (owner or staff)."""


OwnerUser = Annotated[User, Depends(get_current_owner_user)]
"""
Current user verified as OWNER.

Example:
    async def update_staff(staff_id: int, owner: OwnerUser):
        # Only owners reach here (salaries are sensitive)
        ...
"""
