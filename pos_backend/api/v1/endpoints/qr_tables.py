"""
QR table endpoints; the table menu is public (scanned by guests)
"""
from fastapi import APIRouter, status
from typing import List
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.schemas.qr_table import QrMenuResponse, QrTableCreate, QrTableResponse
from pos_backend.services.qr_table_service import QrTableService

router = APIRouter(tags=["QR Tables"])


@router.get("", response_model=List[QrTableResponse])
async def list_tables(db: DbDependency, current_user: CurrentUser):
    return await QrTableService.list_active(db)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=QrTableResponse)
async def create_table(table: QrTableCreate, db: DbDependency, current_user: CurrentUser):
    return await QrTableService.create_table(db, table)


@router.get("/{table_number}/menu", response_model=QrMenuResponse)
async def table_menu(table_number: int, db: DbDependency):
    return await QrTableService.menu_for_table(db, table_number)
