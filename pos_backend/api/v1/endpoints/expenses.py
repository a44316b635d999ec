"""
Expense endpoints
"""
from fastapi import APIRouter, Path, status
from typing import List
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.schemas.expense import ExpenseCreate, ExpenseResponse, MonthlyExpenseSummary
from pos_backend.services.expense_service import ExpenseService

router = APIRouter(tags=["Expenses"])


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(db: DbDependency, current_user: CurrentUser):
    return await ExpenseService.list_recent(db)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ExpenseResponse)
async def create_expense(expense: ExpenseCreate, db: DbDependency, current_user: CurrentUser):
    return await ExpenseService.create_expense(db, expense, current_user)


@router.get("/today", response_model=List[ExpenseResponse])
async def todays_expenses(db: DbDependency, current_user: CurrentUser):
    return await ExpenseService.list_today(db)


@router.get("/category/{category}", response_model=List[ExpenseResponse])
async def expenses_by_category(category: str, db: DbDependency, current_user: CurrentUser):
    return await ExpenseService.list_by_category(db, category)


@router.get("/monthly/{year}/{month}", response_model=List[ExpenseResponse])
async def monthly_expenses(
    db: DbDependency,
    current_user: CurrentUser,
    year: int = Path(..., ge=2000, le=9998),
    month: int = Path(...)
):
    """Month must be 1-12; anything else is a 400"""
    return await ExpenseService.list_monthly(db, year, month)


@router.get("/monthly/{year}/{month}/summary", response_model=MonthlyExpenseSummary)
async def monthly_expense_summary(
    db: DbDependency,
    current_user: CurrentUser,
    year: int = Path(..., ge=2000, le=9998),
    month: int = Path(...)
):
    return await ExpenseService.monthly_summary(db, year, month)
