"""
Expense schemas
"""
from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, Optional, List
from datetime import datetime
from decimal import Decimal
from pos_backend.database.models.expense import ExpensePaymentMethod


class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=1)
    description_tamil: Optional[str] = None
    category: Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1, max_length=100)] = Field(
        ..., description="rent, gas, fuel, salary, ..."
    )
    amount: Decimal = Field(..., gt=0)
    payment_method: ExpensePaymentMethod
    date: Optional[datetime] = Field(None, description="Defaults to now")


class ExpenseResponse(BaseModel):
    id: int
    description: str
    description_tamil: Optional[str]
    category: str
    amount: Decimal
    payment_method: ExpensePaymentMethod
    date: datetime
    created_by: Optional[int]
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ExpenseCategoryTotal(BaseModel):
    category: str
    total: Decimal
    count: int


class MonthlyExpenseSummary(BaseModel):
    year: int
    month: int
    total: Decimal
    categories: List[ExpenseCategoryTotal]
