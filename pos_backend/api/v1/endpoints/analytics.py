"""
Sales analytics endpoint
"""
from fastapi import APIRouter, Query
from typing import Optional
from datetime import date
from pos_backend.core.dependencies import DbDependency, CurrentUser
from pos_backend.schemas.analytics import SalesAnalytics
from pos_backend.services.analytics_service import SalesAnalyticsAggregator

router = APIRouter(tags=["Analytics"])


@router.get(
    "/sales",
    response_model=SalesAnalytics,
    summary="Sales totals and top sellers",
    description="Both dates are inclusive and default to today."
)
async def sales_analytics(
    db: DbDependency,
    current_user: CurrentUser,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate")
):
    return await SalesAnalyticsAggregator().compute(db, start_date, end_date)
