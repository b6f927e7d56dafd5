"""
Report API Routes

Read-only aggregate reports. These endpoints always answer 200: empty
windows, unknown categories and malformed date bounds produce zero-valued
results rather than errors.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_report_service
from app.schemas.report_models import (
    CategoryReportResponse,
    MonthlyReportResponse,
    YearlyReportResponse,
)
from app.services.report_service import ReportService

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/monthly/", response_model=MonthlyReportResponse)
def monthly_report(
    year: Optional[int] = None,
    month: Optional[int] = None,
    service: ReportService = Depends(get_report_service),
) -> MonthlyReportResponse:
    """Income and expense for one calendar month, split by category.

    Defaults to the current month. GET /api/reports/monthly/?year=2026&month=1
    """
    return service.monthly_report(year=year, month=month)


@router.get("/yearly/", response_model=YearlyReportResponse)
def yearly_report(
    year: Optional[int] = None,
    service: ReportService = Depends(get_report_service),
) -> YearlyReportResponse:
    """Yearly totals with a twelve-month breakdown.

    Defaults to the current year. GET /api/reports/yearly/?year=2026
    """
    return service.yearly_report(year=year)


@router.get("/by-category/", response_model=CategoryReportResponse)
def category_report(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    service: ReportService = Depends(get_report_service),
) -> CategoryReportResponse:
    """Totals per category within an inclusive date range (YYYY-MM-DD).

    GET /api/reports/by-category/?start_date=2026-01-01&end_date=2026-01-31
    """
    return service.category_report(start_date=start_date, end_date=end_date)
