"""
Report Models

Response models for the aggregate reports. All monetary fields are integers
in the smallest currency unit.
"""

from typing import Optional

from pydantic import BaseModel


class CategorySummary(BaseModel):
    """Per-category total within a report."""

    category_id: int
    category_name: str
    total_amount: int
    transaction_count: int


class MonthlyReportResponse(BaseModel):
    year: int
    month: int
    total_income: int
    total_expense: int
    net_balance: int
    income_by_category: list[CategorySummary]
    expense_by_category: list[CategorySummary]


class MonthlySummary(BaseModel):
    """One month's totals within a yearly report."""

    month: int
    total_income: int
    total_expense: int
    net_balance: int


class YearlyReportResponse(BaseModel):
    year: int
    total_income: int
    total_expense: int
    net_balance: int
    monthly_summary: list[MonthlySummary]


class CategoryReportResponse(BaseModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    categories: list[CategorySummary]
    total_income: int
    total_expense: int
