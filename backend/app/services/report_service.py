from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Iterable, Sequence

from app.core.logging import LogContext, get_logger
from app.repositories.base import LedgerRepository
from app.schemas.models import Category, Transaction, TransactionType
from app.schemas.report_models import (
    CategoryReportResponse,
    CategorySummary,
    MonthlyReportResponse,
    MonthlySummary,
    YearlyReportResponse,
)

logger = get_logger("kakeibo.services.report")

UNKNOWN_CATEGORY = "Unknown"


class ReportService:
    """Aggregate reports over a snapshot of the ledger.

    The build_* static methods are pure: they take the records to aggregate
    and never touch the repository. The instance methods read one snapshot
    per call and pass it through.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        today: Callable[[], date] | None = None,
    ) -> None:
        self.repository = repository
        self._today = today or (lambda: datetime.now(timezone.utc).date())

    def monthly_report(self, year: int | None = None, month: int | None = None) -> MonthlyReportResponse:
        today = self._today()
        year = today.year if year is None else year
        month = today.month if month is None else month

        with LogContext(logger, "monthly report", year=year, month=month):
            return self.build_monthly_report(
                self.repository.list_transactions(),
                self.repository.list_categories(),
                year,
                month,
            )

    def yearly_report(self, year: int | None = None) -> YearlyReportResponse:
        year = self._today().year if year is None else year

        with LogContext(logger, "yearly report", year=year):
            return self.build_yearly_report(self.repository.list_transactions(), year)

    def category_report(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> CategoryReportResponse:
        with LogContext(logger, "category report", start_date=start_date, end_date=end_date):
            return self.build_category_report(
                self.repository.list_transactions(),
                self.repository.list_categories(),
                start_date,
                end_date,
            )

    # =========================================================================
    # Aggregation
    # =========================================================================

    @staticmethod
    def category_names(categories: Iterable[Category]) -> dict[int, str]:
        return {category.id: category.name for category in categories}

    @staticmethod
    def parse_date_bound(value: str | None) -> date | None:
        """Parse a YYYY-MM-DD bound. Malformed values count as absent."""
        if not value:
            return None
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            logger.debug(f"Ignoring malformed date bound: {value!r}")
            return None

    @staticmethod
    def _totals(transactions: Iterable[Transaction]) -> tuple[int, int]:
        income = 0
        expense = 0
        for t in transactions:
            if t.transaction_type == TransactionType.INCOME:
                income += t.amount
            else:
                expense += t.amount
        return income, expense

    @staticmethod
    def _summaries(
        grouped: dict[int, tuple[int, int]],
        names: dict[int, str],
    ) -> list[CategorySummary]:
        return [
            CategorySummary(
                category_id=category_id,
                category_name=names.get(category_id, UNKNOWN_CATEGORY),
                total_amount=amount,
                transaction_count=count,
            )
            for category_id, (amount, count) in grouped.items()
        ]

    @staticmethod
    def _group_by_category(transactions: Iterable[Transaction]) -> dict[int, tuple[int, int]]:
        grouped: dict[int, tuple[int, int]] = {}
        for t in transactions:
            amount, count = grouped.get(t.category_id, (0, 0))
            grouped[t.category_id] = (amount + t.amount, count + 1)
        return grouped

    @staticmethod
    def build_monthly_report(
        transactions: Sequence[Transaction],
        categories: Sequence[Category],
        year: int,
        month: int,
    ) -> MonthlyReportResponse:
        names = ReportService.category_names(categories)
        monthly = [
            t for t in transactions
            if t.transaction_date.year == year and t.transaction_date.month == month
        ]

        income = [t for t in monthly if t.transaction_type == TransactionType.INCOME]
        expense = [t for t in monthly if t.transaction_type == TransactionType.EXPENSE]
        total_income = sum(t.amount for t in income)
        total_expense = sum(t.amount for t in expense)

        logger.debug(f"Monthly report {year}-{month:02d}: {len(monthly)} of {len(transactions)} transactions")
        return MonthlyReportResponse(
            year=year,
            month=month,
            total_income=total_income,
            total_expense=total_expense,
            net_balance=total_income - total_expense,
            income_by_category=ReportService._summaries(ReportService._group_by_category(income), names),
            expense_by_category=ReportService._summaries(ReportService._group_by_category(expense), names),
        )

    @staticmethod
    def build_yearly_report(transactions: Sequence[Transaction], year: int) -> YearlyReportResponse:
        yearly = [t for t in transactions if t.transaction_date.year == year]
        total_income, total_expense = ReportService._totals(yearly)

        # month -> [income, expense]
        months: dict[int, list[int]] = {month: [0, 0] for month in range(1, 13)}
        for t in yearly:
            bucket = months[t.transaction_date.month]
            if t.transaction_type == TransactionType.INCOME:
                bucket[0] += t.amount
            else:
                bucket[1] += t.amount

        monthly_summary = [
            MonthlySummary(
                month=month,
                total_income=income,
                total_expense=expense,
                net_balance=income - expense,
            )
            for month, (income, expense) in sorted(months.items())
        ]

        return YearlyReportResponse(
            year=year,
            total_income=total_income,
            total_expense=total_expense,
            net_balance=total_income - total_expense,
            monthly_summary=monthly_summary,
        )

    @staticmethod
    def build_category_report(
        transactions: Sequence[Transaction],
        categories: Sequence[Category],
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> CategoryReportResponse:
        names = ReportService.category_names(categories)
        start = ReportService.parse_date_bound(start_date)
        end = ReportService.parse_date_bound(end_date)

        filtered = [
            t for t in transactions
            if (start is None or t.transaction_date >= start)
            and (end is None or t.transaction_date <= end)
        ]
        total_income, total_expense = ReportService._totals(filtered)

        return CategoryReportResponse(
            start_date=start_date,
            end_date=end_date,
            categories=ReportService._summaries(ReportService._group_by_category(filtered), names),
            total_income=total_income,
            total_expense=total_expense,
        )
