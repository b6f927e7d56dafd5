"""Integration tests for the report routes."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from app.schemas.models import CategoryCreate, TransactionCreate


@pytest.fixture
def seeded_client(client, local_repo):
    """Client over a ledger with the January 2026 reference data."""
    local_repo.create_category(CategoryCreate(name="Salary", category_type="income"))
    local_repo.create_transaction(
        TransactionCreate(
            amount=250000,
            category_id=1,
            description="Salary",
            transaction_date=date(2026, 1, 25),
            transaction_type="income",
        )
    )
    local_repo.create_transaction(
        TransactionCreate(
            amount=1500,
            category_id=2,
            description="Lunch",
            transaction_date=date(2026, 1, 26),
            transaction_type="expense",
        )
    )
    local_repo.create_transaction(
        TransactionCreate(
            amount=4000,
            category_id=2,
            description="Dinner",
            transaction_date=date(2026, 3, 2),
            transaction_type="expense",
        )
    )
    return client


class TestMonthlyReportEndpoint:
    """Tests for GET /api/reports/monthly/."""

    def test_monthly_report(self, seeded_client):
        response = seeded_client.get("/api/reports/monthly/", params={"year": 2026, "month": 1})
        assert response.status_code == 200
        assert response.json() == {
            "year": 2026,
            "month": 1,
            "total_income": 250000,
            "total_expense": 1500,
            "net_balance": 248500,
            "income_by_category": [
                {"category_id": 1, "category_name": "Salary", "total_amount": 250000, "transaction_count": 1}
            ],
            "expense_by_category": [
                {"category_id": 2, "category_name": "Unknown", "total_amount": 1500, "transaction_count": 1}
            ],
        }

    def test_out_of_range_month_is_not_rejected(self, seeded_client):
        response = seeded_client.get("/api/reports/monthly/", params={"year": 2026, "month": 13})
        assert response.status_code == 200
        data = response.json()
        assert data["month"] == 13
        assert data["total_income"] == 0
        assert data["expense_by_category"] == []

    def test_defaults_to_current_month(self, seeded_client):
        with patch("app.services.report_service.datetime") as mock_datetime:
            mock_datetime.now.return_value.date.return_value = date(2026, 3, 15)
            response = seeded_client.get("/api/reports/monthly/")
        assert response.status_code == 200
        data = response.json()
        assert (data["year"], data["month"]) == (2026, 3)
        assert data["total_expense"] == 4000

    def test_non_integer_year_rejected(self, seeded_client):
        response = seeded_client.get("/api/reports/monthly/", params={"year": "abc", "month": 1})
        assert response.status_code == 422


class TestYearlyReportEndpoint:
    """Tests for GET /api/reports/yearly/."""

    def test_yearly_report(self, seeded_client):
        response = seeded_client.get("/api/reports/yearly/", params={"year": 2026})
        assert response.status_code == 200
        data = response.json()
        assert data["total_income"] == 250000
        assert data["total_expense"] == 5500
        assert data["net_balance"] == 244500
        assert [m["month"] for m in data["monthly_summary"]] == list(range(1, 13))
        assert data["monthly_summary"][0] == {
            "month": 1,
            "total_income": 250000,
            "total_expense": 1500,
            "net_balance": 248500,
        }
        assert data["monthly_summary"][2]["total_expense"] == 4000

    def test_empty_year(self, seeded_client):
        data = seeded_client.get("/api/reports/yearly/", params={"year": 1990}).json()
        assert len(data["monthly_summary"]) == 12
        assert data["total_income"] == 0
        assert data["net_balance"] == 0


class TestCategoryReportEndpoint:
    """Tests for GET /api/reports/by-category/."""

    def test_unbounded(self, seeded_client):
        response = seeded_client.get("/api/reports/by-category/")
        assert response.status_code == 200
        data = response.json()
        assert data["start_date"] is None
        assert data["end_date"] is None
        groups = {c["category_id"]: c for c in data["categories"]}
        assert groups[1]["total_amount"] == 250000
        assert groups[2] == {
            "category_id": 2,
            "category_name": "Unknown",
            "total_amount": 5500,
            "transaction_count": 2,
        }
        assert data["total_income"] == 250000
        assert data["total_expense"] == 5500

    def test_date_range(self, seeded_client):
        response = seeded_client.get(
            "/api/reports/by-category/",
            params={"start_date": "2026-01-26", "end_date": "2026-01-31"},
        )
        data = response.json()
        assert data["start_date"] == "2026-01-26"
        assert data["end_date"] == "2026-01-31"
        assert [c["category_id"] for c in data["categories"]] == [2]
        assert data["total_expense"] == 1500
        assert data["total_income"] == 0

    def test_malformed_bound_is_ignored(self, seeded_client):
        response = seeded_client.get(
            "/api/reports/by-category/",
            params={"start_date": "26/01/2026", "end_date": "2026-02-01"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["start_date"] == "26/01/2026"
        assert data["total_income"] == 250000
        assert data["total_expense"] == 1500


class TestDeletedCategory:
    """Tests for reports after a category is deleted."""

    def test_new_category_does_not_inherit_transactions(self, client):
        client.post("/api/categories/", json={"name": "Food", "category_type": "expense"})
        rent = client.post("/api/categories/", json={"name": "Rent", "category_type": "expense"}).json()
        client.post(
            "/api/transactions/",
            json={
                "amount": 80000,
                "category_id": rent["id"],
                "transaction_date": "2026-01-05",
                "transaction_type": "expense",
            },
        )
        assert client.delete(f"/api/categories/{rent['id']}/").status_code == 204

        hobby = client.post("/api/categories/", json={"name": "Hobby", "category_type": "expense"}).json()
        assert hobby["id"] > rent["id"]

        data = client.get("/api/reports/monthly/", params={"year": 2026, "month": 1}).json()
        assert [c["category_name"] for c in data["expense_by_category"]] == ["Unknown"]
