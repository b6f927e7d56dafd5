"""Pytest fixtures and configuration."""

from __future__ import annotations

import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Set environment variables before importing app modules
os.environ["STORAGE_BACKEND"] = "local"
os.environ["ENVIRONMENT"] = "development"

from app.repositories.local_repo import LocalRepository  # noqa: E402
from app.schemas.models import Category, Transaction  # noqa: E402

CREATED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_category(category_id: int, name: str, category_type: str = "expense") -> Category:
    return Category(
        id=category_id,
        name=name,
        category_type=category_type,
        created_at=CREATED_AT,
    )


def make_transaction(
    transaction_id: int,
    amount: int,
    category_id: int,
    transaction_date: date,
    transaction_type: str,
    description: str = "",
) -> Transaction:
    return Transaction(
        id=transaction_id,
        amount=amount,
        category_id=category_id,
        description=description,
        transaction_date=transaction_date,
        transaction_type=transaction_type,
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


@pytest.fixture
def sample_categories() -> list[Category]:
    """Categories for a small household ledger."""
    return [
        make_category(1, "Salary", "income"),
        make_category(2, "Food"),
        make_category(3, "Rent"),
        make_category(4, "Bonus", "income"),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Transactions spread over 2025 and 2026."""
    return [
        make_transaction(1, 250000, 1, date(2026, 1, 25), "income", "January salary"),
        make_transaction(2, 1500, 2, date(2026, 1, 3), "expense", "Lunch"),
        make_transaction(3, 3200, 2, date(2026, 1, 17), "expense", "Groceries"),
        make_transaction(4, 80000, 3, date(2026, 1, 31), "expense", "January rent"),
        make_transaction(5, 250000, 1, date(2026, 2, 25), "income", "February salary"),
        make_transaction(6, 80000, 3, date(2026, 2, 28), "expense", "February rent"),
        make_transaction(7, 100000, 4, date(2026, 6, 30), "income", "Summer bonus"),
        make_transaction(8, 900, 99, date(2026, 6, 1), "expense", "Uncategorized"),
        make_transaction(9, 240000, 1, date(2025, 12, 25), "income", "December salary"),
        make_transaction(10, 5000, 2, date(2025, 12, 31), "expense", "New year food"),
    ]


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for ledger data."""
    return tmp_path / "data"


@pytest.fixture
def local_repo(temp_data_dir: Path) -> LocalRepository:
    return LocalRepository(temp_data_dir)


@pytest.fixture
def client(local_repo: LocalRepository) -> Generator[TestClient, None, None]:
    """Create a test client backed by a temporary local repository."""
    from app.api.dependencies import get_repository
    from app.main import app

    app.dependency_overrides[get_repository] = lambda: local_repo

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_repository, None)
