"""
Ledger Models

Pydantic models for categories and transactions: stored records, request
payloads and list responses.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from app.core.logging import get_logger

logger = get_logger("kakeibo.schemas")


class CategoryType(str, Enum):
    """Whether a category collects income or expenses."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionType(str, Enum):
    """Whether a transaction is income or an expense."""

    INCOME = "income"
    EXPENSE = "expense"


def _lenient_type(value: Any, enum_cls: type[Enum], field: str) -> Any:
    """Parse a stored type value, falling back to expense for unknown values."""
    if isinstance(value, enum_cls):
        return value
    normalized = str(value).strip().lower()
    try:
        return enum_cls(normalized)
    except ValueError:
        logger.warning(f"Invalid stored {field} {value!r}, treating as expense")
        return enum_cls("expense")


# =============================================================================
# Stored Records
# =============================================================================


class Category(BaseModel):
    id: int
    name: str
    category_type: CategoryType
    icon: Optional[str] = None
    color: Optional[str] = None
    created_at: datetime

    @field_validator("category_type", mode="before")
    @classmethod
    def _parse_category_type(cls, value: Any) -> Any:
        return _lenient_type(value, CategoryType, "category_type")


class Transaction(BaseModel):
    id: int
    amount: int = Field(..., ge=0, description="Amount in the smallest currency unit.")
    category_id: int
    description: str = ""
    transaction_date: date
    transaction_type: TransactionType
    created_at: datetime
    updated_at: datetime

    @field_validator("transaction_type", mode="before")
    @classmethod
    def _parse_transaction_type(cls, value: Any) -> Any:
        return _lenient_type(value, TransactionType, "transaction_type")


# =============================================================================
# Request Models
# =============================================================================


class CategoryCreate(BaseModel):
    """Request model for creating a category."""

    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    category_type: CategoryType
    icon: Optional[str] = Field(default=None, max_length=50)
    color: Optional[str] = Field(default=None, max_length=7, description="Hex color, e.g. #FF5733")


class CategoryUpdate(BaseModel):
    """Request model for updating a category. The type cannot change."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    icon: Optional[str] = Field(default=None, max_length=50)
    color: Optional[str] = Field(default=None, max_length=7)


class TransactionCreate(BaseModel):
    """Request model for recording a transaction."""

    amount: int = Field(..., ge=1, description="Amount must be positive")
    category_id: int
    description: str = Field(default="", max_length=500)
    transaction_date: date
    transaction_type: TransactionType


class TransactionUpdate(BaseModel):
    """Request model for updating a transaction. The type cannot change."""

    amount: Optional[int] = Field(default=None, ge=1)
    category_id: Optional[int] = None
    description: Optional[str] = Field(default=None, max_length=500)
    transaction_date: Optional[date] = None


# =============================================================================
# Response Models
# =============================================================================


class CategoryListResponse(BaseModel):
    count: int
    results: list[Category]


class TransactionListResponse(BaseModel):
    count: int
    results: list[Transaction]


class TransactionSummary(BaseModel):
    total_income: int
    total_expense: int
    balance: int
    transaction_count: int
