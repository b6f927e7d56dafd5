from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_category_service, get_transaction_service
from app.schemas.models import (
    Category,
    CategoryCreate,
    CategoryListResponse,
    CategoryUpdate,
    Transaction,
    TransactionCreate,
    TransactionListResponse,
    TransactionSummary,
    TransactionUpdate,
)
from app.services.category_service import CategoryService
from app.services.transaction_service import TransactionService

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# =============================================================================
# Categories
# =============================================================================

@router.get("/api/categories/", response_model=CategoryListResponse)
def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> CategoryListResponse:
    """List all categories."""
    categories = service.list_categories()
    return CategoryListResponse(count=len(categories), results=categories)


@router.get("/api/categories/{category_id}/", response_model=Category)
def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> Category:
    return service.get_category(category_id)


@router.post("/api/categories/", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> Category:
    """Create a new category. Its type is fixed from here on."""
    return service.create_category(payload)


@router.put("/api/categories/{category_id}/", response_model=Category)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
) -> Category:
    """Update a category's name, icon or color."""
    return service.update_category(category_id, payload)


@router.delete("/api/categories/{category_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> Response:
    service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Transactions
# =============================================================================

@router.get("/api/transactions/", response_model=TransactionListResponse)
def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    """List all transactions."""
    transactions = service.list_transactions()
    return TransactionListResponse(count=len(transactions), results=transactions)


@router.get("/api/transactions/summary/", response_model=TransactionSummary)
def transaction_summary(
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionSummary:
    """Income, expense and balance over every recorded transaction."""
    return service.summary()


@router.get("/api/transactions/{transaction_id}/", response_model=Transaction)
def get_transaction(
    transaction_id: int,
    service: TransactionService = Depends(get_transaction_service),
) -> Transaction:
    return service.get_transaction(transaction_id)


@router.post("/api/transactions/", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
) -> Transaction:
    """Record a transaction. Amounts are positive; the type carries the sign."""
    return service.create_transaction(payload)


@router.put("/api/transactions/{transaction_id}/", response_model=Transaction)
def update_transaction(
    transaction_id: int,
    payload: TransactionUpdate,
    service: TransactionService = Depends(get_transaction_service),
) -> Transaction:
    return service.update_transaction(transaction_id, payload)


@router.delete("/api/transactions/{transaction_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    service: TransactionService = Depends(get_transaction_service),
) -> Response:
    service.delete_transaction(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
