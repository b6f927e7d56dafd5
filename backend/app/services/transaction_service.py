from __future__ import annotations

from fastapi import HTTPException

from app.core.logging import get_logger
from app.repositories.base import LedgerRepository
from app.schemas.models import (
    Transaction,
    TransactionCreate,
    TransactionSummary,
    TransactionType,
    TransactionUpdate,
)

logger = get_logger("kakeibo.services.transaction")


class TransactionService:
    def __init__(self, repository: LedgerRepository) -> None:
        self.repository = repository

    def list_transactions(self) -> list[Transaction]:
        return self.repository.list_transactions()

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Get a transaction by ID.

        Raises:
            HTTPException: If the transaction does not exist
        """
        transaction = self.repository.get_transaction(transaction_id)
        if transaction is None:
            raise self._not_found(transaction_id)
        return transaction

    def create_transaction(self, payload: TransactionCreate) -> Transaction:
        # Dangling category references are allowed; reports label them "Unknown"
        if self.repository.get_category(payload.category_id) is None:
            logger.warning(
                f"Transaction references missing category {payload.category_id}"
            )
        return self.repository.create_transaction(payload)

    def update_transaction(self, transaction_id: int, payload: TransactionUpdate) -> Transaction:
        transaction = self.repository.update_transaction(transaction_id, payload)
        if transaction is None:
            raise self._not_found(transaction_id)
        logger.info(f"Updated transaction {transaction_id}")
        return transaction

    def delete_transaction(self, transaction_id: int) -> None:
        if not self.repository.delete_transaction(transaction_id):
            raise self._not_found(transaction_id)
        logger.info(f"Deleted transaction {transaction_id}")

    def summary(self) -> TransactionSummary:
        return self.build_summary(self.repository.list_transactions())

    @staticmethod
    def build_summary(transactions: list[Transaction]) -> TransactionSummary:
        income = sum(t.amount for t in transactions if t.transaction_type == TransactionType.INCOME)
        expense = sum(t.amount for t in transactions if t.transaction_type == TransactionType.EXPENSE)
        return TransactionSummary(
            total_income=income,
            total_expense=expense,
            balance=income - expense,
            transaction_count=len(transactions),
        )

    @staticmethod
    def _not_found(transaction_id: int) -> HTTPException:
        logger.warning(f"Transaction not found: {transaction_id}")
        return HTTPException(status_code=404, detail=f"Transaction with id {transaction_id} not found")
