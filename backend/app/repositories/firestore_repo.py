"""
Firestore Repository

Ledger store backed by Firestore.

Data Structure:
    categories/{id}          - Category documents (id is the integer id as a string)
    transactions/{id}        - Transaction documents
    _counters/{collection}   - Last allocated integer id per collection
"""

from datetime import datetime, timezone
from typing import Any, Optional

import firebase_admin
from firebase_admin import firestore

from app.core.logging import get_logger
from app.schemas.models import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    Transaction,
    TransactionCreate,
    TransactionUpdate,
)

logger = get_logger("kakeibo.repositories.firestore")


@firestore.transactional
def _increment_counter(transaction, counter_ref) -> int:
    """Atomically bump a counter document and return the new value."""
    snapshot = counter_ref.get(transaction=transaction)
    current = snapshot.to_dict().get("value", 0) if snapshot.exists else 0
    transaction.set(counter_ref, {"value": current + 1})
    return current + 1


class FirestoreRepository:
    """Repository using Firestore for ledger persistence."""

    def __init__(self, client: Any = None) -> None:
        if client is None:
            # Initialize Firebase Admin SDK with Application Default Credentials
            if not firebase_admin._apps:
                firebase_admin.initialize_app()
            client = firestore.client()

        self.db = client

        # Collection references
        self.categories_collection = "categories"
        self.transactions_collection = "transactions"
        self.counters_collection = "_counters"

    # =========================================================================
    # Categories
    # =========================================================================

    def list_categories(self) -> list[Category]:
        docs = self.db.collection(self.categories_collection).order_by("id").stream()
        return [Category(**doc.to_dict()) for doc in docs]

    def get_category(self, category_id: int) -> Optional[Category]:
        data = self._get(self.categories_collection, category_id)
        return Category(**data) if data is not None else None

    def create_category(self, payload: CategoryCreate) -> Category:
        category = Category(
            id=self._next_id(self.categories_collection),
            created_at=self._utc_now(),
            **payload.model_dump(),
        )
        self._doc(self.categories_collection, category.id).set(category.model_dump(mode="json"))
        logger.info(f"Created category {category.id} ({category.name})")
        return category

    def update_category(self, category_id: int, payload: CategoryUpdate) -> Optional[Category]:
        data = self._get(self.categories_collection, category_id)
        if data is None:
            return None
        changes = payload.model_dump(exclude_none=True)
        category = Category(**data).model_copy(update=changes)
        if changes:
            self._doc(self.categories_collection, category_id).update(
                category.model_dump(mode="json", include=set(changes))
            )
        return category

    def delete_category(self, category_id: int) -> bool:
        return self._delete(self.categories_collection, category_id)

    # =========================================================================
    # Transactions
    # =========================================================================

    def list_transactions(self) -> list[Transaction]:
        docs = self.db.collection(self.transactions_collection).order_by("id").stream()
        return [Transaction(**doc.to_dict()) for doc in docs]

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        data = self._get(self.transactions_collection, transaction_id)
        return Transaction(**data) if data is not None else None

    def create_transaction(self, payload: TransactionCreate) -> Transaction:
        now = self._utc_now()
        transaction = Transaction(
            id=self._next_id(self.transactions_collection),
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        self._doc(self.transactions_collection, transaction.id).set(
            transaction.model_dump(mode="json")
        )
        logger.info(f"Created transaction {transaction.id} ({transaction.transaction_type.value})")
        return transaction

    def update_transaction(
        self, transaction_id: int, payload: TransactionUpdate
    ) -> Optional[Transaction]:
        data = self._get(self.transactions_collection, transaction_id)
        if data is None:
            return None
        changes = payload.model_dump(exclude_none=True)
        changes["updated_at"] = self._utc_now()
        transaction = Transaction(**data).model_copy(update=changes)
        self._doc(self.transactions_collection, transaction_id).update(
            transaction.model_dump(mode="json", include=set(changes))
        )
        return transaction

    def delete_transaction(self, transaction_id: int) -> bool:
        return self._delete(self.transactions_collection, transaction_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _utc_now() -> datetime:
        return datetime.now(timezone.utc)

    def _doc(self, collection: str, record_id: int):
        return self.db.collection(collection).document(str(record_id))

    def _get(self, collection: str, record_id: int) -> dict[str, Any] | None:
        doc = self._doc(collection, record_id).get()
        if not doc.exists:
            return None
        return doc.to_dict()

    def _delete(self, collection: str, record_id: int) -> bool:
        ref = self._doc(collection, record_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True

    def _next_id(self, collection: str) -> int:
        counter_ref = self.db.collection(self.counters_collection).document(collection)
        return _increment_counter(self.db.transaction(), counter_ref)
