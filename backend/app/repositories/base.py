"""
Ledger Repository Interface

Every store backend implements this protocol. The report engine reads only
list_categories() and list_transactions(); the CRUD services use the rest.
"""

from typing import Optional, Protocol

from app.schemas.models import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    Transaction,
    TransactionCreate,
    TransactionUpdate,
)


class LedgerRepository(Protocol):
    def list_categories(self) -> list[Category]: ...

    def get_category(self, category_id: int) -> Optional[Category]: ...

    def create_category(self, payload: CategoryCreate) -> Category: ...

    def update_category(self, category_id: int, payload: CategoryUpdate) -> Optional[Category]: ...

    def delete_category(self, category_id: int) -> bool: ...

    def list_transactions(self) -> list[Transaction]: ...

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]: ...

    def create_transaction(self, payload: TransactionCreate) -> Transaction: ...

    def update_transaction(
        self, transaction_id: int, payload: TransactionUpdate
    ) -> Optional[Transaction]: ...

    def delete_transaction(self, transaction_id: int) -> bool: ...
