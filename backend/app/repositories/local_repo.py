"""
Local Repository

File-backed ledger store. Each record is one JSON document:

    data/categories/{id}.json
    data/transactions/{id}.json
    data/_counters.json          (last id handed out per collection)

Ids never repeat: the counter only moves forward, even after the newest
record is deleted. A lock serializes id allocation and writes so concurrent
requests always read a consistent snapshot.
"""

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import StorageError
from app.core.logging import get_logger
from app.schemas.models import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    Transaction,
    TransactionCreate,
    TransactionUpdate,
)

logger = get_logger("kakeibo.repositories.local")

RecordT = TypeVar("RecordT", Category, Transaction)


class LocalRepository:
    def __init__(self, base_dir: Path | None = None) -> None:
        root = base_dir or Path(__file__).resolve().parents[2] / "data"
        self.data_dir = root
        self.category_dir = self.data_dir / "categories"
        self.transaction_dir = self.data_dir / "transactions"
        self.category_dir.mkdir(parents=True, exist_ok=True)
        self.transaction_dir.mkdir(parents=True, exist_ok=True)
        self.counter_path = self.data_dir / "_counters.json"
        self._lock = threading.Lock()

    # =========================================================================
    # Categories
    # =========================================================================

    def list_categories(self) -> list[Category]:
        with self._lock:
            return [self._parse(Category, data) for data in self._read_all(self.category_dir)]

    def get_category(self, category_id: int) -> Optional[Category]:
        with self._lock:
            data = self._read(self.category_dir, category_id)
        return self._parse(Category, data) if data is not None else None

    def create_category(self, payload: CategoryCreate) -> Category:
        with self._lock:
            category = Category(
                id=self._next_id(self.category_dir, "categories"),
                created_at=self._utc_now(),
                **payload.model_dump(),
            )
            self._write(self.category_dir, category.id, category.model_dump(mode="json"))
        logger.info(f"Created category {category.id} ({category.name})")
        return category

    def update_category(self, category_id: int, payload: CategoryUpdate) -> Optional[Category]:
        with self._lock:
            data = self._read(self.category_dir, category_id)
            if data is None:
                return None
            changes = payload.model_dump(exclude_none=True)
            category = self._parse(Category, data).model_copy(update=changes)
            self._write(self.category_dir, category_id, category.model_dump(mode="json"))
        return category

    def delete_category(self, category_id: int) -> bool:
        with self._lock:
            return self._delete(self.category_dir, category_id)

    # =========================================================================
    # Transactions
    # =========================================================================

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return [self._parse(Transaction, data) for data in self._read_all(self.transaction_dir)]

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        with self._lock:
            data = self._read(self.transaction_dir, transaction_id)
        return self._parse(Transaction, data) if data is not None else None

    def create_transaction(self, payload: TransactionCreate) -> Transaction:
        now = self._utc_now()
        with self._lock:
            transaction = Transaction(
                id=self._next_id(self.transaction_dir, "transactions"),
                created_at=now,
                updated_at=now,
                **payload.model_dump(),
            )
            self._write(self.transaction_dir, transaction.id, transaction.model_dump(mode="json"))
        logger.info(f"Created transaction {transaction.id} ({transaction.transaction_type.value})")
        return transaction

    def update_transaction(
        self, transaction_id: int, payload: TransactionUpdate
    ) -> Optional[Transaction]:
        with self._lock:
            data = self._read(self.transaction_dir, transaction_id)
            if data is None:
                return None
            changes = payload.model_dump(exclude_none=True)
            changes["updated_at"] = self._utc_now()
            transaction = self._parse(Transaction, data).model_copy(update=changes)
            self._write(self.transaction_dir, transaction_id, transaction.model_dump(mode="json"))
        return transaction

    def delete_transaction(self, transaction_id: int) -> bool:
        with self._lock:
            return self._delete(self.transaction_dir, transaction_id)

    # =========================================================================
    # File helpers (callers hold the lock)
    # =========================================================================

    @staticmethod
    def _utc_now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _parse(model: type[RecordT], data: dict[str, Any]) -> RecordT:
        try:
            return model(**data)
        except PydanticValidationError as e:
            raise StorageError(
                f"Stored {model.__name__.lower()} record is invalid",
                details={"record_id": data.get("id"), "error": str(e)},
            ) from e

    @staticmethod
    def _record_ids(directory: Path) -> list[int]:
        ids: list[int] = []
        for path in directory.glob("*.json"):
            if path.stem.isdigit():
                ids.append(int(path.stem))
        return sorted(ids)

    def _read_counters(self) -> dict[str, int]:
        if not self.counter_path.exists():
            return {}
        try:
            counters = json.loads(self.counter_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(
                "Failed to read id counters",
                details={"path": str(self.counter_path), "error": str(e)},
            ) from e
        if not isinstance(counters, dict):
            raise StorageError("Id counters are not a JSON object", details={"path": str(self.counter_path)})
        return counters

    def _next_id(self, directory: Path, collection: str) -> int:
        counters = self._read_counters()
        ids = self._record_ids(directory)
        # Records written before the counter existed still count
        last = max(int(counters.get(collection, 0)), ids[-1] if ids else 0)
        counters[collection] = last + 1
        try:
            self.counter_path.write_text(json.dumps(counters, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(
                "Failed to write id counters",
                details={"path": str(self.counter_path), "error": str(e)},
            ) from e
        return last + 1

    def _read(self, directory: Path, record_id: int) -> dict[str, Any] | None:
        path = directory / f"{record_id}.json"
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read record {path}: {e}")
            raise StorageError(
                f"Failed to read record {path.name}",
                details={"path": str(path), "error": str(e)},
            ) from e
        if not isinstance(data, dict):
            logger.error(f"Record {path} is not a JSON object")
            raise StorageError(
                f"Record {path.name} is not a JSON object",
                details={"path": str(path), "record_id": record_id},
            )
        return data

    def _read_all(self, directory: Path) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        for record_id in self._record_ids(directory):
            data = self._read(directory, record_id)
            if data is not None:
                records.append(data)
        return records

    @staticmethod
    def _write(directory: Path, record_id: int, payload: dict[str, Any]) -> None:
        path = directory / f"{record_id}.json"
        try:
            path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(
                f"Failed to write record {path.name}",
                details={"path": str(path), "error": str(e)},
            ) from e

    @staticmethod
    def _delete(directory: Path, record_id: int) -> bool:
        path = directory / f"{record_id}.json"
        if not path.exists():
            return False
        path.unlink()
        return True
