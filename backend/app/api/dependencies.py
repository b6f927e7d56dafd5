"""
FastAPI dependencies.

The repository is created lazily on first use so importing the app never
connects to Firestore. Tests replace get_repository through
app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends

from app.core.config import get_settings
from app.core.exceptions import ConfigurationError
from app.core.logging import get_logger
from app.repositories.base import LedgerRepository
from app.services.category_service import CategoryService
from app.services.report_service import ReportService
from app.services.transaction_service import TransactionService

logger = get_logger("kakeibo.api")

_repo: Optional[LedgerRepository] = None


def build_repository(backend: str) -> LedgerRepository:
    settings = get_settings()
    if backend == "local":
        from app.repositories.local_repo import LocalRepository

        return LocalRepository(settings.data_dir)
    if backend == "firestore":
        from app.repositories.firestore_repo import FirestoreRepository

        return FirestoreRepository()
    raise ConfigurationError(f"Unknown storage backend: {backend}")


def get_repository() -> LedgerRepository:
    global _repo
    if _repo is None:
        backend = get_settings().storage_backend
        _repo = build_repository(backend)
        logger.info(f"Using {backend} ledger storage")
    return _repo


def get_category_service(repo: LedgerRepository = Depends(get_repository)) -> CategoryService:
    return CategoryService(repo)


def get_transaction_service(
    repo: LedgerRepository = Depends(get_repository),
) -> TransactionService:
    return TransactionService(repo)


def get_report_service(repo: LedgerRepository = Depends(get_repository)) -> ReportService:
    return ReportService(repo)
