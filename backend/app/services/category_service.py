from __future__ import annotations

from fastapi import HTTPException

from app.core.logging import get_logger
from app.repositories.base import LedgerRepository
from app.schemas.models import Category, CategoryCreate, CategoryUpdate

logger = get_logger("kakeibo.services.category")


class CategoryService:
    def __init__(self, repository: LedgerRepository) -> None:
        self.repository = repository

    def list_categories(self) -> list[Category]:
        return self.repository.list_categories()

    def get_category(self, category_id: int) -> Category:
        category = self.repository.get_category(category_id)
        if category is None:
            raise self._not_found(category_id)
        return category

    def create_category(self, payload: CategoryCreate) -> Category:
        return self.repository.create_category(payload)

    def update_category(self, category_id: int, payload: CategoryUpdate) -> Category:
        category = self.repository.update_category(category_id, payload)
        if category is None:
            raise self._not_found(category_id)
        logger.info(f"Updated category {category_id}")
        return category

    def delete_category(self, category_id: int) -> None:
        # Transactions keep their category_id; reports show them as "Unknown"
        if not self.repository.delete_category(category_id):
            raise self._not_found(category_id)
        logger.info(f"Deleted category {category_id}")

    @staticmethod
    def _not_found(category_id: int) -> HTTPException:
        logger.warning(f"Category not found: {category_id}")
        return HTTPException(status_code=404, detail=f"Category with id {category_id} not found")
