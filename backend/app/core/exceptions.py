"""Custom exceptions for the Kakeibo application."""

from __future__ import annotations


class KakeiboError(Exception):
    """Base exception for all Kakeibo errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(KakeiboError):
    """Raised when application settings are invalid."""

    pass


class StorageError(KakeiboError):
    """Raised when the ledger store cannot read or write a record."""

    pass
