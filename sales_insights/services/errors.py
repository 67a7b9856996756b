"""Error taxonomy shared by the transaction services."""
from __future__ import annotations


class TransactionServiceError(RuntimeError):
    """Base exception for transaction service errors."""

    status_code = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class MissingParameterError(TransactionServiceError):
    """Raised when a required query parameter is absent."""

    status_code = 400


class InvalidParameterError(TransactionServiceError):
    """Raised when a query parameter cannot be interpreted."""

    status_code = 400


class SourceUnavailableError(TransactionServiceError):
    """Raised when the seed source cannot deliver a usable payload."""


class StoreReadError(TransactionServiceError):
    """Raised when the record store fails to answer a query."""


class StoreWriteError(TransactionServiceError):
    """Raised when clearing or populating the record store fails."""


__all__ = [
    "InvalidParameterError",
    "MissingParameterError",
    "SourceUnavailableError",
    "StoreReadError",
    "StoreWriteError",
    "TransactionServiceError",
]
