"""Service layer for transaction queries and seeding."""

from .errors import (
    InvalidParameterError,
    MissingParameterError,
    SourceUnavailableError,
    StoreReadError,
    StoreWriteError,
    TransactionServiceError,
)
from .seed_source import SeedSourceClient
from .store import TransactionStore
from .transactions import SeedResult, TransactionQueryService, parse_month

__all__ = [
    "InvalidParameterError",
    "MissingParameterError",
    "SeedResult",
    "SeedSourceClient",
    "SourceUnavailableError",
    "StoreReadError",
    "StoreWriteError",
    "TransactionQueryService",
    "TransactionServiceError",
    "TransactionStore",
    "parse_month",
]
