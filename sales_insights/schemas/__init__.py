"""Pydantic schemas package."""

from .transaction import (
    CategoryCount,
    CombinedResponse,
    ErrorResponse,
    MessageResponse,
    PriceRangeCount,
    StatisticsResponse,
    TransactionRead,
    TransactionSeed,
)

__all__ = [
    "CategoryCount",
    "CombinedResponse",
    "ErrorResponse",
    "MessageResponse",
    "PriceRangeCount",
    "StatisticsResponse",
    "TransactionRead",
    "TransactionSeed",
]
