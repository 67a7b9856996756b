"""ORM models package."""
from .base import Base
from .transaction import Transaction

__all__ = ["Base", "Transaction"]
