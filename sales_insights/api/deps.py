"""Common dependencies for API routes."""
from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from sales_insights.core.config import Settings, get_settings
from sales_insights.db.session import SessionLocal
from sales_insights.services import SeedSourceClient, TransactionQueryService, TransactionStore


def get_db_session() -> Iterator[Session]:
    """Yield a database session for FastAPI dependencies."""

    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_seed_source(settings: Settings = Depends(get_settings)) -> Iterator[SeedSourceClient]:
    """Yield a seed source client bound to the configured endpoint."""

    client = SeedSourceClient(settings.seed_source_url, timeout=settings.seed_source_timeout_seconds)
    try:
        yield client
    finally:
        client.close()


def get_transaction_service(
    session: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> TransactionQueryService:
    return TransactionQueryService(TransactionStore(session), settings=settings)


def get_seeding_service(
    session: Session = Depends(get_db_session),
    seed_source: SeedSourceClient = Depends(get_seed_source),
    settings: Settings = Depends(get_settings),
) -> TransactionQueryService:
    return TransactionQueryService(TransactionStore(session), seed_source=seed_source, settings=settings)


__all__ = ["get_db_session", "get_seed_source", "get_seeding_service", "get_transaction_service"]
