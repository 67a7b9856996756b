"""SQLAlchemy session management."""
from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from sales_insights.core.config import get_settings
from sales_insights.obs import instrument_sqlalchemy_engine


def build_engine(database_url: str) -> Engine:
    """Create an engine, allowing SQLite connections to cross request threads."""
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


settings = get_settings()
engine = build_engine(settings.database_url)
if settings.enable_tracing:
    instrument_sqlalchemy_engine(engine)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


__all__ = ["SessionLocal", "build_engine", "engine"]
