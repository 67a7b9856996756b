"""Seed the transaction store from the configured upstream source."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sales_insights.core.config import get_settings
from sales_insights.core.logging import configure_logging
from sales_insights.db.session import SessionLocal, engine
from sales_insights.models import Base
from sales_insights.services import (
    SeedSourceClient,
    TransactionQueryService,
    TransactionServiceError,
    TransactionStore,
)

logger = logging.getLogger("sales_insights.scripts.seed")


def main() -> int:
    configure_logging()
    settings = get_settings()
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as session, SeedSourceClient(
        settings.seed_source_url, timeout=settings.seed_source_timeout_seconds
    ) as seed_source:
        service = TransactionQueryService(TransactionStore(session), seed_source=seed_source, settings=settings)
        try:
            result = service.seed()
        except TransactionServiceError as exc:
            logger.error("%s: %s", exc.message, exc.detail)
            return 1

    logger.info("%s (%d records inserted)", result.message, result.inserted)
    return 0


if __name__ == "__main__":
    sys.exit(main())
