"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sales_insights.api.routes import register_routes
from sales_insights.core.config import Settings, get_settings
from sales_insights.core.logging import configure_logging
from sales_insights.db.session import SessionLocal, engine
from sales_insights.models import Base
from sales_insights.obs import (
    PrometheusMiddleware,
    RequestLogMiddleware,
    initialise_tracing,
    instrument_fastapi_app,
    metrics_router,
)
from sales_insights.services import (
    SeedSourceClient,
    TransactionQueryService,
    TransactionServiceError,
    TransactionStore,
)

logger = logging.getLogger(__name__)


async def handle_service_error(request: Request, exc: TransactionServiceError) -> JSONResponse:
    """Render service failures as ``{message, error}`` payloads."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message, "error": exc.detail})


def _seed_on_startup(settings: Settings) -> None:
    with SessionLocal() as session, SeedSourceClient(
        settings.seed_source_url, timeout=settings.seed_source_timeout_seconds
    ) as seed_source:
        service = TransactionQueryService(TransactionStore(session), seed_source=seed_source, settings=settings)
        try:
            result = service.seed()
        except TransactionServiceError as exc:
            logger.error("Startup seeding failed: %s (%s)", exc.message, exc.detail)
        else:
            logger.info(result.message)


def create_application(settings: Settings | None = None) -> FastAPI:
    """Application factory used by ASGI servers and tests."""
    configure_logging()
    settings = settings or get_settings()

    if settings.enable_tracing:
        initialise_tracing(service_name=settings.app_name, endpoint=settings.otel_exporter_endpoint)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if settings.create_schema_on_startup:
            Base.metadata.create_all(bind=engine)
        if settings.seed_on_startup:
            _seed_on_startup(settings)
        yield

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        lifespan=lifespan,
    )

    application.add_exception_handler(TransactionServiceError, handle_service_error)
    application.add_middleware(RequestLogMiddleware)
    if settings.enable_metrics:
        application.add_middleware(PrometheusMiddleware)
        application.include_router(metrics_router)
    register_routes(application)

    if settings.enable_tracing:
        instrument_fastapi_app(application)

    return application


app = create_application()
