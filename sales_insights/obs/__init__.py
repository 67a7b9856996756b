"""Observability utilities."""

from .metrics import (
    REQUEST_COUNTER,
    REQUEST_ERROR_COUNTER,
    REQUEST_LATENCY_SECONDS,
    SEEDED_RECORDS_COUNTER,
    SEED_RUNS_COUNTER,
    PrometheusMiddleware,
    metrics_router,
    record_seed_run,
)
from .requests import REQUEST_ID_HEADER, RequestLogMiddleware, RequestLogRecord
from .tracing import (
    initialise_tracing,
    inject_traceparent,
    instrument_fastapi_app,
    instrument_sqlalchemy_engine,
)

__all__ = [
    "PrometheusMiddleware",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_ID_HEADER",
    "REQUEST_LATENCY_SECONDS",
    "RequestLogMiddleware",
    "RequestLogRecord",
    "SEEDED_RECORDS_COUNTER",
    "SEED_RUNS_COUNTER",
    "metrics_router",
    "record_seed_run",
    "initialise_tracing",
    "inject_traceparent",
    "instrument_fastapi_app",
    "instrument_sqlalchemy_engine",
]
