"""Top level API router registration."""
from fastapi import APIRouter, FastAPI

from sales_insights.api.routes import health, transactions


def register_routes(application: FastAPI) -> None:
    """Register all API routers with the FastAPI application."""
    api_router = APIRouter(prefix="/api")

    api_router.include_router(health.router, tags=["health"])
    api_router.include_router(transactions.router, tags=["transactions"])

    application.include_router(api_router)


__all__ = ["register_routes"]
