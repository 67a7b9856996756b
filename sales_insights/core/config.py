"""Configuration management for the sales insights service."""
from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="Sales Insights API")
    version: str = Field(default="0.1.0")
    docs_url: str | None = Field(default="/docs")
    redoc_url: str | None = Field(default="/redoc")
    openapi_url: str = Field(default="/openapi.json")

    database_url: str = Field(default="sqlite+pysqlite:///./sales_insights.db")
    create_schema_on_startup: bool = Field(default=True)

    seed_source_url: str = Field(
        default="https://s3.amazonaws.com/roxiler.com/product_transaction.json",
        validation_alias=AliasChoices("seed_source_url", "third_party_api"),
        description="Endpoint returning the JSON array used to seed the transaction store.",
    )
    seed_source_timeout_seconds: float = Field(default=10.0, gt=0)
    seed_on_startup: bool = Field(default=False)

    default_page: int = Field(default=1, ge=1)
    default_per_page: int = Field(default=10, ge=1)
    # When enabled, the price branch uses the number search text starts with, or 0 when there is none.
    search_legacy_price_fallback: bool = Field(default=False)

    enable_metrics: bool = Field(default=True)
    enable_tracing: bool = Field(default=False)
    otel_exporter_endpoint: str | None = Field(default=None)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]
