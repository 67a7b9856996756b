"""HTTP client wrapper for the upstream transaction feed."""
from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from sales_insights.obs import inject_traceparent
from sales_insights.schemas import TransactionSeed
from sales_insights.services.errors import SourceUnavailableError

logger = logging.getLogger(__name__)

_SEED_LIST_ADAPTER = TypeAdapter(list[TransactionSeed])


class SeedSourceClient:
    """Synchronous wrapper around the seed source endpoint."""

    def __init__(
        self,
        url: str,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = 10.0,
    ) -> None:
        self._url = url
        self._client = client or httpx.Client()
        self._owns_client = client is None
        self._timeout = timeout

    @property
    def url(self) -> str:
        return self._url

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SeedSourceClient":
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def fetch(self) -> list[TransactionSeed]:
        """Download and validate the full transaction feed."""
        try:
            response = self._client.get(
                self._url,
                headers=inject_traceparent({"Accept": "application/json"}),
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise SourceUnavailableError("Error fetching data", str(exc)) from exc
        except ValueError as exc:
            raise SourceUnavailableError("Error fetching data", f"invalid JSON payload: {exc}") from exc

        if not isinstance(payload, list):
            raise SourceUnavailableError(
                "Error fetching data", f"expected a JSON array, got {type(payload).__name__}"
            )

        try:
            records = _SEED_LIST_ADAPTER.validate_python(payload)
        except ValidationError as exc:
            raise SourceUnavailableError("Error fetching data", str(exc)) from exc

        logger.info("Fetched %d transactions from %s", len(records), self._url)
        return records


__all__ = ["SeedSourceClient"]
