"""Async client for the Bank of Canada Valet observations API."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from boc_fx.config import ValetSettings
from boc_fx.ingestion.models import Observation
from boc_fx.ingestion.strategy import (
    NoObservationError,
    ObservationFetchError,
    ObservationFormatError,
)
from boc_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

DATE_FIELD = "d"
VALUE_FIELD = "v"


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, ObservationFetchError) and exc.retryable


class ValetClient:
    """Fetch single observations of Valet FX series.

    One ``httpx.AsyncClient`` is shared by every call, so a single instance can
    serve many concurrent conversions. Pass ``client`` to reuse an existing
    ``httpx.AsyncClient``; it is then left open by :meth:`aclose`.
    """

    def __init__(
        self,
        settings: ValetSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or ValetSettings()
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                headers={"Accept": "application/json"},
            )
        self._client = client

    async def fetch_observation(self, series: str, on: date | None = None) -> Observation:
        """Return the observation of ``series`` for ``on`` (or the most recent one)."""

        path = f"observations/{series}/json"
        if on is None:
            params: dict[str, Any] = {"recent": 1}
        else:
            params = {"start_date": on.isoformat(), "end_date": on.isoformat()}

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_attempts),
            wait=wait_exponential(multiplier=self.settings.backoff_seconds, max=30),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(LOGGER, logging.WARNING),
            reraise=True,
        )
        response = await retrying(self._get, path, params)
        return self._first_observation(self._decode(response), series, on)

    async def _get(self, path: str, params: dict[str, Any]) -> httpx.Response:
        LOGGER.debug("GET %s params=%s", path, params)
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ObservationFetchError(
                f"Valet responded with HTTP {status} for {exc.request.url}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise ObservationFetchError(f"Unable to reach Valet: {exc!r}") from exc
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ObservationFormatError(
                f"Valet returned a body that is not JSON for {response.request.url}"
            ) from exc

    @staticmethod
    def _first_observation(payload: Any, series: str, on: date | None) -> Observation:
        observations = payload.get("observations") if isinstance(payload, dict) else None
        if not isinstance(observations, list):
            raise ObservationFormatError("Valet response does not contain an observations list")
        if not observations:
            raise NoObservationError(series, on)

        entry = observations[0]
        if not isinstance(entry, dict):
            raise ObservationFormatError(f"Unexpected observation entry: {entry!r}")

        values = {
            key: str(item[VALUE_FIELD])
            for key, item in entry.items()
            if isinstance(item, dict) and VALUE_FIELD in item
        }
        reported = entry.get(DATE_FIELD)
        return Observation(
            reported_date=reported if isinstance(reported, str) else None,
            values=values,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client when this instance created it."""

        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ValetClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["ValetClient"]
