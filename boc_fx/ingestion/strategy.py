"""Abstractions for pluggable observation sources."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from boc_fx.ingestion.models import Observation


class ObservationFetcher(Protocol):
    """Contract for fetching a single observation of a Valet series.

    ``on=None`` requests the most recent observation. Implementations raise
    :class:`NoObservationError` when the source has nothing for the date,
    :class:`ObservationFetchError` on transport failures and
    :class:`ObservationFormatError` when the payload cannot be read.
    """

    async def fetch_observation(self, series: str, on: date | None = None) -> Observation:
        ...  # pragma: no cover - protocol definition


class ObservationError(Exception):
    """Base class for failures reported by an :class:`ObservationFetcher`."""


class NoObservationError(ObservationError):
    """Raised when a series has no observation for the requested date."""

    def __init__(self, series: str, on: date | None = None) -> None:
        when = on.isoformat() if on else "the most recent period"
        super().__init__(f"No {series} observation published for {when}")
        self.series = series
        self.on = on


class ObservationFetchError(ObservationError):
    """Raised when the source could not be reached or answered with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """Connection problems and 5xx answers are worth another attempt."""

        return self.status_code is None or self.status_code >= 500


class ObservationFormatError(ObservationError):
    """Raised when the payload does not have the documented shape."""


__all__ = [
    "ObservationFetcher",
    "ObservationError",
    "NoObservationError",
    "ObservationFetchError",
    "ObservationFormatError",
]
