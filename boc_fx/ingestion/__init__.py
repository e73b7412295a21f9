"""Fetching Bank of Canada observations."""

from boc_fx.ingestion.models import Observation
from boc_fx.ingestion.strategy import (
    NoObservationError,
    ObservationError,
    ObservationFetcher,
    ObservationFetchError,
    ObservationFormatError,
)

__all__ = [
    "Observation",
    "ObservationFetcher",
    "ObservationError",
    "NoObservationError",
    "ObservationFetchError",
    "ObservationFormatError",
]
