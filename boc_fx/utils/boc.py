"""Bank of Canada specific constants and invariants used across the package."""

from __future__ import annotations

from datetime import datetime, time
from typing import Final
from zoneinfo import ZoneInfo

VALET_BASE_URL: Final[str] = "https://www.bankofcanada.ca/valet/"

DOMESTIC_CURRENCY: Final[str] = "CAD"
SERIES_PREFIX: Final[str] = "FX"

# Valet history for the daily FX series starts with 2017.
BOC_MIN_AVAILABLE_YEAR: Final[int] = 2017
# Daily rates are published on weekdays at 16:30 Eastern Time.
BOC_PUBLICATION_TIME: Final[time] = time(16, 30)
BOC_TIMEZONE: Final[ZoneInfo] = ZoneInfo("America/Toronto")

BOC_SCHEDULE_NOTE: Final[str] = (
    "Bank of Canada conversion rates are updated weekdays at 16:30 ET."
)


def eastern_now() -> datetime:
    """Return the current wall clock time in the Bank of Canada time zone."""

    return datetime.now(BOC_TIMEZONE)


def to_eastern(moment: datetime) -> datetime:
    """Express ``moment`` in Eastern Time.

    Naive datetimes are taken to already be Eastern wall clock time.
    """

    if moment.tzinfo is None:
        return moment.replace(tzinfo=BOC_TIMEZONE)
    return moment.astimezone(BOC_TIMEZONE)


def series_code(source: str, destination: str) -> str:
    """Return the Valet series key quoting ``source`` in ``destination`` units."""

    return f"{SERIES_PREFIX}{source}{destination}"


__all__ = [
    "VALET_BASE_URL",
    "DOMESTIC_CURRENCY",
    "SERIES_PREFIX",
    "BOC_MIN_AVAILABLE_YEAR",
    "BOC_PUBLICATION_TIME",
    "BOC_TIMEZONE",
    "BOC_SCHEDULE_NOTE",
    "eastern_now",
    "to_eastern",
    "series_code",
]
