"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from typing import Callable

import pytest

from boc_fx.ingestion.models import Observation
from boc_fx.utils.boc import BOC_TIMEZONE

# Rates published by the Bank of Canada for Friday 2020-07-10.
VALET_FIXTURE = {
    "FXUSDCAD": Observation(reported_date="2020-07-10", values={"FXUSDCAD": "1.3594"}),
    "FXCADUSD": Observation(reported_date="2020-07-10", values={"FXCADUSD": "0.7356"}),
}


class FakeFetcher:
    """In-memory :class:`ObservationFetcher` recording every call."""

    def __init__(
        self,
        observations: dict[str, Observation] | None = None,
        *,
        error: BaseException | None = None,
        delay: float = 0.0,
    ) -> None:
        self.observations = observations if observations is not None else dict(VALET_FIXTURE)
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, date | None]] = []

    async def fetch_observation(self, series: str, on: date | None = None) -> Observation:
        self.calls.append((series, on))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.observations[series]


@pytest.fixture
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture
def after_publication() -> datetime:
    """Wednesday 2024-03-06, 17:00 Eastern: today's rate is already out."""

    return datetime(2024, 3, 6, 17, 0, tzinfo=BOC_TIMEZONE)


@pytest.fixture
def clock(after_publication: datetime) -> Callable[[], datetime]:
    return lambda: after_publication
