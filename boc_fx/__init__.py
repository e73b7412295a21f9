"""Public interface for the boc_fx package."""

from __future__ import annotations

from datetime import date, datetime
from importlib import metadata as importlib_metadata
from typing import Callable

from boc_fx.config import ValetSettings
from boc_fx.conversion import (
    ConversionDirection,
    ConversionError,
    ConversionResult,
    CurrencyConverter,
    ErrorKind,
    InvalidInputError,
    MissingInputError,
    NoDataForDateError,
    UnexpectedFailureError,
    UpstreamUnavailableError,
)
from boc_fx.conversion.validator import AmountInput
from boc_fx.ingestion.strategy import ObservationFetcher
from boc_fx.ingestion.valet import ValetClient
from boc_fx.utils.boc import eastern_now

__all__ = [
    "__version__",
    "BocFx",
    "ValetSettings",
    "ValetClient",
    "CurrencyConverter",
    "ConversionDirection",
    "ConversionResult",
    "ConversionError",
    "ErrorKind",
    "MissingInputError",
    "InvalidInputError",
    "NoDataForDateError",
    "UpstreamUnavailableError",
    "UnexpectedFailureError",
]

try:
    __version__ = importlib_metadata.version("boc-fx")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class BocFx:
    """Package facade wiring a Valet client, a clock and the converter.

    Unlike :meth:`CurrencyConverter.convert`, :meth:`convert` raises the
    classified :class:`ConversionError` instead of returning it.
    """

    __slots__ = ("settings", "client", "converter")

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        settings: ValetSettings | None = None,
        *,
        fetcher: ObservationFetcher | None = None,
        clock: Callable[[], datetime] = eastern_now,
        timeout: float | None = None,
    ) -> None:
        """Configure where rates come from.

        When ``fetcher`` is omitted a :class:`ValetClient` is created from
        ``settings`` (or :meth:`ValetSettings.from_env`). Supplying a fetcher
        is mostly useful for tests and offline fixtures.
        """

        self.settings = settings or ValetSettings.from_env()
        self.client: ValetClient | None = None
        if fetcher is None:
            self.client = ValetClient(self.settings)
            fetcher = self.client
        self.converter = CurrencyConverter(fetcher, clock=clock, timeout=timeout)

    async def convert(
        self,
        foreign_code: str | None,
        direction: ConversionDirection | str | None,
        amount: AmountInput,
        rate_date: date | str | None = None,
    ) -> ConversionResult:
        """Convert ``amount`` between ``foreign_code`` and CAD or raise the failure."""

        outcome = await self.converter.convert(foreign_code, direction, amount, rate_date)
        if isinstance(outcome, ConversionError):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()

    async def __aenter__(self) -> "BocFx":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
