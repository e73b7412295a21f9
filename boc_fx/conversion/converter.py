"""Rate lookup and conversion between CAD and a foreign currency."""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext
from typing import AbstractSet, Callable

from boc_fx.conversion.errors import (
    ConversionError,
    NoDataForDateError,
    UnexpectedFailureError,
    UpstreamUnavailableError,
)
from boc_fx.conversion.models import ConversionDirection, ConversionRequest, ConversionResult
from boc_fx.conversion.validator import AmountInput, build_request
from boc_fx.ingestion.models import Observation
from boc_fx.ingestion.strategy import (
    NoObservationError,
    ObservationFetcher,
    ObservationFetchError,
    ObservationFormatError,
)
from boc_fx.utils.boc import DOMESTIC_CURRENCY, eastern_now, series_code

AMOUNT_QUANTUM = Decimal("0.0001")
# Banker's rounding, matching midpoint handling of financial runtimes.
AMOUNT_ROUNDING = ROUND_HALF_EVEN


def resolve_pair(foreign_code: str, direction: ConversionDirection) -> tuple[str, str]:
    """Return ``(source, destination)`` codes for ``direction``."""

    if direction is ConversionDirection.FOREIGN_TO_DOMESTIC:
        return foreign_code, DOMESTIC_CURRENCY
    return DOMESTIC_CURRENCY, foreign_code


def quantize_amount(value: Decimal) -> Decimal:
    """Round ``value`` to four fractional digits whatever its magnitude."""

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 6)
        return value.quantize(AMOUNT_QUANTUM, rounding=AMOUNT_ROUNDING)


def convert_amount(amount: Decimal, rate: Decimal) -> Decimal:
    """Multiply exactly, then quantize to four fractional digits."""

    with localcontext() as ctx:
        ctx.prec = max(
            ctx.prec, len(amount.as_tuple().digits) + len(rate.as_tuple().digits)
        )
        product = amount * rate
    return quantize_amount(product)


def read_observation(observation: Observation, series: str) -> tuple[Decimal, date]:
    """Extract the rate of ``series`` and the reported date from ``observation``."""

    raw_rate = observation.value_for(series)
    if raw_rate is None:
        raise UnexpectedFailureError(f"Observation does not contain a rate for {series}.")
    try:
        rate = Decimal(raw_rate.strip())
    except (InvalidOperation, AttributeError) as exc:
        raise UnexpectedFailureError(
            f"Rate {raw_rate!r} for {series} is not a decimal number.", detail=exc
        ) from exc
    if not rate.is_finite():
        raise UnexpectedFailureError(f"Rate {raw_rate!r} for {series} is not a decimal number.")

    if observation.reported_date is None:
        raise UnexpectedFailureError(f"Observation for {series} does not carry a date.")
    try:
        reported = date.fromisoformat(observation.reported_date)
    except ValueError as exc:
        raise UnexpectedFailureError(
            f"Observation date {observation.reported_date!r} is not an ISO date.", detail=exc
        ) from exc
    return rate, reported


class CurrencyConverter:
    """Validate, look up the rate and convert, returning a classified outcome.

    The converter keeps no state between calls: the fetcher is the only
    shared collaborator and ``clock`` is consulted once per call.
    ``timeout`` bounds the fetch in seconds; exceeding it is reported as
    :class:`UpstreamUnavailableError`.
    """

    def __init__(
        self,
        fetcher: ObservationFetcher,
        *,
        clock: Callable[[], datetime] = eastern_now,
        known_codes: AbstractSet[str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._clock = clock
        self._known_codes = known_codes
        self._timeout = timeout

    async def convert(
        self,
        foreign_code: str | None,
        direction: ConversionDirection | str | None,
        amount: AmountInput,
        rate_date: date | str | None = None,
    ) -> ConversionResult | ConversionError:
        """Convert ``amount`` between ``foreign_code`` and CAD.

        Without ``rate_date`` the most recent published rate is used.
        """

        extra = {} if self._known_codes is None else {"known_codes": self._known_codes}
        request = build_request(
            foreign_code, direction, amount, rate_date, now=self._clock(), **extra
        )
        if isinstance(request, ConversionError):
            return request
        return await self.convert_request(request)

    async def convert_request(
        self, request: ConversionRequest
    ) -> ConversionResult | ConversionError:
        """Run the lookup for an already validated request."""

        source, destination = resolve_pair(request.foreign_code, request.direction)
        series = series_code(source, destination)
        try:
            observation = await asyncio.wait_for(
                self._fetcher.fetch_observation(series, request.rate_date),
                timeout=self._timeout,
            )
        except NoObservationError as exc:
            return NoDataForDateError(
                "Exchange rate not found for the entered date.", detail=exc
            )
        except ObservationFetchError as exc:
            return UpstreamUnavailableError(str(exc), detail=exc)
        except asyncio.TimeoutError as exc:
            return UpstreamUnavailableError(
                f"Timed out after {self._timeout}s waiting for {series}.", detail=exc
            )
        except ObservationFormatError as exc:
            return UnexpectedFailureError(str(exc), detail=exc)
        except Exception as exc:
            return UnexpectedFailureError(
                f"Fetching {series} failed unexpectedly: {exc!r}", detail=exc
            )

        try:
            rate, reported = read_observation(observation, series)
        except UnexpectedFailureError as exc:
            return exc

        try:
            converted = convert_amount(request.amount, rate)
        except ArithmeticError as exc:
            return UnexpectedFailureError(
                f"Converting {request.amount} at {rate} failed: {exc!r}", detail=exc
            )

        return ConversionResult(
            source_code=source,
            destination_code=destination,
            exchange_rate=rate,
            converted_amount=converted,
            rate_date=reported,
            series=series,
        )


__all__ = [
    "AMOUNT_QUANTUM",
    "AMOUNT_ROUNDING",
    "CurrencyConverter",
    "convert_amount",
    "quantize_amount",
    "read_observation",
    "resolve_pair",
]
