"""Business-rule validation run before any request reaches the Valet API.

Every check is a pure function of its arguments; the current time is passed
in as ``now`` so the publication-cutoff rule can be tested deterministically.
Checks run in a fixed order and the first failure is returned.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import AbstractSet

from boc_fx.conversion.errors import ConversionError, InvalidInputError, MissingInputError
from boc_fx.conversion.models import ConversionDirection, ConversionRequest
from boc_fx.utils.boc import (
    BOC_MIN_AVAILABLE_YEAR,
    BOC_PUBLICATION_TIME,
    BOC_SCHEDULE_NOTE,
    DOMESTIC_CURRENCY,
    to_eastern,
)
from boc_fx.utils.dates import is_weekend, parse_date
from boc_fx.utils.iso4217 import ISO_4217_CODES

AmountInput = Decimal | int | float | str | None


def normalise_currency(code: str | None) -> str:
    return (code or "").strip().upper()


def validate(
    foreign_code: str | None,
    direction: ConversionDirection | str | None,
    rate_date: date | str | None = None,
    *,
    now: datetime,
    known_codes: AbstractSet[str] = ISO_4217_CODES,
) -> ConversionError | None:
    """Return the first rule ``(foreign_code, direction, rate_date)`` breaks, if any."""

    error = check_currency(foreign_code, known_codes)
    if error is None:
        error = check_direction(direction)
    if error is None and rate_date is not None:
        error = check_rate_date(rate_date, now=now)
    return error


def check_currency(
    foreign_code: str | None, known_codes: AbstractSet[str] = ISO_4217_CODES
) -> ConversionError | None:
    code = normalise_currency(foreign_code)
    if not code:
        return MissingInputError("Foreign currency cannot be empty.")
    if code == DOMESTIC_CURRENCY:
        return InvalidInputError(f"Foreign currency cannot be {DOMESTIC_CURRENCY}.")
    if code not in known_codes:
        return InvalidInputError(f"{code} is not a valid ISO code.")
    return None


def check_direction(direction: ConversionDirection | str | None) -> ConversionError | None:
    if direction is None or not str(direction).strip():
        return MissingInputError("Conversion type cannot be blank.")
    try:
        ConversionDirection.parse(direction)
    except ValueError as exc:
        return InvalidInputError(str(exc))
    return None


def check_rate_date(rate_date: date | str, *, now: datetime) -> ConversionError | None:
    try:
        day = parse_date(rate_date)
    except (TypeError, ValueError, AttributeError):
        return InvalidInputError(
            f"The date entered {rate_date} is not a valid date in the YYYY-MM-DD format."
        )

    local_now = to_eastern(now)
    day_text = day.isoformat()
    if day > local_now.date():
        return InvalidInputError(f"The date entered {day_text} is in the future.")
    if day.year < BOC_MIN_AVAILABLE_YEAR:
        return InvalidInputError(
            f"The date entered {day_text} is before {BOC_MIN_AVAILABLE_YEAR}. "
            f"Bank of Canada's currency history goes as far as {BOC_MIN_AVAILABLE_YEAR}."
        )
    if is_weekend(day):
        return InvalidInputError(
            f"The date entered {day_text} is not a weekday. {BOC_SCHEDULE_NOTE}"
        )
    if day == local_now.date() and local_now.time() < BOC_PUBLICATION_TIME:
        return InvalidInputError(
            f"The exchange rate has not been updated today yet. {BOC_SCHEDULE_NOTE}"
        )
    return None


def parse_amount(amount: AmountInput) -> Decimal | ConversionError:
    """Coerce ``amount`` to a finite :class:`Decimal`."""

    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return MissingInputError("Amount to convert cannot be empty.")
    if isinstance(amount, bool):
        return InvalidInputError(f"{amount!r} is not a numeric amount.")
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            # ``str`` first so floats keep the digits the caller typed.
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            return InvalidInputError(f"{amount!r} is not a numeric amount.")
    if not value.is_finite():
        return InvalidInputError(f"{amount!r} is not a numeric amount.")
    return value


def build_request(
    foreign_code: str | None,
    direction: ConversionDirection | str | None,
    amount: AmountInput,
    rate_date: date | str | None = None,
    *,
    now: datetime,
    known_codes: AbstractSet[str] = ISO_4217_CODES,
) -> ConversionRequest | ConversionError:
    """Validate every input and return a normalised :class:`ConversionRequest`."""

    error = validate(foreign_code, direction, rate_date, now=now, known_codes=known_codes)
    if error is not None:
        return error
    value = parse_amount(amount)
    if isinstance(value, ConversionError):
        return value
    return ConversionRequest(
        foreign_code=normalise_currency(foreign_code),
        direction=ConversionDirection.parse(direction),  # type: ignore[arg-type]
        amount=value,
        rate_date=parse_date(rate_date) if rate_date is not None else None,
    )


__all__ = [
    "validate",
    "build_request",
    "check_currency",
    "check_direction",
    "check_rate_date",
    "parse_amount",
    "normalise_currency",
]
