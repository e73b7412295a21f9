"""Value objects exchanged with the converter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class ConversionDirection(str, Enum):
    """Which side of the pair the caller's amount is expressed in."""

    FOREIGN_TO_DOMESTIC = "from"
    DOMESTIC_TO_FOREIGN = "to"

    @classmethod
    def parse(cls, value: "ConversionDirection | str") -> "ConversionDirection":
        """Resolve ``'from'``/``'to'`` (any case) or an enum member."""

        if isinstance(value, cls):
            return value
        normalised = str(value).strip().lower()
        for member in cls:
            if member.value == normalised:
                return member
        raise ValueError(
            f"{value} is not a valid conversion type. Type should be 'from' or 'to'."
        )


@dataclass(frozen=True, slots=True)
class ConversionRequest:
    """A validated conversion request."""

    foreign_code: str
    direction: ConversionDirection
    amount: Decimal
    rate_date: date | None = None


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of a successful conversion.

    ``exchange_rate`` is the published rate with its original precision and
    ``rate_date`` the date the source reported for that observation.
    """

    source_code: str
    destination_code: str
    exchange_rate: Decimal
    converted_amount: Decimal
    rate_date: date
    series: str = ""


__all__ = ["ConversionDirection", "ConversionRequest", "ConversionResult"]
