"""Classified conversion failures.

The validator and the converter return these objects instead of raising them
so each stage can be tested as a pure function. They are still exceptions,
which lets :class:`boc_fx.BocFx` raise them and keeps ``__cause__`` available
for diagnostics.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    MISSING_INPUT = "missing_input"
    INVALID_INPUT = "invalid_input"
    NO_DATA_FOR_DATE = "no_data_for_date"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UNEXPECTED_FAILURE = "unexpected_failure"


class ConversionError(Exception):
    """Base class of every conversion failure."""

    kind: ClassVar[ErrorKind]

    def __init__(self, reason: str, *, detail: BaseException | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.detail = detail
        if detail is not None:
            self.__cause__ = detail

    @property
    def is_input_error(self) -> bool:
        """True when the caller supplied bad input; retrying will not help."""

        return self.kind in {ErrorKind.MISSING_INPUT, ErrorKind.INVALID_INPUT}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reason!r})"


class MissingInputError(ConversionError):
    kind = ErrorKind.MISSING_INPUT


class InvalidInputError(ConversionError):
    kind = ErrorKind.INVALID_INPUT


class NoDataForDateError(ConversionError):
    kind = ErrorKind.NO_DATA_FOR_DATE


class UpstreamUnavailableError(ConversionError):
    kind = ErrorKind.UPSTREAM_UNAVAILABLE


class UnexpectedFailureError(ConversionError):
    kind = ErrorKind.UNEXPECTED_FAILURE


__all__ = [
    "ErrorKind",
    "ConversionError",
    "MissingInputError",
    "InvalidInputError",
    "NoDataForDateError",
    "UpstreamUnavailableError",
    "UnexpectedFailureError",
]
