"""Request validation and CAD conversion."""

from boc_fx.conversion.converter import CurrencyConverter, convert_amount, resolve_pair
from boc_fx.conversion.errors import (
    ConversionError,
    ErrorKind,
    InvalidInputError,
    MissingInputError,
    NoDataForDateError,
    UnexpectedFailureError,
    UpstreamUnavailableError,
)
from boc_fx.conversion.models import ConversionDirection, ConversionRequest, ConversionResult
from boc_fx.conversion.validator import build_request, validate

__all__ = [
    "CurrencyConverter",
    "ConversionDirection",
    "ConversionRequest",
    "ConversionResult",
    "ConversionError",
    "ErrorKind",
    "MissingInputError",
    "InvalidInputError",
    "NoDataForDateError",
    "UpstreamUnavailableError",
    "UnexpectedFailureError",
    "build_request",
    "validate",
    "convert_amount",
    "resolve_pair",
]
