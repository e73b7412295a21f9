import asyncio
from datetime import date
from decimal import Decimal

import pytest

from boc_fx.conversion.converter import CurrencyConverter, convert_amount, resolve_pair
from boc_fx.conversion.errors import (
    ErrorKind,
    InvalidInputError,
    NoDataForDateError,
    UnexpectedFailureError,
    UpstreamUnavailableError,
)
from boc_fx.conversion.models import ConversionDirection, ConversionResult
from boc_fx.ingestion.models import Observation
from boc_fx.ingestion.strategy import (
    NoObservationError,
    ObservationFetchError,
    ObservationFormatError,
)

JULY_10 = date(2020, 7, 10)


@pytest.mark.asyncio
async def test_foreign_to_cad_at_date(make_fetcher, clock) -> None:
    fetcher = make_fetcher()
    converter = CurrencyConverter(fetcher, clock=clock)

    result = await converter.convert("USD", ConversionDirection.FOREIGN_TO_DOMESTIC, Decimal("50.00"), JULY_10)

    assert result == ConversionResult(
        source_code="USD",
        destination_code="CAD",
        exchange_rate=Decimal("1.3594"),
        converted_amount=Decimal("67.9700"),
        rate_date=JULY_10,
        series="FXUSDCAD",
    )
    assert str(result.converted_amount) == "67.9700"
    assert fetcher.calls == [("FXUSDCAD", JULY_10)]


@pytest.mark.asyncio
async def test_cad_to_foreign_at_date(make_fetcher, clock) -> None:
    fetcher = make_fetcher()
    converter = CurrencyConverter(fetcher, clock=clock)

    result = await converter.convert("USD", "to", Decimal("50.00"), JULY_10)

    assert result.source_code == "CAD"
    assert result.destination_code == "USD"
    assert result.exchange_rate == Decimal("0.7356")
    assert str(result.converted_amount) == "36.7800"
    assert result.rate_date == JULY_10
    assert fetcher.calls == [("FXCADUSD", JULY_10)]


@pytest.mark.asyncio
async def test_most_recent_rate_uses_reported_date(make_fetcher, clock) -> None:
    fetcher = make_fetcher(
        {"FXEURCAD": Observation(reported_date="2024-03-05", values={"FXEURCAD": "1.4721"})}
    )
    converter = CurrencyConverter(fetcher, clock=clock)

    result = await converter.convert("eur", "from", "50.85")

    assert fetcher.calls == [("FXEURCAD", None)]
    assert result.rate_date == date(2024, 3, 5)
    assert result.converted_amount == convert_amount(Decimal("50.85"), Decimal("1.4721"))


@pytest.mark.asyncio
@pytest.mark.parametrize("direction", ["from", "to", "abcd", None])
async def test_cad_is_rejected_without_fetching(make_fetcher, clock, direction) -> None:
    fetcher = make_fetcher()
    converter = CurrencyConverter(fetcher, clock=clock)

    outcome = await converter.convert("CAD", direction, Decimal("50.00"))

    assert isinstance(outcome, InvalidInputError)
    assert fetcher.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("direction", ["from", "to"])
async def test_unknown_code_is_rejected_without_fetching(make_fetcher, clock, direction) -> None:
    fetcher = make_fetcher()
    converter = CurrencyConverter(fetcher, clock=clock)

    outcome = await converter.convert("ZZZ", direction, Decimal("50.00"))

    assert isinstance(outcome, InvalidInputError)
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_no_observation_is_no_data_for_date(make_fetcher, clock) -> None:
    missing = NoObservationError("FXUSDCAD", JULY_10)
    converter = CurrencyConverter(make_fetcher(error=missing), clock=clock)

    outcome = await converter.convert("USD", "from", "50", JULY_10)

    assert isinstance(outcome, NoDataForDateError)
    assert outcome.kind is ErrorKind.NO_DATA_FOR_DATE
    assert outcome.reason == "Exchange rate not found for the entered date."
    assert outcome.detail is missing
    assert not outcome.is_input_error


@pytest.mark.asyncio
async def test_transport_failure_is_upstream_unavailable(make_fetcher, clock) -> None:
    failure = ObservationFetchError("Valet responded with HTTP 503", status_code=503)
    converter = CurrencyConverter(make_fetcher(error=failure), clock=clock)

    outcome = await converter.convert("USD", "from", "50", JULY_10)

    assert isinstance(outcome, UpstreamUnavailableError)
    assert outcome.detail is failure
    assert outcome.__cause__ is failure


@pytest.mark.asyncio
async def test_timeout_is_upstream_unavailable(make_fetcher, clock) -> None:
    converter = CurrencyConverter(make_fetcher(delay=1.0), clock=clock, timeout=0.01)

    outcome = await converter.convert("USD", "from", "50", JULY_10)

    assert isinstance(outcome, UpstreamUnavailableError)
    assert "Timed out" in outcome.reason


@pytest.mark.asyncio
async def test_format_error_is_unexpected(make_fetcher, clock) -> None:
    converter = CurrencyConverter(
        make_fetcher(error=ObservationFormatError("no observations list")), clock=clock
    )

    outcome = await converter.convert("USD", "from", "50")

    assert isinstance(outcome, UnexpectedFailureError)


@pytest.mark.asyncio
async def test_unknown_fetch_exception_is_surfaced(make_fetcher, clock) -> None:
    boom = RuntimeError("boom")
    converter = CurrencyConverter(make_fetcher(error=boom), clock=clock)

    outcome = await converter.convert("USD", "from", "50")

    assert isinstance(outcome, UnexpectedFailureError)
    assert outcome.detail is boom


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "observation, fragment",
    [
        (Observation(reported_date="2020-07-10", values={"FXEURCAD": "1.5"}), "does not contain a rate"),
        (Observation(reported_date="2020-07-10", values={"FXUSDCAD": "n/a"}), "not a decimal"),
        (Observation(reported_date="2020-07-10", values={"FXUSDCAD": "NaN"}), "not a decimal"),
        (Observation(reported_date=None, values={"FXUSDCAD": "1.3594"}), "does not carry a date"),
        (Observation(reported_date="10/07/2020", values={"FXUSDCAD": "1.3594"}), "not an ISO date"),
    ],
)
async def test_malformed_observation_is_unexpected(make_fetcher, clock, observation, fragment) -> None:
    converter = CurrencyConverter(make_fetcher({"FXUSDCAD": observation}), clock=clock)

    outcome = await converter.convert("USD", "from", "50", JULY_10)

    assert isinstance(outcome, UnexpectedFailureError)
    assert fragment in outcome.reason


@pytest.mark.asyncio
async def test_concurrent_conversions_do_not_interfere(make_fetcher, clock) -> None:
    fetcher = make_fetcher(delay=0.01)
    converter = CurrencyConverter(fetcher, clock=clock)

    from_usd, to_usd = await asyncio.gather(
        converter.convert("USD", "from", "50", JULY_10),
        converter.convert("USD", "to", "50", JULY_10),
    )

    assert from_usd.converted_amount == Decimal("67.9700")
    assert to_usd.converted_amount == Decimal("36.7800")
    assert sorted(call[0] for call in fetcher.calls) == ["FXCADUSD", "FXUSDCAD"]


@pytest.mark.parametrize(
    "direction, expected",
    [
        (ConversionDirection.FOREIGN_TO_DOMESTIC, ("JPY", "CAD")),
        (ConversionDirection.DOMESTIC_TO_FOREIGN, ("CAD", "JPY")),
    ],
)
def test_resolve_pair(direction, expected) -> None:
    assert resolve_pair("JPY", direction) == expected


@pytest.mark.parametrize(
    "amount, rate, expected",
    [
        ("50.00", "1.3594", "67.9700"),
        ("0.00005", "1", "0.0000"),
        ("0.00015", "1", "0.0002"),
        ("-0.00025", "1", "-0.0002"),
        ("123.456789", "0.7356", "90.8148"),
    ],
)
def test_convert_amount_rounds_half_to_even(amount, rate, expected) -> None:
    assert convert_amount(Decimal(amount), Decimal(rate)) == Decimal(expected)


def test_rounding_is_stable_on_its_own_output() -> None:
    once = convert_amount(Decimal("123.456789"), Decimal("0.7356"))

    assert convert_amount(once, Decimal("1")) == once
    assert once.as_tuple().exponent == -4


@pytest.mark.asyncio
async def test_very_large_amount_is_converted_exactly(make_fetcher, clock) -> None:
    converter = CurrencyConverter(make_fetcher(), clock=clock)

    result = await converter.convert("USD", "from", "1" + "0" * 24, JULY_10)

    assert isinstance(result, ConversionResult)
    assert result.converted_amount == Decimal("13594" + "0" * 20)
    assert str(result.converted_amount) == "13594" + "0" * 20 + ".0000"


@pytest.mark.parametrize(
    "amount, rate, expected",
    [
        ("9" * 30, "1.3594", "1359399999999999999999999999998.6406"),
        ("123456789012345678901234567.89", "0.7356", "90814813997481481399748148.1399"),
    ],
)
def test_convert_amount_beyond_default_precision(amount, rate, expected) -> None:
    assert convert_amount(Decimal(amount), Decimal(rate)) == Decimal(expected)


@pytest.mark.asyncio
async def test_arithmetic_overflow_is_unexpected(make_fetcher, clock) -> None:
    converter = CurrencyConverter(make_fetcher(), clock=clock)

    outcome = await converter.convert("USD", "from", "1E+9999999", JULY_10)

    assert isinstance(outcome, UnexpectedFailureError)
    assert isinstance(outcome.detail, ArithmeticError)
