"""Console front-end: an interactive prompt loop and a one-shot mode."""

from __future__ import annotations

import argparse
import asyncio
import re
from datetime import date
from decimal import Decimal
from typing import Callable, Sequence

from boc_fx import BocFx
from boc_fx.config import ValetSettings
from boc_fx.conversion import ConversionDirection, ConversionError, ConversionResult, ErrorKind
from boc_fx.conversion.converter import quantize_amount
from boc_fx.utils.dates import parse_date
from boc_fx.utils.logger import get_logger, set_verbose

LOGGER = get_logger(__name__)

AMOUNT_PATTERN = re.compile(r"^[-+]?[0-9]*\.?[0-9]+$")
GENERIC_FAILURE = "An error has occurred, please contact the administration."

EXIT_OK = 0
EXIT_UPSTREAM = 1
EXIT_INPUT = 2

Ask = Callable[[str], str]
Echo = Callable[[str], None]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="boc-fx",
        description=(
            "Convert amounts between CAD and a foreign currency using Bank of Canada "
            "daily exchange rates. Runs interactively unless --currency is given."
        ),
    )
    parser.add_argument("--currency", help="Foreign currency ISO 4217 code (e.g. USD)")
    parser.add_argument(
        "--direction",
        choices=[member.value for member in ConversionDirection],
        help="'from' converts the foreign currency to CAD, 'to' converts CAD to it",
    )
    parser.add_argument("--amount", help="Amount to convert")
    parser.add_argument("--date", type=parse_date, help="Rate date (YYYY-MM-DD)")
    parser.add_argument("--base-url", dest="base_url", help="Valet API base URL")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument(
        "--retries",
        type=int,
        help="Extra attempts after a transport failure (default: no retry)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if args.currency is not None and (args.direction is None or args.amount is None):
        parser.error("--currency requires --direction and --amount")
    if args.retries is not None and args.retries < 0:
        parser.error("--retries must not be negative")
    return args


def format_result(amount: Decimal, result: ConversionResult) -> list[str]:
    return [
        f"\n{quantize_amount(amount):,f} {result.source_code} is {result.converted_amount} "
        f"{result.destination_code}.",
        f"Exchange rate is {result.exchange_rate}",
        f"Exchange rate date is {result.rate_date.isoformat()}",
    ]


async def convert_and_report(
    fx: BocFx,
    echo: Echo,
    currency: str,
    direction: str,
    amount: str | Decimal,
    rate_date: date | None = None,
) -> int:
    """Run one conversion and print its outcome; return the exit status."""

    try:
        result = await fx.convert(currency, direction, amount, rate_date)
    except ConversionError as exc:
        if exc.is_input_error or exc.kind is ErrorKind.NO_DATA_FOR_DATE:
            echo(f"\nError : {exc.reason}")
        else:
            LOGGER.error(
                "Conversion failed (%s): %s", exc.kind.value, exc.reason, exc_info=exc.detail
            )
            echo(f"\n{GENERIC_FAILURE}")
        return EXIT_INPUT if exc.is_input_error else EXIT_UPSTREAM
    except Exception:
        LOGGER.exception("Conversion of %s %s %s crashed", amount, direction, currency)
        echo(f"\n{GENERIC_FAILURE}")
        return EXIT_UPSTREAM

    for line in format_result(Decimal(str(amount).strip()), result):
        echo(line)
    return EXIT_OK


def _ask_until(ask: Ask, question: str, retry: str, accept: Callable[[str], bool]) -> str:
    answer = ask(question)
    while not accept(answer):
        answer = ask(retry)
    return answer.strip()


def _is_direction(value: str) -> bool:
    return value.strip().lower() in {member.value for member in ConversionDirection}


def _is_yes_no(value: str) -> bool:
    return value.strip().lower() in {"yes", "no"}


def _is_iso_date(value: str) -> bool:
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


async def run_interactive(fx: BocFx, *, ask: Ask = input, echo: Echo = print) -> None:
    """Prompt for conversions until the user declines to continue.

    ``ask`` is called synchronously on the event loop, so the loop must be
    the only task running while it waits for input. A failed conversion is
    reported and the session carries on.
    """

    while True:
        currency = _ask_until(
            ask,
            "\nPlease specify the foreign currency to convert to/from Canadian. "
            "Please enter the ISO 4217 Code (ex: USD, EUR, etc).\n",
            "\nThe foreign currency can't be empty. Please enter the foreign currency iso code.\n",
            lambda value: bool(value.strip()),
        ).upper()
        direction = _ask_until(
            ask,
            f"\nPlease enter 'from' if you wish to convert from {currency} to CAD, "
            f"or 'to' if you wish to convert from CAD to {currency}.\n",
            "\nInvalid conversion type. Please enter 'from' or 'to'.\n",
            _is_direction,
        )
        wants_date = _ask_until(
            ask,
            "\nDo you wish to use a specific conversion date? Enter yes or no.\n",
            "\nInvalid entry. Please enter 'yes' if you wish to use a specific conversion "
            "date or 'no' if you do not wish to specify one.\n",
            _is_yes_no,
        )
        rate_date = None
        if wants_date.lower() == "yes":
            rate_date = parse_date(
                _ask_until(
                    ask,
                    "\nPlease enter the conversion date in the YYYY-MM-DD format. "
                    "The date has to be a weekday starting 2017.\n",
                    "\nThe date is invalid. Please enter a valid date in the YYYY-MM-DD format.\n",
                    _is_iso_date,
                )
            )
        amount = _ask_until(
            ask,
            "\nPlease enter the amount that you wish to convert.\n",
            "\nInvalid input, please enter a numeric amount.\n",
            lambda value: AMOUNT_PATTERN.match(value.strip()) is not None,
        )

        await convert_and_report(fx, echo, currency, direction, amount, rate_date)

        again = ask(
            "\nDo you wish to do another conversion? Type 'yes' to continue or 'no' to quit.\n"
        )
        if again.strip().lower() != "yes":
            break


async def _run(args: argparse.Namespace, settings: ValetSettings) -> int:
    async with BocFx(settings) as fx:
        if args.currency is not None:
            return await convert_and_report(
                fx, print, args.currency, args.direction, args.amount, args.date
            )
        try:
            await run_interactive(fx)
        except (EOFError, KeyboardInterrupt):
            print()
        return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    set_verbose(args.verbose)
    try:
        settings = ValetSettings.from_env().with_overrides(
            base_url=args.base_url,
            timeout=args.timeout,
            max_attempts=None if args.retries is None else args.retries + 1,
        )
    except ValueError as exc:
        LOGGER.error("Invalid configuration: %s", exc)
        return EXIT_INPUT
    return asyncio.run(_run(args, settings))


__all__ = ["main", "parse_args", "run_interactive", "convert_and_report", "format_result"]
