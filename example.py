import asyncio
from datetime import date

from boc_fx import BocFx, ConversionError


async def main() -> None:
    print(BocFx.__version__)  # 0.1.0

    async with BocFx() as fx:
        # Most recent published USD → CAD rate
        latest = await fx.convert("USD", "from", "50.00")
        print(latest)

        # CAD → EUR at a specific (weekday) date
        historical = await fx.convert("EUR", "to", "125", rate_date=date(2020, 7, 10))
        print(historical.converted_amount, historical.exchange_rate, historical.rate_date)

        # Several conversions can share the same client concurrently
        results = await asyncio.gather(
            fx.convert("GBP", "from", "10"),
            fx.convert("JPY", "to", "10"),
        )
        print(results)

        # Failures are classified
        try:
            await fx.convert("USD", "from", "50", rate_date=date(2020, 7, 11))
        except ConversionError as exc:
            print(exc.kind.value, "→", exc.reason)
            # invalid_input → The date entered 2020-07-11 is not a weekday. ...


asyncio.run(main())
