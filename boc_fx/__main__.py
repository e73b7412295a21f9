"""Allow ``python -m boc_fx``."""

from boc_fx.cli import main

if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
