"""Logging utilities for the boc_fx package."""

from __future__ import annotations

import logging

PACKAGE_LOGGER_NAME = "boc_fx"

_configured = False


def get_logger(name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """Return ``name``'s logger, installing the root handler on first use."""
    global _configured
    if not _configured:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        _configured = True
    return logging.getLogger(name)


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between DEBUG and INFO."""

    get_logger().setLevel(logging.DEBUG if verbose else logging.INFO)
