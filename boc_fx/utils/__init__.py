"""Shared helpers for the :mod:`boc_fx` package."""
