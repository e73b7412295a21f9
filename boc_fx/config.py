"""Runtime settings for talking to the Bank of Canada Valet API."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

from boc_fx.utils.boc import VALET_BASE_URL

ENV_BASE_URL = "BOC_FX_BASE_URL"
ENV_TIMEOUT = "BOC_FX_TIMEOUT"
ENV_MAX_ATTEMPTS = "BOC_FX_MAX_ATTEMPTS"
ENV_BACKOFF_SECONDS = "BOC_FX_BACKOFF_SECONDS"


@dataclass(frozen=True, slots=True)
class ValetSettings:
    """Connection settings for :class:`boc_fx.ingestion.valet.ValetClient`.

    ``max_attempts`` defaults to a single request; values above one enable
    retries of transport failures and 5xx responses.
    """

    base_url: str = VALET_BASE_URL
    timeout: float = 10.0
    max_attempts: int = 1
    backoff_seconds: float = 1.0

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must not be negative")
        if not self.base_url.endswith("/"):
            # Relative request paths are resolved against the base URL.
            object.__setattr__(self, "base_url", f"{self.base_url}/")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ValetSettings":
        """Build settings from ``BOC_FX_*`` environment variables."""

        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            base_url=env.get(ENV_BASE_URL) or defaults.base_url,
            timeout=_read_number(env, ENV_TIMEOUT, float, defaults.timeout),
            max_attempts=_read_number(env, ENV_MAX_ATTEMPTS, int, defaults.max_attempts),
            backoff_seconds=_read_number(
                env, ENV_BACKOFF_SECONDS, float, defaults.backoff_seconds
            ),
        )

    def with_overrides(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
    ) -> "ValetSettings":
        """Return a copy with the non-``None`` arguments applied."""

        changes: dict[str, object] = {}
        if base_url:
            changes["base_url"] = base_url
        if timeout is not None:
            changes["timeout"] = timeout
        if max_attempts is not None:
            changes["max_attempts"] = max_attempts
        return replace(self, **changes) if changes else self


def _read_number(env: Mapping[str, str], key: str, kind: type, default):
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return kind(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be a valid {kind.__name__}, got {raw!r}") from exc


__all__ = ["ValetSettings"]
