"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True, slots=True)
class Observation:
    """A single Valet observation, kept exactly as published.

    ``values`` maps each series key present in the observation to its
    string-encoded rate; ``reported_date`` is the raw ``d`` field.
    """

    reported_date: str | None
    values: Mapping[str, str] = field(default_factory=dict)

    def value_for(self, series: str) -> str | None:
        return self.values.get(series)
