"""Result type returned by the brief synthesis cascade."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BriefSource(str, Enum):
    """Provenance of a brief: generated by a provider or computed locally."""

    AI = "ai"
    LOCAL = "local"


@dataclass(frozen=True, slots=True)
class BriefResult:
    text: str
    source: BriefSource

__all__ = ["BriefSource", "BriefResult"]
