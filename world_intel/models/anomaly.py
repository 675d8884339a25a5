"""Anomaly signal records emitted by the geo-domain detector."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .event import Domain, Event


class SignalTier(str, Enum):
    ELEVATED = "elevated"
    SIGNIFICANT = "significant"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {
    SignalTier.ELEVATED: 0,
    SignalTier.SIGNIFICANT: 1,
    SignalTier.CRITICAL: 2,
}


@dataclass(frozen=True, slots=True)
class AnomalySignal:
    """A domain/cell combination with unusually high event density.

    ``events`` holds references to the caller's own event objects; they are
    neither copied nor modified.
    """

    id: str
    domain: Domain
    label: str
    count: int
    zscore: float
    tier: SignalTier
    lat: float
    lng: float
    region_label: str
    events: Tuple[Event, ...]

__all__ = ["SignalTier", "AnomalySignal"]
