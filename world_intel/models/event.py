"""Definition of the normalized `Event` record shared by detector and cascade."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from ..utils.datetime_utils import parse_timestamp


class Domain(str, Enum):
    """Closed set of event domains produced by the source adapters."""

    HEALTH = "health"
    CLIMATE = "climate"
    CONFLICT = "conflict"
    ECONOMIC = "economic"
    DISASTER = "disaster"
    LABOR = "labor"
    SCIENCE = "science"

    @classmethod
    def parse(cls, value: Any) -> "Domain":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown event domain: {value!r}") from None


class Severity(str, Enum):
    """Totally ordered event severity: info < low < medium < high < critical."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER[self]

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown event severity: {value!r}") from None


SEVERITY_ORDER: Dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}

# Marker prefixed to anomaly labels
DOMAIN_ICONS: Dict[Domain, str] = {
    Domain.DISASTER: "🌋",
    Domain.CLIMATE: "🌡️",
    Domain.HEALTH: "🏥",
    Domain.CONFLICT: "⚔️",
    Domain.ECONOMIC: "💰",
    Domain.LABOR: "✊",
    Domain.SCIENCE: "🔬",
}
DEFAULT_ICON: str = "🌐"


@dataclass(slots=True)
class Location:
    """Where an event happened. Missing coordinates are ``None``."""

    lat: Optional[float] = None
    lng: Optional[float] = None
    country: str = ""
    region: str = ""
    label: str = ""


@dataclass(slots=True)
class Event:
    """A normalized world event as emitted by the source adapters."""

    id: str
    timestamp: datetime
    domain: Domain
    category: str
    severity: Severity
    title: str
    description: str = ""
    location: Location = field(default_factory=Location)
    source: str = ""
    source_url: str = ""
    confidence: float = 1.0
    tags: Set[str] = field(default_factory=set)
    related_events: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_coordinates(self) -> bool:
        """``True`` when the event can take part in spatial aggregation."""
        return self.location.lat is not None and self.location.lng is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        """Build an :class:`Event` from the camelCase wire form used by adapters.

        Raises ``ValueError`` if the domain or severity is outside the closed
        enums, and ``KeyError`` if a required field is missing.
        """
        loc: Mapping[str, Any] = data.get("location") or {}
        return cls(
            id=str(data["id"]),
            timestamp=parse_timestamp(data["timestamp"]),
            domain=Domain.parse(data["domain"]),
            category=str(data.get("category") or ""),
            severity=Severity.parse(data["severity"]),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            location=Location(
                lat=_coordinate(loc.get("lat")),
                lng=_coordinate(loc.get("lng")),
                country=str(loc.get("country") or ""),
                region=str(loc.get("region") or ""),
                label=str(loc.get("label") or ""),
            ),
            source=str(data.get("source") or ""),
            source_url=str(data.get("sourceUrl") or data.get("source_url") or ""),
            confidence=float(data.get("confidence", 1.0)),
            tags=set(data.get("tags") or ()),
            related_events=tuple(data.get("relatedEvents") or data.get("related_events") or ()),
            metadata=dict(data.get("metadata") or {}),
        )


def _coordinate(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def count_by_domain(events: Iterable[Event]) -> Dict[Domain, int]:
    """Return event counts per domain, keyed in first-seen order."""
    counts: Dict[Domain, int] = {}
    for event in events:
        counts[event.domain] = counts.get(event.domain, 0) + 1
    return counts


def filter_by_domains(events: Iterable[Event], domains: Iterable[Domain | str]) -> List[Event]:
    """Keep only events whose domain is in *domains*, preserving order."""
    wanted = {Domain.parse(d) for d in domains}
    return [event for event in events if event.domain in wanted]

__all__ = [
    "Domain",
    "Severity",
    "SEVERITY_ORDER",
    "DOMAIN_ICONS",
    "DEFAULT_ICON",
    "Location",
    "Event",
    "count_by_domain",
    "filter_by_domains",
]
