"""Domain models used across the project."""

from .anomaly import AnomalySignal, SignalTier  # noqa: F401
from .brief import BriefResult, BriefSource  # noqa: F401
from .event import (  # noqa: F401
    DOMAIN_ICONS,
    SEVERITY_ORDER,
    Domain,
    Event,
    Location,
    Severity,
    count_by_domain,
    filter_by_domains,
)

__all__ = [
    "Domain",
    "Severity",
    "SEVERITY_ORDER",
    "DOMAIN_ICONS",
    "Location",
    "Event",
    "SignalTier",
    "AnomalySignal",
    "BriefSource",
    "BriefResult",
    "count_by_domain",
    "filter_by_domains",
]
