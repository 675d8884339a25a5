"""Service layer modules grouping the analytics by concern.

This module provides convenience re-exports so that callers can simply do for
example `from world_intel.services import detect_anomalies` without having to
know which underlying module provides the symbol.
"""

from .anomaly import detect_anomalies, summarize_signals  # noqa: F401
from .briefs import BriefConfig, generate_brief, local_summary  # noqa: F401
from .providers import capabilities_for, normalize_messages  # noqa: F401

__all__ = [
    "detect_anomalies",
    "summarize_signals",
    "BriefConfig",
    "generate_brief",
    "local_summary",
    "capabilities_for",
    "normalize_messages",
]
