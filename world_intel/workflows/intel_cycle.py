"""One refresh cycle: domain filter, anomaly detection, brief synthesis."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from ..logging_config import logging as _  # noqa: F401  # ensure config applied early
from ..models.anomaly import AnomalySignal
from ..models.brief import BriefResult
from ..models.event import Domain, Event, count_by_domain, filter_by_domains
from ..services.anomaly import detect_anomalies, summarize_signals
from ..services.briefs import BriefConfig, generate_brief
from ..utils.datetime_utils import get_current_timestamp

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IntelSnapshot:
    """Everything one cycle derived from a single event snapshot."""

    events: List[Event]
    signals: List[AnomalySignal]
    brief: Optional[BriefResult] = None
    generated_at: datetime = field(default_factory=get_current_timestamp)


def run(
    events: Iterable[Event],
    context_label: str = "Global",
    *,
    domains: Optional[Iterable[Domain | str]] = None,
    include_brief: bool = True,
    config: Optional[BriefConfig] = None,
    cancel_event: Optional[threading.Event] = None,
) -> IntelSnapshot:
    """Execute one refresh cycle over *events*."""
    snapshot = list(events) if domains is None else filter_by_domains(events, domains)
    logger.info("Starting intel cycle over %d event(s) in %s", len(snapshot), context_label)

    signals = detect_anomalies(snapshot)

    brief: Optional[BriefResult] = None
    if include_brief:
        brief = generate_brief(
            snapshot,
            context_label,
            summarize_signals(signals),
            config=config,
            cancel_event=cancel_event,
        )

    result = IntelSnapshot(events=snapshot, signals=signals, brief=brief)
    _log_stats(result)
    return result


def _log_stats(snapshot: IntelSnapshot) -> None:
    counts = count_by_domain(snapshot.events)
    logger.info("=== Intel Cycle Statistics ===")
    logger.info("Events analysed: %d", len(snapshot.events))
    logger.info(
        "Events by domain: %s",
        ", ".join(f"{domain.value}={n}" for domain, n in counts.items()) or "none",
    )
    logger.info("Anomaly signals: %d", len(snapshot.signals))
    if snapshot.brief is not None:
        logger.info("Brief source: %s", snapshot.brief.source.value)
    logger.info("==============================")

__all__ = ["IntelSnapshot", "run"]
