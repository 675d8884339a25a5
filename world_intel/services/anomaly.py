"""Geo-domain anomaly detection over a single event snapshot.

Events are bucketed by domain and 10°×10° grid cell. For every domain the
per-cell counts are run through Welford's algorithm and each sufficiently
populated cell is z-scored against the domain's mean cell count. Cells at
or above ``Z_ELEVATED`` become :class:`AnomalySignal` records.

The detector is advisory: degenerate input (no events, a single cell, flat
counts, sparse cells) simply yields fewer or no signals, never an error.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.anomaly import AnomalySignal, SignalTier
from ..models.event import DEFAULT_ICON, DOMAIN_ICONS, Domain, Event
from ..utils.geo import CELL_SIZE, CellKey, cardinal_label, cell_centre, cell_key
from ..utils.stats import RunningStats

# ---------------------------------------------------------------------------
# Local detector settings (only used by this service)
# ---------------------------------------------------------------------------
Z_ELEVATED: float = 1.0  # worth noting
Z_SIGNIFICANT: float = 1.5  # worth flagging
Z_CRITICAL: float = 2.5  # worth alerting

# z-scores over fewer events than this are too noisy to report
MIN_EVENTS_FOR_SIGNAL: int = 3
# a domain needs at least this many populated cells to have a variance
MIN_CELLS: int = 2
# below this the cell distribution is treated as flat
MIN_STDDEV: float = 0.5

logger = logging.getLogger(__name__)


def classify_zscore(zscore: float) -> Optional[SignalTier]:
    """Map a z-score to its tier, or ``None`` below the elevated threshold."""
    if zscore >= Z_CRITICAL:
        return SignalTier.CRITICAL
    if zscore >= Z_SIGNIFICANT:
        return SignalTier.SIGNIFICANT
    if zscore >= Z_ELEVATED:
        return SignalTier.ELEVATED
    return None


def region_label(events: Sequence[Event], lat: float, lng: float) -> str:
    """Most common region (or country) among *events*.

    Ties go to the label seen first. Without any label the cell centroid is
    rendered as a cardinal coordinate instead.
    """
    labels = Counter(
        e.location.region or e.location.country
        for e in events
        if e.location.region or e.location.country
    )
    if labels:
        return labels.most_common(1)[0][0]
    return cardinal_label(lat, lng)


def _group_by_domain_and_cell(
    events: Iterable[Event],
) -> Dict[Domain, Dict[CellKey, List[Event]]]:
    groups: Dict[Domain, Dict[CellKey, List[Event]]] = {}
    for event in events:
        if not event.has_coordinates:
            continue
        key = cell_key(event.location.lat, event.location.lng, CELL_SIZE)
        groups.setdefault(event.domain, {}).setdefault(key, []).append(event)
    return groups


def _score_domain(
    domain: Domain, cells: Dict[CellKey, List[Event]]
) -> List[Tuple[SignalTier, float, AnomalySignal]]:
    if len(cells) < MIN_CELLS:
        logger.debug("Skipping %s: only %d populated cell(s)", domain.value, len(cells))
        return []

    stats = RunningStats.of(len(members) for members in cells.values())
    stddev = stats.stddev
    if round(stddev, 9) < MIN_STDDEV:
        logger.debug("Skipping %s: flat cell distribution (stddev %.2f)", domain.value, stddev)
        return []

    scored: List[Tuple[SignalTier, float, AnomalySignal]] = []
    for key, members in cells.items():
        count = len(members)
        if count < MIN_EVENTS_FOR_SIGNAL:
            continue

        # Welford leaves float noise; z exactly on a threshold must classify
        zscore = round((count - stats.mean) / stddev, 9)
        tier = classify_zscore(zscore)
        if tier is None:
            continue

        lat, lng = cell_centre(key, CELL_SIZE)
        region = region_label(members, lat, lng)
        signal = AnomalySignal(
            id=f"{domain.value}:{key[0]}:{key[1]}",
            domain=domain,
            label=f"{DOMAIN_ICONS.get(domain, DEFAULT_ICON)} {region}",
            count=count,
            zscore=round(zscore, 1),
            tier=tier,
            lat=lat,
            lng=lng,
            region_label=region,
            events=tuple(members),
        )
        scored.append((tier, zscore, signal))
    return scored


def detect_anomalies(events: Iterable[Event]) -> List[AnomalySignal]:
    """Return anomaly signals for *events*, most severe first.

    Events without coordinates are ignored. Signals are ordered by tier
    (critical, significant, elevated) and then by full-precision z-score, both
    descending.
    """
    scored: List[Tuple[SignalTier, float, AnomalySignal]] = []
    for domain, cells in _group_by_domain_and_cell(events).items():
        scored.extend(_score_domain(domain, cells))

    scored.sort(key=lambda item: (item[0].rank, item[1]), reverse=True)
    signals = [signal for _, _, signal in scored]

    if signals:
        logger.info(
            "Detected %d anomaly signal(s): %s",
            len(signals),
            ", ".join(f"{s.id}={s.tier.value}" for s in signals),
        )
    return signals


def summarize_signals(signals: Sequence[AnomalySignal], limit: int = 5) -> str:
    """Compact one-line description of *signals* for use as brief context."""
    parts = [
        f"{s.tier.value} {s.domain.value} anomaly in {s.region_label} "
        f"(z={s.zscore:.1f}, {s.count} events)"
        for s in signals[:limit]
    ]
    return "; ".join(parts)

__all__ = ["detect_anomalies", "summarize_signals", "classify_zscore", "region_label"]
