import unittest
import os
import sys
from datetime import datetime, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from world_intel.models import Domain, Event, Location, Severity, SignalTier
from world_intel.services.anomaly import (
    classify_zscore,
    detect_anomalies,
    region_label,
    summarize_signals,
)

_counter = 0


def make_event(domain, lat, lng, region="", country="", severity=Severity.MEDIUM):
    global _counter
    _counter += 1
    return Event(
        id=f"ev-{_counter}",
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
        domain=domain,
        category="test",
        severity=severity,
        title=f"Event {_counter}",
        location=Location(lat=lat, lng=lng, country=country, region=region, label=region),
    )


def cell_events(domain, counts, lat=5.0, region=""):
    """One populated cell per entry of *counts*, each in its own 10° column."""
    events = []
    for column, count in enumerate(counts):
        lng = -175.0 + 10 * column
        events.extend(make_event(domain, lat, lng, region=region) for _ in range(count))
    return events


class TestClassifyZscore(unittest.TestCase):

    def test_tier_boundaries(self):
        self.assertIsNone(classify_zscore(0.99))
        self.assertEqual(classify_zscore(1.0), SignalTier.ELEVATED)
        self.assertEqual(classify_zscore(1.49), SignalTier.ELEVATED)
        self.assertEqual(classify_zscore(1.5), SignalTier.SIGNIFICANT)
        self.assertEqual(classify_zscore(2.49), SignalTier.SIGNIFICANT)
        self.assertEqual(classify_zscore(2.5), SignalTier.CRITICAL)
        self.assertEqual(classify_zscore(7.0), SignalTier.CRITICAL)


class TestDetectAnomalies(unittest.TestCase):

    def test_empty_input(self):
        self.assertEqual(detect_anomalies([]), [])

    def test_textbook_welford_case(self):
        # counts [1, 1, 1, 1, 10]: mean 2.8, population stddev 3.6, z = 2.0
        events = cell_events(Domain.CONFLICT, [1, 1, 1, 1, 10])
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 1)
        signal = signals[0]
        self.assertEqual(signal.count, 10)
        self.assertEqual(signal.zscore, 2.0)
        self.assertEqual(signal.tier, SignalTier.SIGNIFICANT)
        self.assertEqual(signal.domain, Domain.CONFLICT)

    def test_two_cells_give_z_of_exactly_one(self):
        events = cell_events(Domain.HEALTH, [3, 1])
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 1)
        self.assertEqual(signals[0].zscore, 1.0)
        self.assertEqual(signals[0].tier, SignalTier.ELEVATED)

    def test_two_clusters_sit_exactly_on_elevated_boundary(self):
        # mean 4.5, stddev 0.5, z(5) = 1.0; Welford yields 0.9999999999999998
        events = cell_events(Domain.HEALTH, [4, 4, 5, 5])
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 2)
        for signal in signals:
            self.assertEqual(signal.count, 5)
            self.assertEqual(signal.zscore, 1.0)
            self.assertEqual(signal.tier, SignalTier.ELEVATED)

    def test_exact_significant_boundary(self):
        # nine cells of 1 and four of 3: z = sqrt(9 / 4) = 1.5
        events = cell_events(Domain.ECONOMIC, [1] * 9 + [3] * 4)
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 4)
        for signal in signals:
            self.assertEqual(signal.zscore, 1.5)
            self.assertEqual(signal.tier, SignalTier.SIGNIFICANT)

    def test_exact_critical_boundary(self):
        # twenty-five cells of 1 and four of 3: z = sqrt(25 / 4) = 2.5
        events = cell_events(Domain.DISASTER, [1] * 25 + [3] * 4)
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 4)
        for signal in signals:
            self.assertEqual(signal.zscore, 2.5)
            self.assertEqual(signal.tier, SignalTier.CRITICAL)

    def test_critical_tier(self):
        # nine singleton cells and one cell of five: z = 3.0
        events = cell_events(Domain.DISASTER, [1] * 9 + [5])
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 1)
        self.assertEqual(signals[0].zscore, 3.0)
        self.assertEqual(signals[0].tier, SignalTier.CRITICAL)

    def test_identical_counts_produce_nothing(self):
        events = cell_events(Domain.CLIMATE, [4, 4, 4, 4])
        self.assertEqual(detect_anomalies(events), [])

    def test_small_spread_is_treated_as_flat(self):
        # stddev 0.4 < 0.5
        events = cell_events(Domain.CLIMATE, [3, 3, 3, 3, 4])
        self.assertEqual(detect_anomalies(events), [])

    def test_sparse_cell_never_reported(self):
        # stddev 0.5 and z = 1.0, but the busier cell only has 2 events
        events = cell_events(Domain.LABOR, [1, 2])
        self.assertEqual(detect_anomalies(events), [])

    def test_single_cell_domain_skipped(self):
        events = cell_events(Domain.SCIENCE, [50])
        self.assertEqual(detect_anomalies(events), [])

    def test_events_without_coordinates_are_skipped(self):
        events = cell_events(Domain.HEALTH, [3, 1])
        events.extend(make_event(Domain.HEALTH, None, None) for _ in range(10))
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 1)
        self.assertEqual(signals[0].count, 3)

    def test_zero_coordinates_are_valid(self):
        events = [make_event(Domain.HEALTH, 0.0, 0.0) for _ in range(3)]
        events.append(make_event(Domain.HEALTH, 45.0, 45.0))
        signals = detect_anomalies(events)

        self.assertEqual(len(signals), 1)
        self.assertEqual(signals[0].id, "health:0:0")
        self.assertEqual((signals[0].lat, signals[0].lng), (5.0, 5.0))

    def test_signal_holds_original_event_objects(self):
        events = cell_events(Domain.HEALTH, [3, 1])
        signal = detect_anomalies(events)[0]

        for member in signal.events:
            self.assertTrue(any(member is original for original in events))

    def test_signal_ordering(self):
        events = []
        # inserted in tier order elevated, critical, significant, critical
        events += cell_events(Domain.CONFLICT, [1, 1, 3])  # z ≈ 1.41
        events += cell_events(Domain.DISASTER, [1] * 9 + [3])  # z = 3.0
        events += cell_events(Domain.HEALTH, [1] * 4 + [3])  # z = 2.0
        events += cell_events(Domain.CLIMATE, [1] * 16 + [4])  # z = 4.0

        signals = detect_anomalies(events)

        self.assertEqual(
            [s.tier for s in signals],
            [SignalTier.CRITICAL, SignalTier.CRITICAL, SignalTier.SIGNIFICANT, SignalTier.ELEVATED],
        )
        self.assertEqual(
            [s.domain for s in signals],
            [Domain.CLIMATE, Domain.DISASTER, Domain.HEALTH, Domain.CONFLICT],
        )

    def test_ids_are_deterministic(self):
        events = cell_events(Domain.CONFLICT, [1, 1, 1, 1, 10], lat=-33.0)
        first = [s.id for s in detect_anomalies(events)]
        second = [s.id for s in detect_anomalies(list(events))]

        self.assertEqual(first, second)
        self.assertEqual(first, ["conflict:-40:-140"])

    def test_label_uses_region(self):
        events = cell_events(Domain.CONFLICT, [1, 1, 1, 1, 10], region="Sahel")
        signal = detect_anomalies(events)[0]

        self.assertEqual(signal.region_label, "Sahel")
        self.assertTrue(signal.label.endswith(" Sahel"))
        self.assertNotEqual(signal.label, "Sahel")


class TestRegionLabel(unittest.TestCase):

    def test_most_common_wins(self):
        events = [
            make_event(Domain.HEALTH, 1, 1, region="A"),
            make_event(Domain.HEALTH, 1, 1, region="B"),
            make_event(Domain.HEALTH, 1, 1, region="B"),
        ]
        self.assertEqual(region_label(events, 5, 5), "B")

    def test_tie_goes_to_first_seen(self):
        events = [
            make_event(Domain.HEALTH, 1, 1, region="A"),
            make_event(Domain.HEALTH, 1, 1, region="B"),
        ]
        self.assertEqual(region_label(events, 5, 5), "A")

    def test_country_used_when_region_missing(self):
        events = [make_event(Domain.HEALTH, 1, 1, country="Kenya")]
        self.assertEqual(region_label(events, 5, 35), "Kenya")

    def test_cardinal_fallback(self):
        events = [make_event(Domain.HEALTH, 1, 1)]
        self.assertEqual(region_label(events, -15.0, -45.0), "15°S 45°W")
        self.assertEqual(region_label(events, 15.0, 35.0), "15°N 35°E")


class TestSummarizeSignals(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(summarize_signals([]), "")

    def test_summary_text(self):
        events = cell_events(Domain.CONFLICT, [1, 1, 1, 1, 10], region="Sahel")
        summary = summarize_signals(detect_anomalies(events))
        self.assertEqual(summary, "significant conflict anomaly in Sahel (z=2.0, 10 events)")


if __name__ == '__main__':
    unittest.main()
