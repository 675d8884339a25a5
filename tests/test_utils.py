import unittest
import os
import statistics
import sys
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from world_intel.utils import (
    RunningStats,
    cardinal_label,
    cell_centre,
    cell_key,
    parse_timestamp,
    sanitize_llm_text,
    strip_think_blocks,
)


class TestRunningStats(unittest.TestCase):

    def test_matches_population_statistics(self):
        values = [1, 1, 1, 1, 10]
        stats = RunningStats.of(values)

        self.assertEqual(stats.n, 5)
        self.assertAlmostEqual(stats.mean, 2.8)
        self.assertAlmostEqual(stats.stddev, statistics.pstdev(values))
        self.assertAlmostEqual(stats.stddev, 3.6)

    def test_large_offset_is_stable(self):
        values = [1e9 + 4, 1e9 + 7, 1e9 + 13, 1e9 + 16]
        self.assertAlmostEqual(RunningStats.of(values).variance, 22.5)

    def test_fewer_than_two_samples(self):
        self.assertEqual(RunningStats().stddev, 0.0)
        self.assertEqual(RunningStats.of([5]).stddev, 0.0)


class TestGrid(unittest.TestCase):

    def test_cell_key_floors_towards_negative_infinity(self):
        self.assertEqual(cell_key(12.3, 34.5), (10, 30))
        self.assertEqual(cell_key(-0.1, -0.1), (-10, -10))
        self.assertEqual(cell_key(0.0, 0.0), (0, 0))
        self.assertEqual(cell_key(-33.9, 151.2), (-40, 150))

    def test_cell_centre(self):
        self.assertEqual(cell_centre((10, 30)), (15.0, 35.0))
        self.assertEqual(cell_centre((-40, 150)), (-35.0, 155.0))

    def test_cardinal_label(self):
        self.assertEqual(cardinal_label(15.0, 35.0), "15°N 35°E")
        self.assertEqual(cardinal_label(-35.0, -65.0), "35°S 65°W")


class TestParseTimestamp(unittest.TestCase):

    def test_z_suffix(self):
        self.assertEqual(
            parse_timestamp("2024-05-01T10:15:00Z"),
            datetime(2024, 5, 1, 10, 15, tzinfo=timezone.utc),
        )

    def test_offset_is_normalised_to_utc(self):
        parsed = parse_timestamp("2024-05-01T12:15:00+02:00")
        self.assertEqual(parsed, datetime(2024, 5, 1, 10, 15, tzinfo=timezone.utc))
        self.assertEqual(parsed.utcoffset(), timedelta(0))

    def test_naive_is_taken_as_utc(self):
        self.assertEqual(parse_timestamp(datetime(2024, 5, 1)).tzinfo, timezone.utc)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            parse_timestamp("yesterday")


class TestSanitizeLlmText(unittest.TestCase):

    def test_think_block_and_markdown(self):
        raw = "<think>planning</think>\n## Brief\n**Flooding** in the Sahel [1] continues.\n\nWatch rainfall."
        self.assertEqual(
            sanitize_llm_text(raw),
            "Brief Flooding in the Sahel continues. Watch rainfall.",
        )

    def test_unclosed_think_block_leaves_nothing(self):
        self.assertEqual(sanitize_llm_text("<think>The user wants a brief, first I"), "")
        self.assertEqual(strip_think_blocks("  <think>still reasoning"), "")

    def test_text_without_think_tags_is_kept(self):
        self.assertEqual(strip_think_blocks("  Quiet day.  "), "Quiet day.")

    def test_underscores_are_kept(self):
        self.assertEqual(sanitize_llm_text("H5N1_clade spreads"), "H5N1_clade spreads")

    def test_empty(self):
        self.assertEqual(sanitize_llm_text(""), "")


if __name__ == '__main__':
    unittest.main()
