"""Tests for phase timing and duration formatting."""

from __future__ import annotations

import time
import unittest

from kvbench.timer import Phase, PhaseResult, format_duration, time_phase


class TestFormatDuration(unittest.TestCase):
    def test_exactly_one_second_is_seconds(self):
        self.assertEqual(format_duration(1.0), "1.000000000s")

    def test_above_one_second(self):
        self.assertEqual(format_duration(2.5), "2.500000000s")

    def test_half_second_is_milliseconds(self):
        self.assertEqual(format_duration(0.5), "500.000000ms")

    def test_exactly_one_millisecond_is_milliseconds(self):
        self.assertTrue(format_duration(0.001).endswith("ms"))

    def test_just_above_one_millisecond(self):
        self.assertEqual(format_duration(0.0011), "1.100000ms")

    def test_below_one_millisecond_is_microseconds(self):
        self.assertEqual(format_duration(0.0009), "900.000µs")

    def test_zero(self):
        self.assertEqual(format_duration(0.0), "0.000µs")


class TestPhaseResult(unittest.TestCase):
    def test_render(self):
        r = PhaseResult(backend="LMDB", phase=Phase.WRITE, elapsed=0.5, completed=10)
        self.assertEqual(r.render(), "LMDB Write benchmark: 500.000000ms")

    def test_phase_labels(self):
        self.assertEqual(Phase.WRITE.label, "Write")
        self.assertEqual(Phase.READ.label, "Get")
        self.assertEqual(Phase.DELETE.label, "Delete")

    def test_ok(self):
        self.assertTrue(PhaseResult("X", Phase.READ, 0.1).ok)
        self.assertFalse(PhaseResult("X", Phase.READ, 0.1, error="boom").ok)


class TestTimePhase(unittest.TestCase):
    def test_measures_operation(self):
        r = time_phase("Memory", Phase.WRITE, lambda: (time.sleep(0.01) or (3, None)))
        self.assertGreaterEqual(r.elapsed, 0.009)
        self.assertEqual(r.completed, 3)
        self.assertIsNone(r.error)
        self.assertEqual(r.backend, "Memory")
        self.assertIs(r.phase, Phase.WRITE)

    def test_truncated_phase_still_timed(self):
        r = time_phase("Memory", Phase.DELETE, lambda: (1, "Memory delete failed: x"))
        self.assertGreaterEqual(r.elapsed, 0.0)
        self.assertEqual(r.completed, 1)
        self.assertEqual(r.error, "Memory delete failed: x")


if __name__ == "__main__":
    unittest.main()
