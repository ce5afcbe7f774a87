#!/usr/bin/env python3
"""
Tests for pipeline profiling.
"""

import unittest

from pipewrite import MapTransform, Stream
from pipewrite.profiler import ProfileContext, RunProfile, profile_pipeline


class TestProfileContext(unittest.TestCase):
    """Profiling a block of pipeline work."""

    def test_records_profile(self):
        with self.assertLogs("pipewrite.profiler.decorators", level="INFO"):
            with ProfileContext("squares") as prof:
                Stream.range(1000).through(MapTransform(lambda n: n * n)).run()

        self.assertIsInstance(prof.profile, RunProfile)
        self.assertEqual(prof.profile.name, "squares")
        self.assertGreaterEqual(prof.profile.duration, 0)
        self.assertGreater(prof.profile.start_rss, 0)

    def test_alert_over_threshold(self):
        with self.assertLogs("pipewrite.profiler.decorators", level="WARNING") as logs:
            with ProfileContext("tiny", threshold_mb=-1e9):
                pass
        self.assertIn("Memory alert", logs.output[0])

    def test_profile_survives_exceptions(self):
        with self.assertLogs("pipewrite.profiler.decorators", level="INFO"):
            with self.assertRaises(ValueError):
                with ProfileContext("broken") as prof:
                    raise ValueError("boom")
        self.assertIsNotNone(prof.profile)


class TestProfileDecorator(unittest.TestCase):
    """The decorator form."""

    def test_returns_result_and_stores_profile(self):
        @profile_pipeline(alert=False)
        def total(n):
            return sum(Stream.range(n).through(MapTransform(lambda x: x + 1)))

        self.assertIsNone(total.last_profile)
        with self.assertLogs("pipewrite.profiler.decorators", level="INFO"):
            self.assertEqual(total(10), 55)
        self.assertEqual(total.last_profile.name, "total")
        self.assertIn("total:", str(total.last_profile))


if __name__ == "__main__":
    unittest.main()
