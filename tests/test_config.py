#!/usr/bin/env python3
"""
Tests for configuration defaults.
"""

import logging
import unittest

from pipewrite import ParseTransform, PipeWriteConfig, TracingContext
from pipewrite.config import config


class TestConfig(unittest.TestCase):
    """Singleton configuration."""

    def tearDown(self):
        PipeWriteConfig.reset()

    def test_defaults(self):
        self.assertIs(PipeWriteConfig.get_instance(), config)
        self.assertEqual(config.encoding, "utf-8")
        self.assertEqual(config.line_terminator, "\n")
        self.assertEqual(config.parse_errors, (ValueError, TypeError, SyntaxError))
        self.assertFalse(config.log_effects)
        self.assertEqual(config.log_level, logging.DEBUG)

    def test_set_defaults_ignores_unknown_keys(self):
        PipeWriteConfig.set_defaults(encoding="latin-1", not_a_setting=True)
        self.assertEqual(config.encoding, "latin-1")
        self.assertFalse(hasattr(config, "not_a_setting"))

    def test_reset(self):
        PipeWriteConfig.set_defaults(trace_limit=5, memory_alert_mb=1.0)
        PipeWriteConfig.reset()
        self.assertEqual(config.trace_limit, 10000)
        self.assertEqual(config.memory_alert_mb, 100.0)

    def test_trace_limit_default(self):
        PipeWriteConfig.set_defaults(trace_limit=1)
        ctx = TracingContext()
        ctx.lift(abs, -1)
        ctx.lift(abs, -2)
        self.assertEqual(len(ctx), 1)

    def test_parse_errors_default(self):
        PipeWriteConfig.set_defaults(parse_errors=(ValueError,))
        with self.assertRaises(SyntaxError):
            list(ParseTransform()("42x"))


if __name__ == "__main__":
    unittest.main()
