#!/usr/bin/env python3
"""
Tests for effect contexts.
"""

import logging
import unittest

from pipewrite import (
    DirectContext,
    LoggingContext,
    MapEffectTransform,
    PipeWriteConfig,
    TracingContext,
)
from pipewrite.effects import EffectContext, EffectRecord, resolve_context


def double(n):
    return n * 2


class TestDirectContext(unittest.TestCase):
    """Actions run immediately."""

    def test_lift(self):
        self.assertEqual(DirectContext().lift(double, 21), 42)

    def test_sequence_threads_result(self):
        ctx = DirectContext()
        self.assertEqual(ctx.sequence(lambda: 3, lambda n: ctx.lift(double, n)), 6)

    def test_custom_context(self):
        """Any EffectContext subclass can drive a transformation."""
        class Deferred(EffectContext):
            def __init__(self):
                self.calls = 0

            def lift(self, action, *args):
                self.calls += 1
                return action(*args)

        ctx = Deferred()
        self.assertEqual(list(MapEffectTransform(double)(4, ctx)), [8])
        self.assertEqual(ctx.calls, 1)


class TestTracingContext(unittest.TestCase):
    """Every lifted action is recorded in order."""

    def test_records_in_order(self):
        ctx = TracingContext()
        ctx.lift(double, 1)
        ctx.lift(double, 2)

        self.assertEqual(ctx.trace, [
            EffectRecord(index=0, name="double", args=(1,)),
            EffectRecord(index=1, name="double", args=(2,)),
        ])
        self.assertEqual(len(ctx), 2)
        self.assertEqual(str(ctx.trace[1]), "#1 double(2)")

    def test_sequence_traces_first_action(self):
        ctx = TracingContext()
        result = ctx.sequence(lambda: 5, lambda n: ctx.lift(double, n))
        self.assertEqual(result, 10)
        self.assertEqual(ctx.count, 2)
        self.assertEqual(ctx.names()[1], "double")

    def test_failed_action_is_recorded(self):
        def fail():
            raise RuntimeError("nope")

        ctx = TracingContext()
        with self.assertRaises(RuntimeError):
            ctx.lift(fail)
        self.assertEqual(ctx.count, 1)

    def test_limit_drops_oldest(self):
        ctx = TracingContext(limit=2)
        for n in range(3):
            ctx.lift(double, n)

        self.assertEqual(len(ctx), 2)
        self.assertEqual(ctx.count, 3)
        self.assertEqual([r.index for r in ctx.trace], [1, 2])

    def test_clear(self):
        ctx = TracingContext()
        ctx.lift(double, 1)
        ctx.clear()
        self.assertEqual(ctx.trace, [])
        self.assertEqual(ctx.count, 0)

    def test_logs_at_debug(self):
        logger = logging.getLogger("pipewrite.tests.tracing")
        ctx = TracingContext(logger=logger)
        with self.assertLogs(logger, level="DEBUG") as logs:
            ctx.lift(double, 3)
        self.assertIn("#0 double(3)", logs.output[0])


class TestLoggingContext(unittest.TestCase):
    """Every lifted action is logged."""

    def test_logs_each_action(self):
        ctx = LoggingContext()
        with self.assertLogs("pipewrite.effects.context", level="DEBUG") as logs:
            self.assertEqual(ctx.lift(double, 5), 10)
        self.assertEqual(len(logs.records), 1)
        self.assertIn("double", logs.output[0])

    def test_custom_level(self):
        logger = logging.getLogger("pipewrite.tests.logging")
        ctx = LoggingContext(logger=logger, level=logging.INFO)
        with self.assertLogs(logger, level="INFO") as logs:
            ctx.lift(double, 1)
        self.assertEqual(logs.records[0].levelno, logging.INFO)


class TestResolveContext(unittest.TestCase):
    """The default context follows configuration."""

    def tearDown(self):
        PipeWriteConfig.reset()

    def test_explicit_context_wins(self):
        ctx = TracingContext()
        self.assertIs(resolve_context(ctx), ctx)

    def test_default_is_direct(self):
        self.assertIsInstance(resolve_context(), DirectContext)
        self.assertNotIsInstance(resolve_context(), LoggingContext)

    def test_log_effects_enables_logging(self):
        PipeWriteConfig.set_defaults(log_effects=True)
        self.assertIsInstance(resolve_context(), LoggingContext)


if __name__ == "__main__":
    unittest.main()
