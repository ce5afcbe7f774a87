#!/usr/bin/env python3
"""
Basic usage examples for pipewrite.
"""

import io
import itertools
import logging
import sys

from pipewrite import (
    EffectSink,
    FilterTransform,
    FlatMapTransform,
    HandleSink,
    MapTransform,
    ParseTransform,
    RenderTransform,
    Stream,
    TapTransform,
    TracingContext,
    drain,
    transform,
)
from pipewrite.profiler import ProfileContext


def example_write_handles():
    """Example: precompose transformations upstream of a handle."""
    print("\n=== Write Handle Example ===")

    notnulls = FilterTransform(lambda s: s != "") >> HandleSink(sys.stdout)
    notnulls("Test")
    notnulls("")  # filtered, nothing written

    write1 = (MapTransform(str.upper) >> FilterTransform(bool)) >> HandleSink(sys.stdout)
    write2 = MapTransform(str.upper) >> (FilterTransform(bool) >> HandleSink(sys.stdout))
    write1("test")
    write2("test")


def example_streaming():
    """Example: run the same handles as stages of a pull-driven stream."""
    print("\n=== Streaming Example ===")

    numbers = Stream(["1", "2", "three", "4", "5x"]).through(ParseTransform(int))
    print(f"Parsed: {numbers.collect()}")

    out = io.StringIO()
    written = (Stream(["to be", "", "or not"])
               .through(FlatMapTransform(str.split))
               .into(RenderTransform() >> HandleSink(out)))
    print(f"Wrote {written} words:\n{out.getvalue()}", end="")


def example_effect_tracing():
    """Example: record every effect a pipeline runs."""
    print("\n=== Effect Tracing Example ===")

    ctx = TracingContext()
    seen = []

    @transform(takes_context=True)
    def countdown(n, context):
        for i in range(n, 0, -1):
            yield context.lift(abs, i)

    pipeline = countdown >> TapTransform(seen.append) >> drain
    pipeline(3, ctx)

    for record in ctx.trace:
        print(f"  {record}")


def example_cancellation():
    """Example: an infinite stream stops pulling as soon as take() is satisfied."""
    print("\n=== Cancellation Example ===")

    counter = itertools.count()
    produced = []

    def produce():
        value = next(counter)
        produced.append(value)
        return value

    squares = Stream.infinite(produce).through(MapTransform(lambda n: n * n)).take(5)
    print(f"Squares: {squares.collect()}")
    print(f"Values produced upstream: {len(produced)}")


def example_profiling():
    """Example: profile a pipeline run."""
    print("\n=== Profiling Example ===")

    collected = []
    with ProfileContext("million") as prof:
        Stream.range(1_000_000).through(FilterTransform(lambda n: n % 1000 == 0)).into(
            EffectSink(collected.append)
        )

    print(f"Kept {len(collected)} values; {prof.profile}")


def main():
    """Run all examples."""
    logging.basicConfig(level=logging.INFO)

    print("pipewrite Examples")
    print("=" * 50)

    example_write_handles()
    example_streaming()
    example_effect_tracing()
    example_cancellation()
    example_profiling()

    print("\n" + "=" * 50)
    print("All examples completed!")


if __name__ == "__main__":
    main()
