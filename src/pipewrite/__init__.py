"""
pipewrite: composable write handles for lazy streams.

Write handles (sinks) consume one value and run one effect. Write
transformations consume one value and emit any number of values downstream.
``>>`` precomposes transformations upstream of handles, and ``stream``
upgrades either into a stage of a pull-driven Stream pipeline.
"""

from pipewrite.config import PipeWriteConfig
from pipewrite.effects import (
    EffectContext,
    DirectContext,
    TracingContext,
    LoggingContext,
)
from pipewrite.write import (
    Sink,
    Transform,
    identity,
    compose,
    EffectSink,
    HandleSink,
    DrainSink,
    drain,
    sink,
    MapTransform,
    MapEffectTransform,
    FlatMapTransform,
    FlattenTransform,
    FilterTransform,
    FilterEffectTransform,
    LiftEffectTransform,
    TapTransform,
    ParseTransform,
    RenderTransform,
    flatten,
    transform,
)
from pipewrite.streams import Stream, stream

__version__ = "0.1.0"
__license__ = "Apache-2.0"

__all__ = [
    "PipeWriteConfig",
    "EffectContext",
    "DirectContext",
    "TracingContext",
    "LoggingContext",
    "Sink",
    "Transform",
    "identity",
    "compose",
    "EffectSink",
    "HandleSink",
    "DrainSink",
    "drain",
    "sink",
    "MapTransform",
    "MapEffectTransform",
    "FlatMapTransform",
    "FlattenTransform",
    "FilterTransform",
    "FilterEffectTransform",
    "LiftEffectTransform",
    "TapTransform",
    "ParseTransform",
    "RenderTransform",
    "flatten",
    "transform",
    "Stream",
    "stream",
]
