"""Lazy pull-driven streams and the bridge from write handles."""

from pipewrite.streams.stream import Stream
from pipewrite.streams.operators import (
    StreamOperator,
    CatOperator,
    TakeOperator,
    SkipOperator,
    TakeWhileOperator,
    PipeStage,
    ConsumerStage,
    stream,
)

__all__ = [
    "Stream",
    "StreamOperator",
    "CatOperator",
    "TakeOperator",
    "SkipOperator",
    "TakeWhileOperator",
    "PipeStage",
    "ConsumerStage",
    "stream",
]
