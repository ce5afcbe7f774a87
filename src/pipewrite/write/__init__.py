"""Write handles, write transformations and their composition."""

from pipewrite.write.base import (
    Sink,
    Transform,
    IdentityTransform,
    identity,
)
from pipewrite.write.compose import (
    ComposedSink,
    ComposedTransform,
    compose,
)
from pipewrite.write.sinks import (
    EffectSink,
    HandleSink,
    DrainSink,
    FunctionSink,
    drain,
    sink,
)
from pipewrite.write.transforms import (
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
    FunctionTransform,
    flatten,
    transform,
)

__all__ = [
    "Sink",
    "Transform",
    "IdentityTransform",
    "identity",
    "ComposedSink",
    "ComposedTransform",
    "compose",
    "EffectSink",
    "HandleSink",
    "DrainSink",
    "FunctionSink",
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
    "FunctionTransform",
    "flatten",
    "transform",
]
