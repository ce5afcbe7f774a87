"""Composition of write transformations and handles.

``f >> g`` feeds every value ``f`` emits into ``g`` before asking ``f`` for
its next value. Because composition is depth-first, only one value per link
is ever in flight, and the operator is associative:

    (f >> g) >> h == f >> (g >> h)

Together with ``identity`` this forms a category whose objects are value
types and whose morphisms are transformations (and, as terminal arrows,
handles).
"""

from typing import Any, Iterator, Tuple, Union

from pipewrite.effects.context import EffectContext
from pipewrite.write.base import Sink, Transform


def _close(iterator: Iterator[Any]) -> None:
    close = getattr(iterator, 'close', None)
    if close is not None:
        close()


def _flatten(stage: Union[Transform, Sink]) -> Tuple[Union[Transform, Sink], ...]:
    if isinstance(stage, (ComposedTransform, ComposedSink)):
        return stage.stages
    return (stage,)


class ComposedTransform(Transform):
    """A transformation feeding ``upstream``'s emissions into ``downstream``."""

    def __init__(self, upstream: Transform, downstream: Transform):
        self.upstream = upstream
        self.downstream = downstream

    def emit(self, value: Any, context: EffectContext) -> Iterator[Any]:
        upstream = self.upstream.emit(value, context)
        try:
            for item in upstream:
                yield from self.downstream.emit(item, context)
        finally:
            # Stop the upstream generator where it is; no further effects run.
            _close(upstream)

    @property
    def stages(self) -> Tuple[Union[Transform, Sink], ...]:
        return _flatten(self.upstream) + _flatten(self.downstream)

    def __repr__(self) -> str:
        return " >> ".join(repr(s) for s in self.stages)


class ComposedSink(Sink):
    """A handle writing each of ``upstream``'s emissions to ``downstream``."""

    def __init__(self, upstream: Transform, downstream: Sink):
        self.upstream = upstream
        self.downstream = downstream

    def write(self, value: Any, context: EffectContext) -> None:
        upstream = self.upstream.emit(value, context)
        try:
            for item in upstream:
                self.downstream.write(item, context)
        finally:
            _close(upstream)

    @property
    def stages(self) -> Tuple[Union[Transform, Sink], ...]:
        return _flatten(self.upstream) + _flatten(self.downstream)

    def __repr__(self) -> str:
        return " >> ".join(repr(s) for s in self.stages)


def compose(upstream: Union[Transform, Sink], *downstream: Union[Transform, Sink]):
    """
    Precompose ``upstream`` ahead of each of ``downstream`` in turn.

    Args:
        upstream: The first transformation of the chain
        downstream: Further transformations, optionally ending in a handle

    Returns:
        A ComposedTransform, or a ComposedSink when the chain ends in a handle.
        With no downstream stages, ``upstream`` itself.

    Raises:
        TypeError: If a handle appears anywhere but last, or a stage is
            neither a Transform nor a Sink.
    """
    if not isinstance(upstream, (Transform, Sink)):
        raise TypeError(f"expected a Transform or Sink, got {upstream!r}")

    result = upstream
    for stage in downstream:
        if isinstance(result, Sink):
            raise TypeError(
                f"cannot compose {result!r} upstream of {stage!r}: a Sink emits nothing"
            )

        if isinstance(stage, Transform):
            result = ComposedTransform(result, stage)
        elif isinstance(stage, Sink):
            result = ComposedSink(result, stage)
        else:
            raise TypeError(f"expected a Transform or Sink downstream, got {stage!r}")

    return result
