"""
Stream operators, and the bridge from write handles to stream stages.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar, Union

from pipewrite.effects.context import EffectContext, resolve_context
from pipewrite.write.base import Sink, Transform

T = TypeVar('T')

logger = logging.getLogger(__name__)


class StreamOperator(ABC):
    """Base class for stream operators."""

    @abstractmethod
    def apply(self, iterator: Iterator[T]) -> Iterator[Any]:
        """Apply operator to iterator."""
        pass


class CatOperator(StreamOperator):
    """Forward every element unchanged."""

    def apply(self, iterator: Iterator[T]) -> Iterator[T]:
        for item in iterator:
            yield item


class TakeOperator(StreamOperator):
    """Take first n elements."""

    def __init__(self, n: int):
        if n < 0:
            raise ValueError("n must be non-negative")
        self.n = n

    def apply(self, iterator: Iterator[T]) -> Iterator[T]:
        if self.n == 0:
            return
        # Never pull past the n-th element.
        for i, item in enumerate(iterator, start=1):
            yield item
            if i >= self.n:
                break


class SkipOperator(StreamOperator):
    """Skip first n elements."""

    def __init__(self, n: int):
        if n < 0:
            raise ValueError("n must be non-negative")
        self.n = n

    def apply(self, iterator: Iterator[T]) -> Iterator[T]:
        for i, item in enumerate(iterator):
            if i >= self.n:
                yield item


class TakeWhileOperator(StreamOperator):
    """Take elements while predicate is true."""

    def __init__(self, predicate: Callable[[T], bool]):
        self.predicate = predicate

    def apply(self, iterator: Iterator[T]) -> Iterator[T]:
        for item in iterator:
            if self.predicate(item):
                yield item
            else:
                break


class PipeStage(StreamOperator):
    """A write transformation running as a pull-driven pipeline stage.

    Each upstream element is fed to the transformation, and every value it
    emits is forwarded downstream before the next upstream element is pulled.
    """

    def __init__(self, transform: Transform, context: Optional[EffectContext] = None):
        self.transform = transform
        self.context = resolve_context(context)

    def apply(self, iterator: Iterator[T]) -> Iterator[Any]:
        for item in iterator:
            yield from self.transform.emit(item, self.context)

    def __repr__(self) -> str:
        return f"PipeStage({self.transform!r})"


class ConsumerStage(StreamOperator):
    """A write handle running as the consumer at the end of a pipeline.

    Every upstream element is written to the handle; nothing is forwarded.
    """

    def __init__(self, sink: Sink, context: Optional[EffectContext] = None):
        self.sink = sink
        self.context = resolve_context(context)

    def apply(self, iterator: Iterator[T]) -> Iterator[Any]:
        self.consume(iterator)
        yield from ()

    def consume(self, iterable: Iterable[T]) -> int:
        """Write every element of ``iterable``; return how many were written."""
        count = 0
        for item in iterable:
            self.sink.write(item, self.context)
            count += 1
        logger.debug("%r consumed %d values", self, count)
        return count

    def __repr__(self) -> str:
        return f"ConsumerStage({self.sink!r})"


def stream(handle: Union[Transform, Sink],
           context: Optional[EffectContext] = None) -> Union[PipeStage, ConsumerStage]:
    """
    Upgrade a write transformation or handle to a stream stage.

    Transformations become PipeStages and handles become ConsumerStages. The
    conversion is a functor from write composition to stream piping:

        Stream(src).through(f >> g) == Stream(src).through(f).through(g)
        Stream(src).pipe(stream(identity)) == Stream(src).pipe(CatOperator())

    Args:
        handle: A Transform or Sink
        context: Effect context the stage runs its effects in

    Raises:
        TypeError: If ``handle`` is neither a Transform nor a Sink
    """
    if isinstance(handle, Transform):
        return PipeStage(handle, context)
    if isinstance(handle, Sink):
        return ConsumerStage(handle, context)
    raise TypeError(f"expected a Transform or Sink, got {handle!r}")
