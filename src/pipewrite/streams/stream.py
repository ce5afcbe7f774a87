"""
Lazy, pull-driven streams.
"""

import logging
from typing import (
    Any, Callable, Iterable, Iterator, List, Optional, TypeVar, Union
)

from pipewrite.effects.context import EffectContext
from pipewrite.streams.operators import (
    StreamOperator, ConsumerStage, TakeOperator, SkipOperator, TakeWhileOperator, stream
)
from pipewrite.write.base import Sink, Transform

T = TypeVar('T')

logger = logging.getLogger(__name__)


class Stream(Iterable[T]):
    """
    A lazy stream that pulls one element at a time through its operators.

    Nothing runs until the stream is iterated, and iteration only pulls as
    many upstream elements as the consumer asks for.
    """

    def __init__(self, source: Union[Iterable[T], Iterator[T], Callable[[], Iterator[T]]]):
        """
        Initialize stream.

        Args:
            source: Data source (iterable, iterator, or callable returning iterator)
        """
        if callable(source):
            self._source = source
        elif hasattr(source, '__iter__'):
            self._source = lambda: iter(source)
        else:
            raise TypeError("Source must be iterable or callable")

        self._operators: List[StreamOperator] = []

    def __iter__(self) -> Iterator[T]:
        """Create iterator with all operators applied."""
        iterator = self._source()

        # Apply operators in sequence
        for op in self._operators:
            iterator = op.apply(iterator)

        return iterator

    def _with(self, operator: StreamOperator) -> 'Stream[Any]':
        new_stream = Stream(self._source)
        new_stream._operators = self._operators.copy()
        new_stream._operators.append(operator)
        return new_stream

    # Stages

    def pipe(self, operator: StreamOperator) -> 'Stream[Any]':
        """Append a stream operator."""
        if not isinstance(operator, StreamOperator):
            raise TypeError(f"expected a StreamOperator, got {operator!r}")
        return self._with(operator)

    def through(self, transform: Transform,
                context: Optional[EffectContext] = None) -> 'Stream[Any]':
        """Run every element through a write transformation."""
        if not isinstance(transform, Transform):
            raise TypeError(f"expected a Transform, got {transform!r}")
        return self._with(stream(transform, context))

    def take(self, n: int) -> 'Stream[T]':
        """Take first n elements."""
        return self._with(TakeOperator(n))

    def skip(self, n: int) -> 'Stream[T]':
        """Skip first n elements."""
        return self._with(SkipOperator(n))

    def take_while(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Take elements while predicate is true."""
        return self._with(TakeWhileOperator(predicate))

    # Terminal operators

    def collect(self) -> List[T]:
        """Collect all elements into a list."""
        return list(self)

    def count(self) -> int:
        """Count elements."""
        return sum(1 for _ in self)

    def first(self) -> Optional[T]:
        """Get first element."""
        for item in self:
            return item
        return None

    def run(self) -> None:
        """Drive the stream to completion for its effects."""
        count = 0
        for _ in self:
            count += 1
        logger.debug("stream drained after %d elements", count)

    def into(self, sink: Sink, context: Optional[EffectContext] = None) -> int:
        """Write every element to a handle; return how many were written."""
        consumer = stream(sink, context)
        if not isinstance(consumer, ConsumerStage):
            raise TypeError(f"expected a Sink, got {sink!r}")
        return consumer.consume(self)

    # Factory methods

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'Stream[T]':
        """Create stream from iterable."""
        return cls(iterable)

    @classmethod
    def range(cls, *args) -> 'Stream[int]':
        """Create stream of integers."""
        return cls(lambda: iter(range(*args)))

    @classmethod
    def infinite(cls, func: Callable[[], T]) -> 'Stream[T]':
        """Create infinite stream."""
        def generator():
            while True:
                yield func()
        return cls(generator)
