"""
Write handles and write transformations.

A write handle (``Sink``) accepts one value and runs one effect. A write
transformation (``Transform``) accepts one value and lazily emits zero or more
values downstream, running effects in between. Transformations are
precomposed upstream of handles with ``>>``:

    notnulls = FilterTransform(bool) >> HandleSink(sys.stdout)
    notnulls("Test")   # writes "Test"
    notnulls("")       # writes nothing
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar, Union

from pipewrite.effects.context import EffectContext, resolve_context

A = TypeVar('A')
B = TypeVar('B')
C = TypeVar('C')


class Sink(ABC, Generic[A]):
    """Base class for write handles."""

    @abstractmethod
    def write(self, value: A, context: EffectContext) -> None:
        """Run this handle's effect for ``value``."""
        pass

    def __call__(self, value: A, context: Optional[EffectContext] = None) -> None:
        self.write(value, resolve_context(context))

    def __rshift__(self, other: Any):
        raise TypeError(
            f"cannot compose {self!r} upstream of {other!r}: a Sink emits nothing"
        )

    def stream(self, context: Optional[EffectContext] = None):
        """Upgrade this handle to a consumer stage of a Stream pipeline."""
        from pipewrite.streams.operators import stream
        return stream(self, context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Transform(ABC, Generic[A, B]):
    """Base class for write transformations."""

    @abstractmethod
    def emit(self, value: A, context: EffectContext) -> Iterator[B]:
        """Lazily emit the downstream values for ``value``.

        Implementations are generators: nothing, effects included, runs until
        the returned iterator is advanced.
        """
        pass

    def __call__(self, value: A, context: Optional[EffectContext] = None) -> Iterator[B]:
        return self.emit(value, resolve_context(context))

    def then(self, other: Union['Transform[B, C]', Sink[B]]):
        """Precompose this transformation upstream of ``other``."""
        from pipewrite.write.compose import compose
        return compose(self, other)

    __rshift__ = then

    def stream(self, context: Optional[EffectContext] = None):
        """Upgrade this transformation to a stage of a Stream pipeline."""
        from pipewrite.streams.operators import stream
        return stream(self, context)

    # Fluent composition

    def map(self, func: Callable[[B], C]) -> 'Transform[A, C]':
        from pipewrite.write.transforms import MapTransform
        return self.then(MapTransform(func))

    def filter(self, predicate: Callable[[B], Any]) -> 'Transform[A, B]':
        from pipewrite.write.transforms import FilterTransform
        return self.then(FilterTransform(predicate))

    def flat_map(self, func: Callable[[B], Iterable[C]]) -> 'Transform[A, C]':
        from pipewrite.write.transforms import FlatMapTransform
        return self.then(FlatMapTransform(func))

    def tap(self, func: Callable[[B], Any]) -> 'Transform[A, B]':
        from pipewrite.write.transforms import TapTransform
        return self.then(TapTransform(func))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class IdentityTransform(Transform[A, A]):
    """Forward every value downstream unchanged, exactly once.

    This is the identity of composition:

        identity >> f == f
        f >> identity == f
    """

    def emit(self, value: A, context: EffectContext) -> Iterator[A]:
        yield value


identity: IdentityTransform = IdentityTransform()
