"""
Write transformations: one value in, zero or more values out.
"""

import ast
import functools
import io
import tokenize
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple, Type, TypeVar

from pipewrite.config import config
from pipewrite.effects.context import EffectContext
from pipewrite.write.base import Transform

A = TypeVar('A')
B = TypeVar('B')


def _describe(func: Any) -> str:
    return getattr(func, '__name__', None) or repr(func)


def literal(text: str) -> Any:
    """Parse one Python literal spanning the whole of ``text``.

    Trailing whitespace and comments count as leftover input, which
    ``ast.literal_eval`` on its own would accept.
    """
    value = ast.literal_eval(text)
    if text != text.rstrip():
        raise ValueError(f"trailing whitespace after literal: {text!r}")
    tokens = tokenize.generate_tokens(io.StringIO(text).readline)
    if any(token.type == tokenize.COMMENT for token in tokens):
        raise ValueError(f"comment after literal: {text!r}")
    return value


class MapTransform(Transform[A, B]):
    """Emit ``func(value)``."""

    def __init__(self, func: Callable[[A], B]):
        self.func = func

    def emit(self, value: A, context: EffectContext) -> Iterator[B]:
        yield self.func(value)

    def __repr__(self) -> str:
        return f"MapTransform({_describe(self.func)})"


class MapEffectTransform(Transform[A, B]):
    """Run ``func(value)`` as an effect and emit its result."""

    def __init__(self, func: Callable[[A], B]):
        self.func = func

    def emit(self, value: A, context: EffectContext) -> Iterator[B]:
        yield context.lift(self.func, value)

    def __repr__(self) -> str:
        return f"MapEffectTransform({_describe(self.func)})"


class FlatMapTransform(Transform[A, B]):
    """Emit every element of ``func(value)``, in iteration order."""

    def __init__(self, func: Callable[[A], Iterable[B]]):
        self.func = func

    def emit(self, value: A, context: EffectContext) -> Iterator[B]:
        yield from self.func(value)

    def __repr__(self) -> str:
        return f"FlatMapTransform({_describe(self.func)})"


class FlattenTransform(Transform[Iterable[A], A]):
    """Emit every element of the incoming iterable."""

    def emit(self, value: Iterable[A], context: EffectContext) -> Iterator[A]:
        yield from value


flatten: FlattenTransform = FlattenTransform()


class FilterTransform(Transform[A, A]):
    """Emit only values that satisfy a predicate."""

    def __init__(self, predicate: Callable[[A], Any]):
        self.predicate = predicate

    def emit(self, value: A, context: EffectContext) -> Iterator[A]:
        if self.predicate(value):
            yield value

    def __repr__(self) -> str:
        return f"FilterTransform({_describe(self.predicate)})"


class FilterEffectTransform(Transform[A, A]):
    """Run an effectful predicate once; emit the value if it holds."""

    def __init__(self, predicate: Callable[[A], Any]):
        self.predicate = predicate

    def emit(self, value: A, context: EffectContext) -> Iterator[A]:
        if context.lift(self.predicate, value):
            yield value

    def __repr__(self) -> str:
        return f"FilterEffectTransform({_describe(self.predicate)})"


class LiftEffectTransform(Transform[Any, B]):
    """Ignore the incoming value, run ``action()`` and emit its result."""

    def __init__(self, action: Callable[[], B]):
        self.action = action

    def emit(self, value: Any, context: EffectContext) -> Iterator[B]:
        yield context.lift(self.action)

    def __repr__(self) -> str:
        return f"LiftEffectTransform({_describe(self.action)})"


class TapTransform(Transform[A, A]):
    """Run ``func(value)`` for its effect, then emit the value unchanged."""

    def __init__(self, func: Callable[[A], Any]):
        self.func = func

    def emit(self, value: A, context: EffectContext) -> Iterator[A]:
        context.lift(self.func, value)
        yield value

    def __repr__(self) -> str:
        return f"TapTransform({_describe(self.func)})"


class ParseTransform(Transform[str, Any]):
    """
    Emit the value parsed from the whole input string.

    The parser must consume the entire string; anything it rejects by raising
    one of ``errors`` is dropped silently. Dropping is ordinary control flow,
    the same as a filter rejecting a value, so it is neither raised nor logged.

    Example:
        ParseTransform()      # Python literals: "42", "[1, 2]", "'a'"
        ParseTransform(int)   # integers only
    """

    def __init__(self,
                 parser: Callable[[str], Any] = literal,
                 errors: Optional[Tuple[Type[BaseException], ...]] = None):
        self.parser = parser
        self.errors = errors if errors is not None else config.parse_errors

    def emit(self, text: str, context: EffectContext) -> Iterator[Any]:
        try:
            parsed = self.parser(text)
        except self.errors:
            return
        yield parsed

    def __repr__(self) -> str:
        return f"ParseTransform({_describe(self.parser)})"


class RenderTransform(Transform[Any, str]):
    """Emit the textual representation of each value (``repr`` by default)."""

    def __init__(self, formatter: Callable[[Any], str] = repr):
        self.formatter = formatter

    def emit(self, value: Any, context: EffectContext) -> Iterator[str]:
        yield self.formatter(value)

    def __repr__(self) -> str:
        return f"RenderTransform({_describe(self.formatter)})"


class FunctionTransform(Transform[A, B]):
    """A transformation built from a callable returning an iterable.

    Generator functions are the natural fit: each ``yield`` is one emission.
    With ``takes_context`` the callable receives the effect context as its
    second argument and lifts its own actions through it.
    """

    def __init__(self, func: Callable[..., Iterable[B]], takes_context: bool = False):
        self.func = func
        self.takes_context = takes_context
        functools.update_wrapper(self, func)

    def emit(self, value: A, context: EffectContext) -> Iterator[B]:
        if self.takes_context:
            yield from self.func(value, context)
        else:
            yield from self.func(value)

    def __repr__(self) -> str:
        return f"FunctionTransform({_describe(self.func)})"


def transform(func: Optional[Callable[..., Iterable[Any]]] = None, *, takes_context: bool = False):
    """
    Decorator turning a generator function into a write transformation.

    Example:
        @transform
        def words(line):
            yield from line.split()

        (words >> HandleSink(sys.stdout))("to be or not")
    """
    def decorator(f: Callable[..., Iterable[Any]]) -> FunctionTransform:
        return FunctionTransform(f, takes_context=takes_context)

    if func is not None:
        return decorator(func)
    return decorator
