"""
Write handles: values go in, one effect runs, nothing comes out.
"""

import functools
import io
from typing import Any, Callable, IO, Optional, TypeVar

from pipewrite.config import config
from pipewrite.effects.context import EffectContext
from pipewrite.write.base import Sink

A = TypeVar('A')


class EffectSink(Sink[A]):
    """Run an effectful function for each value, discarding its result."""

    def __init__(self, func: Callable[[A], Any]):
        self.func = func

    def write(self, value: A, context: EffectContext) -> None:
        context.lift(self.func, value)

    def __repr__(self) -> str:
        return f"EffectSink({getattr(self.func, '__name__', self.func)})"


class HandleSink(Sink[Any]):
    """Write each value as one line to a file-like handle.

    Text handles receive ``str(value) + terminator``; binary handles receive
    the same text encoded with ``encoding``. With ``flush`` the handle is
    flushed after each line, inside the same single effect as the write.
    """

    def __init__(self,
                 handle: IO,
                 terminator: Optional[str] = None,
                 encoding: Optional[str] = None,
                 flush: bool = False):
        self.handle = handle
        self.terminator = terminator if terminator is not None else config.line_terminator
        self.encoding = encoding or config.encoding
        self.flush = flush
        self.binary = _is_binary(handle)

    def write(self, value: Any, context: EffectContext) -> None:
        line = f"{value}{self.terminator}"
        if self.binary:
            line = line.encode(self.encoding)

        context.lift(self._write_line, line)

    def _write_line(self, line) -> None:
        self.handle.write(line)
        if self.flush:
            self.handle.flush()

    def __repr__(self) -> str:
        return f"HandleSink({getattr(self.handle, 'name', self.handle)!r})"


def _is_binary(handle: IO) -> bool:
    if isinstance(handle, io.TextIOBase):
        return False
    if isinstance(handle, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return 'b' in getattr(handle, 'mode', '')


class DrainSink(Sink[Any]):
    """Discard every value without running any effect."""

    def write(self, value: Any, context: EffectContext) -> None:
        return None


drain: DrainSink = DrainSink()


class FunctionSink(Sink[A]):
    """A handle built from a plain callable.

    With ``takes_context`` the callable receives the effect context as its
    second argument and is responsible for lifting its own actions; otherwise
    the whole call is lifted as one action.
    """

    def __init__(self, func: Callable[..., Any], takes_context: bool = False):
        self.func = func
        self.takes_context = takes_context
        functools.update_wrapper(self, func)

    def write(self, value: A, context: EffectContext) -> None:
        if self.takes_context:
            self.func(value, context)
        else:
            context.lift(self.func, value)

    def __repr__(self) -> str:
        return f"FunctionSink({getattr(self.func, '__name__', self.func)})"


def sink(func: Optional[Callable[..., Any]] = None, *, takes_context: bool = False):
    """
    Decorator turning a function into a write handle.

    Example:
        @sink
        def record(value):
            rows.append(value)

        (MapTransform(str.upper) >> record)("abc")
    """
    def decorator(f: Callable[..., Any]) -> FunctionSink:
        return FunctionSink(f, takes_context=takes_context)

    if func is not None:
        return decorator(func)
    return decorator
