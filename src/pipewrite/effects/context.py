"""Effect contexts: where write handles and transformations run their actions."""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, List, Optional, Tuple, TypeVar

from pipewrite.config import config

T = TypeVar('T')
U = TypeVar('U')


def _action_name(action: Callable[..., Any]) -> str:
    return getattr(action, '__name__', None) or repr(action)


class EffectContext(ABC):
    """Abstract base class for effect contexts.

    A context knows how to lift a primitive action and how to sequence two
    actions, threading the result of the first into the second. Everything a
    sink or transform does beyond pure computation goes through ``lift``.
    """

    @abstractmethod
    def lift(self, action: Callable[..., T], *args: Any) -> T:
        """Lift a primitive action into the context and run it."""
        pass

    def sequence(self, first: Callable[[], T], then: Callable[[T], U]) -> U:
        """Run ``first`` in this context, then continue with its result.

        ``then`` is a continuation: any further effects it performs must go
        through this context themselves.
        """
        return then(self.lift(first))


class DirectContext(EffectContext):
    """Run every action immediately."""

    def lift(self, action: Callable[..., T], *args: Any) -> T:
        return action(*args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(frozen=True)
class EffectRecord:
    """A single action performed through a TracingContext."""
    index: int
    name: str
    args: Tuple[Any, ...]

    def __str__(self) -> str:
        rendered = ", ".join(repr(a) for a in self.args)
        return f"#{self.index} {self.name}({rendered})"


class TracingContext(DirectContext):
    """Record every lifted action before running it.

    The trace is bounded by ``limit`` (``config.trace_limit`` by default);
    once full, the oldest records are dropped. Records are appended before the
    action runs, so a failing action is still visible in the trace.
    """

    def __init__(self,
                 limit: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        self.limit = limit if limit is not None else config.trace_limit
        self.logger = logger or logging.getLogger(__name__)
        self._records: Deque[EffectRecord] = deque(maxlen=self.limit)
        self._count = 0

    def lift(self, action: Callable[..., T], *args: Any) -> T:
        record = EffectRecord(index=self._count, name=_action_name(action), args=args)
        self._count += 1
        self._records.append(record)
        self.logger.debug("effect %s", record)
        return action(*args)

    @property
    def trace(self) -> List[EffectRecord]:
        return list(self._records)

    @property
    def count(self) -> int:
        """Total number of actions lifted, including dropped records."""
        return self._count

    def names(self) -> List[str]:
        return [r.name for r in self._records]

    def clear(self) -> None:
        self._records.clear()
        self._count = 0

    def __len__(self) -> int:
        return len(self._records)


class LoggingContext(DirectContext):
    """Log every lifted action."""

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 level: Optional[int] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.level = level if level is not None else config.log_level

    def lift(self, action: Callable[..., T], *args: Any) -> T:
        if self.logger.isEnabledFor(self.level):
            self.logger.log(self.level, "running %s%r", _action_name(action), args)
        return action(*args)


def resolve_context(context: Optional[EffectContext] = None) -> EffectContext:
    """Return ``context``, or the configured default when it is None."""
    if context is not None:
        return context
    if config.log_effects:
        return LoggingContext()
    return DirectContext()
