"""Decorators and context managers for profiling pipeline runs."""

import functools
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import psutil

from pipewrite.config import config

logger = logging.getLogger(__name__)


@dataclass
class RunProfile:
    """Wall time and resident memory growth of one run."""
    name: str
    duration: float
    start_rss: int
    end_rss: int

    @property
    def memory_used_mb(self) -> float:
        return (self.end_rss - self.start_rss) / (1024 * 1024)

    def __str__(self) -> str:
        return (f"{self.name}: {self.duration:.3f}s, "
                f"memory {self.memory_used_mb:+.1f}MB")


def _report(profile: RunProfile, threshold_mb: float, alert: bool) -> None:
    if alert and profile.memory_used_mb > threshold_mb:
        logger.warning("Memory alert: %s (threshold: %.1fMB)", profile, threshold_mb)
    else:
        logger.info("Profile %s", profile)


class ProfileContext:
    """
    Context manager for profiling a pipeline run.

    Example:
        with ProfileContext("ingest") as prof:
            Stream(lines).through(parse_rows).into(writer)
        print(prof.profile.memory_used_mb)
    """

    def __init__(self,
                 name: str = "block",
                 threshold_mb: Optional[float] = None,
                 alert: bool = True):
        self.name = name
        self.threshold_mb = threshold_mb if threshold_mb is not None else config.memory_alert_mb
        self.alert = alert
        self.profile: Optional[RunProfile] = None
        self._process = psutil.Process()

    def __enter__(self) -> 'ProfileContext':
        self._start_rss = self._process.memory_info().rss
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.profile = RunProfile(
            name=self.name,
            duration=time.perf_counter() - self._start_time,
            start_rss=self._start_rss,
            end_rss=self._process.memory_info().rss,
        )
        _report(self.profile, self.threshold_mb, self.alert)


def profile_pipeline(threshold_mb: Optional[float] = None,
                     alert: bool = True) -> Callable:
    """
    Decorator to profile time and memory of a function driving a pipeline.

    Args:
        threshold_mb: Memory growth in MB that triggers a warning
            (``config.memory_alert_mb`` by default)
        alert: Log a warning when the threshold is exceeded

    Example:
        @profile_pipeline(threshold_mb=50)
        def export(rows):
            return Stream(rows).through(render).into(HandleSink(out))

        export(rows)
        export.last_profile.duration
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            context = ProfileContext(func.__name__, threshold_mb=threshold_mb, alert=alert)
            try:
                with context:
                    return func(*args, **kwargs)
            finally:
                wrapper.last_profile = context.profile

        wrapper.last_profile = None
        return wrapper

    return decorator
