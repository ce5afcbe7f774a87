"""Profiling for pipeline runs."""

from pipewrite.profiler.decorators import (
    ProfileContext,
    RunProfile,
    profile_pipeline,
)

__all__ = [
    "ProfileContext",
    "RunProfile",
    "profile_pipeline",
]
