"""Effect contexts for write handles and transformations."""

from pipewrite.effects.context import (
    EffectContext,
    DirectContext,
    TracingContext,
    LoggingContext,
    EffectRecord,
    resolve_context,
)

__all__ = [
    "EffectContext",
    "DirectContext",
    "TracingContext",
    "LoggingContext",
    "EffectRecord",
    "resolve_context",
]
