"""
Configuration management for pipewrite handles and pipelines.
"""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple, Type


@dataclass
class PipeWriteConfig:
    """Global configuration for write handles and stream stages."""

    # Handle output
    encoding: str = "utf-8"
    line_terminator: str = "\n"

    # Parsing
    parse_errors: Tuple[Type[BaseException], ...] = field(
        default_factory=lambda: (ValueError, TypeError, SyntaxError)
    )

    # Effect logging and tracing
    log_effects: bool = False
    log_level: int = logging.DEBUG
    trace_limit: Optional[int] = 10000

    # Profiling
    memory_alert_mb: float = 100.0

    _instance: ClassVar[Optional['PipeWriteConfig']] = None

    @classmethod
    def get_instance(cls) -> 'PipeWriteConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

    @classmethod
    def reset(cls) -> 'PipeWriteConfig':
        """Restore every field of the singleton to its default."""
        instance = cls.get_instance()
        fresh = cls()
        for name in cls.__dataclass_fields__:
            setattr(instance, name, getattr(fresh, name))
        return instance


# Global configuration instance
config = PipeWriteConfig.get_instance()
