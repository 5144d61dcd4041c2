"""
Configuration management with typed Pydantic models.

Zone policies are explicit, immutable values; there is no global state.
"""

from zonestamp.config.loader import load_config
from zonestamp.config.settings import (
    MOSCOW_POLICY,
    UTC_POLICY,
    LoggingConfig,
    ZonePolicy,
    ZonestampConfig,
)

__all__ = [
    "MOSCOW_POLICY",
    "UTC_POLICY",
    "LoggingConfig",
    "ZonePolicy",
    "ZonestampConfig",
    "load_config",
]
