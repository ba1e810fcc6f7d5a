"""Version policy: snapshots, reloading and admission decisions."""

from .decision import Decision, decide
from .errors import (
    ConfigError,
    EmptyRange,
    InvalidBlacklistEntry,
    InvalidRangeBound,
    InvalidRecommendedVersion,
    InvalidWhitelistEntry,
    MissingMessage,
)
from .reload import build_snapshot
from .snapshot import PolicySnapshot, PolicyStore


__all__ = [
    "ConfigError",
    "Decision",
    "EmptyRange",
    "InvalidBlacklistEntry",
    "InvalidRangeBound",
    "InvalidRecommendedVersion",
    "InvalidWhitelistEntry",
    "MissingMessage",
    "PolicySnapshot",
    "PolicyStore",
    "build_snapshot",
    "decide",
]
