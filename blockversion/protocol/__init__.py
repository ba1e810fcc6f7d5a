"""Protocol version identifiers and resolution."""

from .versions import (
    ProtocolVersion,
    get_all_between,
    resolve,
    resolve_or_unknown,
    supported_versions,
)


__all__ = [
    "ProtocolVersion",
    "get_all_between",
    "resolve",
    "resolve_or_unknown",
    "supported_versions",
]
