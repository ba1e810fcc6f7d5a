"""Protocol version identifiers for Minecraft clients.

This module defines the closed, release-ordered set of supported protocol
versions and the resolver that turns user supplied version strings into
those identifiers.
"""

from enum import Enum
from functools import total_ordering
from typing import Any

from .. import PROTOCOL_NAME_PREFIX


@total_ordering
class ProtocolVersion(Enum):
    """Supported client protocol versions, declared oldest first.

    Each member is ``(protocol_id, release_name)``. Ordering follows the
    declaration order, which is the release sequence; protocol ids are not
    monotonic across the 1.6 -> 1.7 netty rewrite.
    """

    MINECRAFT_1_4_7 = (51, "1.4.7")
    MINECRAFT_1_5_1 = (60, "1.5.1")
    MINECRAFT_1_5_2 = (61, "1.5.2")
    MINECRAFT_1_6_1 = (73, "1.6.1")
    MINECRAFT_1_6_2 = (74, "1.6.2")
    MINECRAFT_1_6_4 = (78, "1.6.4")
    MINECRAFT_1_7_5 = (4, "1.7.5")
    MINECRAFT_1_7_10 = (5, "1.7.10")
    MINECRAFT_1_8 = (47, "1.8")
    MINECRAFT_1_9 = (107, "1.9")
    MINECRAFT_1_9_1 = (108, "1.9.1")
    MINECRAFT_1_9_2 = (109, "1.9.2")
    MINECRAFT_1_9_4 = (110, "1.9.4")
    MINECRAFT_1_10 = (210, "1.10")
    MINECRAFT_1_11 = (315, "1.11")
    MINECRAFT_1_11_1 = (316, "1.11.1")
    MINECRAFT_1_12 = (335, "1.12")
    MINECRAFT_1_12_1 = (338, "1.12.1")
    MINECRAFT_1_12_2 = (340, "1.12.2")
    MINECRAFT_1_13 = (393, "1.13")
    MINECRAFT_1_13_1 = (401, "1.13.1")
    MINECRAFT_1_13_2 = (404, "1.13.2")
    MINECRAFT_1_14 = (477, "1.14")
    MINECRAFT_1_14_1 = (480, "1.14.1")
    MINECRAFT_1_14_2 = (485, "1.14.2")
    MINECRAFT_1_14_3 = (490, "1.14.3")
    MINECRAFT_1_14_4 = (498, "1.14.4")
    MINECRAFT_1_15 = (573, "1.15")
    MINECRAFT_1_15_1 = (575, "1.15.1")
    MINECRAFT_1_15_2 = (578, "1.15.2")
    MINECRAFT_1_16 = (735, "1.16")
    MINECRAFT_1_16_1 = (736, "1.16.1")
    MINECRAFT_1_16_2 = (751, "1.16.2")
    MINECRAFT_1_16_3 = (753, "1.16.3")
    MINECRAFT_1_16_4 = (754, "1.16.4")

    UNKNOWN = (-1, "unknown")

    def __init__(self, protocol_id: int, release_name: str):
        self.protocol_id = protocol_id
        self.release_name = release_name

    @property
    def order(self) -> int:
        """Position in the release sequence (-1 for UNKNOWN)."""
        return _ORDER.get(self, -1)

    def is_supported(self) -> bool:
        """Check if this is a real protocol version rather than the sentinel."""
        return self is not ProtocolVersion.UNKNOWN

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ProtocolVersion):
            return NotImplemented
        return self.order < other.order

    def __str__(self) -> str:
        return self.release_name

    @classmethod
    def from_id(cls, protocol_id: int) -> "ProtocolVersion":
        """Get the version for a raw wire protocol number.

        Args:
            protocol_id: Protocol number sent in the client handshake

        Returns:
            Matching version, or UNKNOWN
        """
        return _BY_ID.get(protocol_id, cls.UNKNOWN)


_SUPPORTED: tuple[ProtocolVersion, ...] = tuple(
    version for version in ProtocolVersion if version is not ProtocolVersion.UNKNOWN
)
_ORDER: dict[ProtocolVersion, int] = {version: i for i, version in enumerate(_SUPPORTED)}
_BY_ID: dict[int, ProtocolVersion] = {version.protocol_id: version for version in _SUPPORTED}


def supported_versions() -> tuple[ProtocolVersion, ...]:
    """Get all supported versions in release order."""
    return _SUPPORTED


def resolve(value: str | ProtocolVersion | None) -> ProtocolVersion | None:
    """Resolve a version string into a protocol version.

    Both spellings are accepted: the symbolic name ("MINECRAFT_1_12_2") and
    the release string ("1.12.2").

    Args:
        value: Version string to resolve

    Returns:
        The protocol version, or None if it cannot be resolved
    """
    if isinstance(value, ProtocolVersion):
        return value if value.is_supported() else None

    if not value:
        return None

    version = _lookup(value)
    if version is not None:
        return version

    return _lookup(PROTOCOL_NAME_PREFIX + value.replace(".", "_"))


def resolve_or_unknown(value: str | ProtocolVersion | None) -> ProtocolVersion:
    """Resolve a version string, falling back to UNKNOWN."""
    version = resolve(value)
    if version is None:
        return ProtocolVersion.UNKNOWN
    return version


def get_all_between(first: ProtocolVersion, second: ProtocolVersion) -> list[ProtocolVersion]:
    """Get every version between two bounds, inclusive, in release order.

    The bounds may be given in either order.

    Args:
        first: One bound
        second: The other bound

    Returns:
        Versions between the bounds; empty if either bound is UNKNOWN
    """
    if not first.is_supported() or not second.is_supported():
        return []

    low, high = sorted((first.order, second.order))
    return list(_SUPPORTED[low : high + 1])


def _lookup(name: str) -> ProtocolVersion | None:
    version = ProtocolVersion.__members__.get(name)
    if version is None or not version.is_supported():
        return None
    return version
