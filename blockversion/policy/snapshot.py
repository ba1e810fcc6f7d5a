"""Policy snapshot and the store that publishes it.

A ``PolicySnapshot`` is an immutable value built once per successful
reload. The ``PolicyStore`` holds a single reference to the current
snapshot; readers dereference it without locking, the reload writer swaps
it in one assignment.
"""

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..protocol import ProtocolVersion
from ..utils.logging import get_logger


if TYPE_CHECKING:
    from ..config.models import PolicyConfig


logger = get_logger(__name__)

DEFAULT_REPEAT_BYPASS_MESSAGE = 600


@dataclass(frozen=True)
class PolicySnapshot:
    """Whitelist/blacklist policy at a point in time."""

    whitelist_range_enabled: bool = False
    whitelist_start: ProtocolVersion | None = None
    whitelist_end: ProtocolVersion | None = None

    whitelist: frozenset[ProtocolVersion] = field(default_factory=frozenset)
    blacklist: frozenset[ProtocolVersion] = field(default_factory=frozenset)

    whitelist_message: str = ""
    blacklist_message: str = ""
    bypass_message: str = ""

    # 0 = send once on join, negative = never send
    repeat_bypass_message: int = DEFAULT_REPEAT_BYPASS_MESSAGE

    recommended_version: ProtocolVersion | None = None
    recommend_message: str = ""

    def is_whitelisted(self, version: ProtocolVersion) -> bool:
        return version in self.whitelist

    def is_blacklisted(self, version: ProtocolVersion) -> bool:
        return version in self.blacklist

    def is_bypassing(self, version: ProtocolVersion) -> bool:
        """Check if a connection on this version only got in through a bypass."""
        return not self.is_whitelisted(version) or self.is_blacklisted(version)


class PolicyStore:
    """Read-mostly holder of the current policy snapshot."""

    def __init__(self, snapshot: PolicySnapshot | None = None):
        """Initialize the store.

        Args:
            snapshot: Initial snapshot; an empty policy if None
        """
        self._snapshot = snapshot or PolicySnapshot()
        self._reload_lock = threading.Lock()

    @property
    def snapshot(self) -> PolicySnapshot:
        """The currently published snapshot."""
        return self._snapshot

    def is_whitelisted(self, version: ProtocolVersion) -> bool:
        return self._snapshot.is_whitelisted(version)

    def is_blacklisted(self, version: ProtocolVersion) -> bool:
        return self._snapshot.is_blacklisted(version)

    @property
    def whitelist_message(self) -> str:
        return self._snapshot.whitelist_message

    @property
    def blacklist_message(self) -> str:
        return self._snapshot.blacklist_message

    @property
    def bypass_message(self) -> str:
        return self._snapshot.bypass_message

    @property
    def repeat_bypass_message(self) -> int:
        return self._snapshot.repeat_bypass_message

    @property
    def recommended_version(self) -> ProtocolVersion | None:
        return self._snapshot.recommended_version

    @property
    def recommend_message(self) -> str:
        return self._snapshot.recommend_message

    def reload(self, raw: "PolicyConfig") -> PolicySnapshot:
        """Build a snapshot from raw configuration and publish it.

        Nothing is published unless the whole configuration is valid.

        Args:
            raw: Parsed configuration values

        Returns:
            The newly published snapshot

        Raises:
            ConfigError: If any value is invalid; the current snapshot is kept
        """
        from .reload import build_snapshot

        with self._reload_lock:
            snapshot = build_snapshot(raw)
            self._snapshot = snapshot

        logger.info(
            "policy_published",
            whitelisted=len(snapshot.whitelist),
            blacklisted=len(snapshot.blacklist),
            range_enabled=snapshot.whitelist_range_enabled,
            repeat_bypass_message=snapshot.repeat_bypass_message,
        )
        return snapshot
