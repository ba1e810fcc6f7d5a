"""Admission decisions for a connecting protocol version."""

from enum import Enum

from ..permissions import Capability, CapabilitySet
from ..protocol import ProtocolVersion
from .snapshot import PolicySnapshot, PolicyStore


class Decision(Enum):
    """Outcome of an admission check."""

    ALLOW = "allow"
    ALLOW_BYPASS = "allow_bypass"  # Allowed only through a bypass capability
    DENY_BLACKLISTED = "deny_blacklisted"
    DENY_NOT_WHITELISTED = "deny_not_whitelisted"

    @property
    def allowed(self) -> bool:
        return self in (Decision.ALLOW, Decision.ALLOW_BYPASS)

    @property
    def bypassed(self) -> bool:
        return self is Decision.ALLOW_BYPASS

    def message(self, snapshot: PolicySnapshot) -> str | None:
        """Get the kick message for a denial, or None if allowed."""
        if self is Decision.DENY_BLACKLISTED:
            return snapshot.blacklist_message
        if self is Decision.DENY_NOT_WHITELISTED:
            return snapshot.whitelist_message
        return None


def decide(
    version: ProtocolVersion, caps: CapabilitySet, store: PolicyStore | PolicySnapshot
) -> Decision:
    """Decide whether a connection on ``version`` may join.

    The blacklist is checked first and overrides the whitelist. BYPASS_ALL
    passes both checks, BYPASS_BLACKLIST only the blacklist one.

    Args:
        version: Resolved protocol version of the connection
        caps: Capabilities held by the connecting player
        store: Policy to check against

    Returns:
        The admission decision
    """
    # Pin one snapshot so both checks see the same policy
    snapshot = store.snapshot if isinstance(store, PolicyStore) else store
    bypass_all = Capability.BYPASS_ALL in caps

    if snapshot.is_blacklisted(version):
        if not bypass_all and Capability.BYPASS_BLACKLIST not in caps:
            return Decision.DENY_BLACKLISTED
        return Decision.ALLOW_BYPASS

    if not snapshot.is_whitelisted(version):
        if not bypass_all:
            return Decision.DENY_NOT_WHITELISTED
        return Decision.ALLOW_BYPASS

    return Decision.ALLOW
