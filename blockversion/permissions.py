"""Permission nodes checked by the version gate."""

from collections.abc import Callable
from enum import Enum

from . import PERMISSION_PREFIX


class Capability(Enum):
    """Capabilities a connecting player may hold, keyed by permission node."""

    # Connect with any version
    BYPASS_ALL = f"{PERMISSION_PREFIX}.bypass.all"
    # Connect with a blacklisted version
    BYPASS_BLACKLIST = f"{PERMISSION_PREFIX}.bypass.blacklist"
    # Do not send bypass reminders
    DISABLE_NOTIFY = f"{PERMISSION_PREFIX}.bypass.disableNotify"

    @property
    def node(self) -> str:
        return self.value


CapabilitySet = frozenset[Capability]

NO_CAPABILITIES: CapabilitySet = frozenset()


def capabilities_of(has_permission: Callable[[str], bool]) -> CapabilitySet:
    """Collect the capabilities granted by a permission check.

    Args:
        has_permission: Callable answering whether a permission node is held

    Returns:
        Set of held capabilities
    """
    return frozenset(
        capability for capability in Capability if has_permission(capability.node)
    )
