"""Interfaces to the host game server.

The version gate never owns connections; it queries them and signals
accept/deny through these interfaces. ``AsyncioHost`` is a reference host
whose main serialized loop is an asyncio event loop.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

from .permissions import CapabilitySet, capabilities_of
from .protocol import ProtocolVersion, resolve_or_unknown
from .utils.logging import get_logger


logger = get_logger(__name__)


class Player(ABC):
    """An online player."""

    name: str = ""

    @abstractmethod
    def has_permission(self, node: str) -> bool:
        """Check if the player holds a permission node."""

    @abstractmethod
    def send_message(self, message: str) -> None:
        """Send a chat message. Must run on the host loop."""

    @abstractmethod
    def kick(self, message: str) -> None:
        """Disconnect the player. Must run on the host loop."""

    def capabilities(self) -> CapabilitySet:
        return capabilities_of(self.has_permission)


class Connection(ABC):
    """A client connection with its observed protocol version."""

    @property
    @abstractmethod
    def raw_version(self) -> str | int | ProtocolVersion | None:
        """Version as reported by the protocol layer.

        Either a ``ProtocolVersion``, a version string, or a wire protocol id.
        """

    @property
    @abstractmethod
    def player(self) -> Player | None:
        """The player on this connection, if it has finished logging in."""

    @property
    def version(self) -> ProtocolVersion:
        raw = self.raw_version
        if isinstance(raw, int) and not isinstance(raw, bool):
            return ProtocolVersion.from_id(raw)
        return resolve_or_unknown(raw)


class LoginAttempt(Connection):
    """A connection that has started but not finished logging in."""

    @property
    @abstractmethod
    def username(self) -> str:
        """Name from the (offline-mode) login profile."""

    @abstractmethod
    def deny(self, message: str) -> None:
        """Refuse the login with a message."""


class PermissionProvider(ABC):
    """Permission lookup usable before a Player object exists."""

    @abstractmethod
    def player_has(self, username: str, node: str) -> bool:
        """Check if a (possibly offline) player holds a permission node."""

    def capabilities(self, username: str) -> CapabilitySet:
        return capabilities_of(lambda node: self.player_has(username, node))


class Host(ABC):
    """The host server's scheduling and connection registry."""

    @abstractmethod
    def connections(self) -> Iterable[Connection]:
        """Currently open connections. Called on the host loop."""

    @abstractmethod
    def run_task(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the host loop. Safe to call from any thread."""

    @abstractmethod
    def run_task_later(self, callback: Callable[[], None], delay: float) -> None:
        """Run ``callback`` on the host loop after ``delay`` seconds."""


class AsyncioHost(Host):
    """Host whose main loop is an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """Initialize the host.

        Args:
            loop: Event loop acting as the main thread; the running loop if None
        """
        self.loop = loop or asyncio.get_running_loop()
        self._connections: list[Connection] = []

    def register_connection(self, connection: Connection) -> None:
        """Register an open connection."""
        self._connections.append(connection)

    def unregister_connection(self, connection: Connection) -> None:
        """Unregister a closed connection."""
        if connection in self._connections:
            self._connections.remove(connection)

    def connections(self) -> list[Connection]:
        return list(self._connections)

    def run_task(self, callback: Callable[[], None]) -> None:
        if self.loop.is_closed():
            logger.warning("host_loop_closed", callback=getattr(callback, "__name__", None))
            return
        self.loop.call_soon_threadsafe(callback)

    def run_task_later(self, callback: Callable[[], None], delay: float) -> None:
        if self.loop.is_closed():
            logger.warning("host_loop_closed", callback=getattr(callback, "__name__", None))
            return
        self.loop.call_soon_threadsafe(self.loop.call_later, delay, callback)
