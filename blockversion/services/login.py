"""Admission checks on login and join.

The same decision runs at two points. ``on_login_start`` rejects a
connection before the player object exists, when capabilities can already
be looked up; otherwise it defers. ``on_join`` has the final say and kicks
the player if the check fails.
"""

from collections.abc import Callable

from ..host import Connection, Host, LoginAttempt, PermissionProvider, Player
from ..permissions import CapabilitySet
from ..policy import Decision, PolicySnapshot, PolicyStore, decide
from ..protocol import ProtocolVersion
from ..utils.colors import strip_color
from ..utils.logging import get_logger
from .reminder import VersionReminder


logger = get_logger(__name__)

# Delay before messaging a player who just joined, so other plugins'
# join messages do not bury it
MESSAGE_DELAY = 1.0


class LoginListener:
    """Applies the version policy to connecting players."""

    def __init__(
        self,
        store: PolicyStore,
        host: Host,
        reminder: Callable[[], VersionReminder | None],
        permission_provider: PermissionProvider | None = None,
        fail_closed: bool = True,
    ):
        """Initialize the listener.

        Args:
            store: Policy store to decide against
            host: Host used to schedule delayed messages
            reminder: Returns the reminder of the current policy generation
            permission_provider: Offline permission lookup for early checks
            fail_closed: Deny the connection if the decision itself fails
        """
        self.store = store
        self.host = host
        self.reminder = reminder
        self.permission_provider = permission_provider
        self.fail_closed = fail_closed

        if permission_provider is None:
            logger.warning(
                "permission_provider_missing",
                detail="login start checks are disabled, relying on join checks",
            )

    def on_login_start(self, attempt: LoginAttempt) -> Decision | None:
        """Check a connection before it finishes logging in.

        Args:
            attempt: The pending login

        Returns:
            The decision, or None if capabilities are not available yet
        """
        caps = self._login_capabilities(attempt)
        if caps is None:
            return None

        version = attempt.version
        snapshot = self.store.snapshot
        decision = self._decide(version, caps, snapshot, attempt.deny)

        message = decision.message(snapshot)
        if message is not None:
            logger.info(
                "login_denied",
                player=attempt.username,
                version=str(version),
                decision=decision.value,
            )
            attempt.deny(message)

        return decision

    def on_join(self, connection: Connection) -> Decision:
        """Check a player who has fully joined.

        Args:
            connection: Connection of the joined player

        Returns:
            The decision
        """
        player = connection.player
        if player is None:
            raise ValueError("on_join requires a connection with a player")

        version = connection.version
        snapshot = self.store.snapshot
        decision = self._decide(version, player.capabilities(), snapshot, player.kick)

        message = decision.message(snapshot)
        if message is not None:
            logger.info(
                "player_kicked",
                player=player.name,
                version=str(version),
                decision=decision.value,
                reason=strip_color(message),
            )
            player.kick(message)
            return decision

        if decision.bypassed:
            logger.info("player_bypassed", player=player.name, version=str(version))
            self.host.run_task_later(lambda: self._remind(player), MESSAGE_DELAY)

        recommended = snapshot.recommended_version
        if recommended is not None and version != recommended:
            self.host.run_task_later(lambda: self._recommend(player), MESSAGE_DELAY)

        return decision

    def _login_capabilities(self, attempt: LoginAttempt) -> CapabilitySet | None:
        player = attempt.player
        if player is not None:
            return player.capabilities()
        if self.permission_provider is not None:
            return self.permission_provider.capabilities(attempt.username)
        return None

    def _decide(
        self,
        version: ProtocolVersion,
        caps: CapabilitySet,
        snapshot: PolicySnapshot,
        deny: Callable[[str], None],
    ) -> Decision:
        try:
            return decide(version, caps, snapshot)
        except Exception:
            logger.exception("decision_failed", version=str(version))
            if self.fail_closed:
                deny(snapshot.whitelist_message)
            raise

    def _remind(self, player: Player) -> None:
        reminder = self.reminder()
        if reminder is not None:
            reminder.remind_player(player)

    def _recommend(self, player: Player) -> None:
        reminder = self.reminder()
        if reminder is not None:
            reminder.recommend_player(player)
