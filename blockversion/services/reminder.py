"""Recurring reminders for players who joined through a bypass.

A ``VersionReminder`` is bound to one policy generation. Its timer runs on a
dedicated daemon thread; each firing only hands a task to the host loop,
which does the actual scan and messaging.
"""

import threading
from enum import Enum

from ..host import Host, Player
from ..permissions import Capability
from ..policy import PolicyStore
from ..utils.logging import get_logger


logger = get_logger(__name__)

# Delay before the first firing, in seconds
INITIAL_DELAY = 0.2


class ReminderState(Enum):
    """Reminder scheduler states."""

    STOPPED = "stopped"
    RUNNING = "running"


class VersionReminder:
    """Periodically reminds bypassing players to change their version.

    The interval is read once at construction:

    - negative: the reminder never starts
    - ``0``: fires once after the initial delay and never repeats
    - positive: fires every ``interval`` seconds after the initial delay

    Messages and the bypass check always use the store's current snapshot.
    """

    def __init__(
        self,
        store: PolicyStore,
        host: Host,
        interval: float | None = None,
        initial_delay: float = INITIAL_DELAY,
    ):
        """Initialize and, unless disabled, start the reminder.

        Args:
            store: Policy store to read messages and lists from
            host: Host to dispatch work to and scan connections of
            interval: Seconds between firings; the store's value if None
            initial_delay: Seconds before the first firing
        """
        self.store = store
        self.host = host
        self.interval = store.repeat_bypass_message if interval is None else interval
        self.initial_delay = initial_delay
        self.fired = 0

        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self._thread: threading.Thread | None = None

        if self.interval < 0:
            logger.info("reminder_disabled", interval=self.interval)
            return

        self._thread = threading.Thread(
            target=self._run, name="blockversion-reminder", daemon=True
        )
        self._thread.start()
        logger.info(
            "reminder_started", interval=self.interval, initial_delay=self.initial_delay
        )

    @property
    def state(self) -> ReminderState:
        thread = self._thread
        if self._cancelled.is_set() or thread is None or not thread.is_alive():
            return ReminderState.STOPPED
        return ReminderState.RUNNING

    @property
    def enabled(self) -> bool:
        """Whether bypass messages are sent at all under this generation."""
        return self.interval >= 0

    def shutdown(self) -> None:
        """Stop the timer and cancel all future firings.

        Safe to call repeatedly. Once this returns no further reminder is
        dispatched or delivered. The instance cannot be restarted.
        """
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            thread = self._thread

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        logger.info("reminder_stopped", fired=self.fired)

    def remind_player(self, player: Player) -> None:
        """Send the bypass message to one player, unless reminders are disabled.

        Must run on the host loop.
        """
        if self.enabled and not self._cancelled.is_set():
            player.send_message(self.store.bypass_message)

    def recommend_player(self, player: Player) -> None:
        """Send the recommended-version message to one player.

        Must run on the host loop.
        """
        message = self.store.recommend_message
        if message and not self._cancelled.is_set():
            player.send_message(message)

    def _run(self) -> None:
        if self._wait(self.initial_delay):
            return

        while True:
            self._fire()
            # A zero period cannot repeat; treat it as a single firing
            if self.interval == 0:
                return
            if self._wait(self.interval):
                return

    def _wait(self, seconds: float) -> bool:
        # Event.wait overflows past TIMEOUT_MAX
        return self._cancelled.wait(min(seconds, threading.TIMEOUT_MAX))

    def _fire(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self.fired += 1
            self.host.run_task(self.send_to_all)

    def send_to_all(self) -> int:
        """Send the bypass message to every bypassing player.

        Runs on the host loop. Players holding DISABLE_NOTIFY are skipped.

        Returns:
            Number of players notified
        """
        # Dispatched before shutdown but not yet run
        if self._cancelled.is_set():
            return 0

        snapshot = self.store.snapshot
        notified = 0

        for connection in self.host.connections():
            if not snapshot.is_bypassing(connection.version):
                continue

            player = connection.player
            if player is None or player.has_permission(Capability.DISABLE_NOTIFY.node):
                continue

            player.send_message(snapshot.bypass_message)
            notified += 1

        logger.debug("bypass_reminders_sent", notified=notified)
        return notified
