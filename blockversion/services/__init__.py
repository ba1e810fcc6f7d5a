"""Version gate services: admission listener and bypass reminders."""

from .login import LoginListener
from .reminder import INITIAL_DELAY, ReminderState, VersionReminder


__all__ = [
    "INITIAL_DELAY",
    "LoginListener",
    "ReminderState",
    "VersionReminder",
]
