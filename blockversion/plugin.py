"""Main Block Version plugin: wires the policy, listener and reminder."""

import threading
from pathlib import Path

from .config import Settings, load_config, save_default_config
from .host import Host, PermissionProvider
from .policy import ConfigError, PolicySnapshot, PolicyStore
from .protocol import ProtocolVersion, resolve, resolve_or_unknown
from .services import INITIAL_DELAY, LoginListener, VersionReminder
from .utils.logging import get_logger


logger = get_logger(__name__)


class VersionGatePlugin:
    """Owns one policy store and the services reading from it.

    Every successful reload starts a new policy generation: the snapshot is
    swapped and, while the plugin is enabled, the reminder is replaced by one
    using the new interval. Lifecycle calls are serialized.
    """

    def __init__(
        self,
        host: Host,
        config_path: Path | None = None,
        settings: Settings | None = None,
        permission_provider: PermissionProvider | None = None,
        initial_delay: float = INITIAL_DELAY,
    ) -> None:
        """Initialize the plugin.

        Args:
            host: Host server interface
            config_path: YAML file read on every reload
            settings: Fixed settings, used when no config_path is given
            permission_provider: Offline permission lookup for login checks
            initial_delay: Delay before each reminder generation first fires
        """
        if config_path is None and settings is None:
            raise ValueError("either config_path or settings is required")

        self.host = host
        self.config_path = config_path
        self.settings = settings
        self.permission_provider = permission_provider
        self.initial_delay = initial_delay

        self.store = PolicyStore()
        self.listener: LoginListener | None = None
        self.reminder: VersionReminder | None = None
        self.enabled = False

        self._lifecycle_lock = threading.RLock()
        self._enabling = False

    def enable(self) -> None:
        """Load the configuration and start the services.

        Raises:
            ConfigError: If the configuration is invalid; nothing is started
        """
        with self._lifecycle_lock:
            if self.enabled:
                return

            if self.config_path is not None and save_default_config(self.config_path):
                logger.info("default_config_written", path=str(self.config_path))

            self._enabling = True
            try:
                self.reload()
            finally:
                self._enabling = False

            self.listener = LoginListener(
                self.store,
                self.host,
                reminder=lambda: self.reminder,
                permission_provider=self.permission_provider,
                fail_closed=self.settings.fail_closed,
            )
            self.enabled = True
            logger.info("plugin_enabled")

    def disable(self) -> None:
        """Stop the reminder and detach the listener."""
        with self._lifecycle_lock:
            if self.reminder is not None:
                self.reminder.shutdown()
                self.reminder = None
            self.listener = None
            self.enabled = False
            logger.info("plugin_disabled")

    def reload(self) -> PolicySnapshot:
        """Re-read the configuration and publish a new policy generation.

        A disabled plugin only updates its policy; no reminder is started.

        Returns:
            The new snapshot

        Raises:
            ConfigError: If the configuration is invalid; the previous
                policy and reminder stay in effect
            ValueError: If the configuration file cannot be parsed
        """
        with self._lifecycle_lock:
            settings = self._read_settings()

            try:
                snapshot = self.store.reload(settings)
            except ConfigError as e:
                logger.error(
                    "config_reload_failed", key=e.key, value=str(e.value), error=str(e)
                )
                raise

            self.settings = settings

            if self.reminder is not None:
                self.reminder.shutdown()
                self.reminder = None
            if self.enabled or self._enabling:
                self.reminder = VersionReminder(
                    self.store,
                    self.host,
                    interval=snapshot.repeat_bypass_message,
                    initial_delay=self.initial_delay,
                )

            logger.info("config_reloaded", enabled=self.enabled or self._enabling)
            return snapshot

    def is_whitelisted(self, version: str | ProtocolVersion) -> bool:
        """Check if a version is whitelisted under the current policy."""
        return self.store.is_whitelisted(resolve_or_unknown(version))

    def is_blacklisted(self, version: str | ProtocolVersion) -> bool:
        """Check if a version is blacklisted under the current policy."""
        return self.store.is_blacklisted(resolve_or_unknown(version))

    @property
    def recommended_version(self) -> ProtocolVersion | None:
        return self.store.recommended_version

    @staticmethod
    def get_protocol(version: str | None) -> ProtocolVersion | None:
        """Resolve a release or protocol name, None if unknown."""
        return resolve(version)

    def _read_settings(self) -> Settings:
        if self.config_path is not None:
            return load_config(self.config_path)
        return self.settings
