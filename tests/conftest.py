"""Pytest configuration and fixtures for Block Version tests."""

import threading
from collections.abc import Callable

import pytest

from blockversion.config import PolicyConfig
from blockversion.host import Connection, Host, LoginAttempt, PermissionProvider, Player
from blockversion.policy import PolicyStore
from blockversion.utils.logging import reset_logging


class FakePlayer(Player):
    """Player recording what the gate does to it."""

    def __init__(self, name: str = "Steve", permissions: set[str] | None = None):
        self.name = name
        self.permissions = set(permissions or ())
        self.messages: list[str] = []
        self.kicked_with: str | None = None

    def has_permission(self, node: str) -> bool:
        return node in self.permissions

    def send_message(self, message: str) -> None:
        self.messages.append(message)

    def kick(self, message: str) -> None:
        self.kicked_with = message


class FakeConnection(Connection):
    """Connection with a fixed version."""

    def __init__(self, raw_version, player: FakePlayer | None = None):
        self._raw_version = raw_version
        self._player = player

    @property
    def raw_version(self):
        return self._raw_version

    @property
    def player(self) -> FakePlayer | None:
        return self._player


class FakeLoginAttempt(LoginAttempt):
    """Pending login recording a denial."""

    def __init__(self, raw_version, username: str = "Steve", player: FakePlayer | None = None):
        self._raw_version = raw_version
        self._username = username
        self._player = player
        self.denied_with: str | None = None

    @property
    def raw_version(self):
        return self._raw_version

    @property
    def player(self) -> FakePlayer | None:
        return self._player

    @property
    def username(self) -> str:
        return self._username

    def deny(self, message: str) -> None:
        self.denied_with = message


class FakePermissionProvider(PermissionProvider):
    """Offline permission lookup backed by a dict."""

    def __init__(self, grants: dict[str, set[str]] | None = None):
        self.grants = grants or {}

    def player_has(self, username: str, node: str) -> bool:
        return node in self.grants.get(username, set())


class SyncHost(Host):
    """Host that runs tasks immediately on the calling thread.

    Delayed tasks are queued until ``run_delayed`` is called.
    """

    def __init__(self):
        self.open_connections: list[Connection] = []
        self.delayed: list[tuple[Callable[[], None], float]] = []
        self.dispatch_count = 0
        self.dispatch_threads: list[str] = []
        self.dispatched = threading.Event()

    def connections(self) -> list[Connection]:
        return list(self.open_connections)

    def run_task(self, callback: Callable[[], None]) -> None:
        self.dispatch_count += 1
        self.dispatch_threads.append(threading.current_thread().name)
        callback()
        self.dispatched.set()

    def run_task_later(self, callback: Callable[[], None], delay: float) -> None:
        self.delayed.append((callback, delay))

    def run_delayed(self) -> None:
        pending, self.delayed = self.delayed, []
        for callback, _ in pending:
            callback()


def make_config(**overrides) -> PolicyConfig:
    """Build a valid policy configuration, overriding top level keys."""
    data = {
        "whitelist": {
            "enableStartEnd": False,
            "start": "1.8",
            "end": "1.12.2",
            "allowVersions": [],
        },
        "blacklist": [],
        "whitelistMessage": "&cNot whitelisted",
        "blacklistMessage": "&4Blacklisted",
        "bypassMessage": "&eYou are bypassing",
        "repeatBypassMessage": 600,
    }
    whitelist = overrides.pop("whitelist", None)
    if whitelist:
        data["whitelist"].update(whitelist)
    data.update(overrides)
    return PolicyConfig(**data)


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop handlers a test installed through setup_logging."""
    yield
    reset_logging()


@pytest.fixture
def config_factory():
    """Factory for policy configurations."""
    return make_config


@pytest.fixture
def store():
    """Empty policy store."""
    return PolicyStore()


@pytest.fixture
def host():
    """Synchronous test host."""
    return SyncHost()


@pytest.fixture
def player_factory():
    """Factory for fake players."""
    return FakePlayer


@pytest.fixture
def connection_factory():
    """Factory for fake connections."""
    return FakeConnection


@pytest.fixture
def login_factory():
    """Factory for fake pending logins."""
    return FakeLoginAttempt


@pytest.fixture
def permission_provider():
    """Offline permission provider with no grants."""
    return FakePermissionProvider()


@pytest.fixture
def temp_config_file(tmp_path):
    """Temporary config file with a small valid policy."""
    import yaml

    config_file = tmp_path / "config.yml"
    config_data = {
        "whitelist": {"enableStartEnd": True, "start": "1.8", "end": "1.12.2"},
        "blacklist": ["1.7.5"],
        "whitelistMessage": "&cUse 1.8 - 1.12.2",
        "blacklistMessage": "&4Blocked",
        "bypassMessage": "&eBypassing",
        "repeatBypassMessage": -1,
    }

    with open(config_file, "w") as f:
        yaml.dump(config_data, f)

    return config_file


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external resources"
    )
    config.addinivalue_line(
        "markers", "integration: Tests wiring several components together"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take a long time to run"
    )
