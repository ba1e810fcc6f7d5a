"""Tests for building policy snapshots from raw configuration."""

import pytest

from blockversion.policy import (
    ConfigError,
    EmptyRange,
    InvalidBlacklistEntry,
    InvalidRangeBound,
    InvalidRecommendedVersion,
    InvalidWhitelistEntry,
    MissingMessage,
    PolicyStore,
    build_snapshot,
)
from blockversion.protocol import ProtocolVersion


class TestBuildSnapshot:
    """Test the reload pipeline steps."""

    def test_explicit_lists(self, config_factory):
        """Test explicit whitelist and blacklist entries in both spellings."""
        snapshot = build_snapshot(
            config_factory(
                whitelist={"allowVersions": ["1.12.2", "MINECRAFT_1_8"]},
                blacklist=["1.7.5"],
            )
        )

        assert snapshot.whitelist == {
            ProtocolVersion.MINECRAFT_1_12_2,
            ProtocolVersion.MINECRAFT_1_8,
        }
        assert snapshot.blacklist == {ProtocolVersion.MINECRAFT_1_7_5}
        assert not snapshot.whitelist_range_enabled
        assert snapshot.whitelist_start is None
        assert snapshot.whitelist_end is None

    def test_range_is_united_with_explicit_entries(self, config_factory):
        """Test range and explicit whitelist entries are combined."""
        snapshot = build_snapshot(
            config_factory(
                whitelist={
                    "enableStartEnd": True,
                    "start": "1.12",
                    "end": "1.12.2",
                    "allowVersions": ["1.8"],
                }
            )
        )

        assert snapshot.whitelist_range_enabled
        assert snapshot.whitelist_start is ProtocolVersion.MINECRAFT_1_12
        assert snapshot.whitelist_end is ProtocolVersion.MINECRAFT_1_12_2
        assert snapshot.whitelist == {
            ProtocolVersion.MINECRAFT_1_8,
            ProtocolVersion.MINECRAFT_1_12,
            ProtocolVersion.MINECRAFT_1_12_1,
            ProtocolVersion.MINECRAFT_1_12_2,
        }

    def test_reversed_range(self, config_factory):
        """Test a range whose start is newer than its end."""
        snapshot = build_snapshot(
            config_factory(whitelist={"enableStartEnd": True, "start": "1.9.4", "end": "1.9"})
        )

        assert snapshot.whitelist == {
            ProtocolVersion.MINECRAFT_1_9,
            ProtocolVersion.MINECRAFT_1_9_1,
            ProtocolVersion.MINECRAFT_1_9_2,
            ProtocolVersion.MINECRAFT_1_9_4,
        }

    def test_range_disabled_ignores_bounds(self, config_factory):
        """Test invalid bounds are ignored when the range is off."""
        snapshot = build_snapshot(
            config_factory(whitelist={"enableStartEnd": False, "start": "garbage", "end": None})
        )

        assert snapshot.whitelist == frozenset()

    def test_messages_are_colorized(self, config_factory):
        """Test the ampersand codes are translated."""
        snapshot = build_snapshot(config_factory())

        assert snapshot.whitelist_message == "§cNot whitelisted"
        assert snapshot.blacklist_message == "§4Blacklisted"
        assert snapshot.bypass_message == "§eYou are bypassing"

    @pytest.mark.parametrize("interval", [-1, 0, 600])
    def test_interval_is_kept(self, config_factory, interval):
        """Test negative and zero intervals are valid."""
        snapshot = build_snapshot(config_factory(repeatBypassMessage=interval))

        assert snapshot.repeat_bypass_message == interval

    def test_recommended_version(self, config_factory):
        """Test the recommended version and its message."""
        snapshot = build_snapshot(
            config_factory(recommendedVersion="1.16.4", recommendMessage="&aUse 1.16.4")
        )

        assert snapshot.recommended_version is ProtocolVersion.MINECRAFT_1_16_4
        assert snapshot.recommend_message == "§aUse 1.16.4"

    def test_empty_recommended_version_disables(self, config_factory):
        """Test an empty recommended version disables the feature."""
        snapshot = build_snapshot(config_factory(recommendedVersion="", recommendMessage=None))

        assert snapshot.recommended_version is None
        assert snapshot.recommend_message == ""

    def test_deterministic(self, config_factory):
        """Test identical input builds equal snapshots."""
        config = config_factory(
            whitelist={"enableStartEnd": True, "start": "1.8", "end": "1.10"},
            blacklist=["1.9"],
        )

        assert build_snapshot(config) == build_snapshot(config)


class TestBuildSnapshotErrors:
    """Test configuration errors."""

    def test_invalid_start(self, config_factory):
        """Test an unknown range start names the value."""
        with pytest.raises(InvalidRangeBound) as exc_info:
            build_snapshot(config_factory(whitelist={"enableStartEnd": True, "start": "garbage"}))

        assert exc_info.value.key == "whitelist.start"
        assert exc_info.value.value == "garbage"
        assert "garbage" in str(exc_info.value)

    def test_invalid_end(self, config_factory):
        """Test an unknown range end names the field."""
        with pytest.raises(InvalidRangeBound) as exc_info:
            build_snapshot(config_factory(whitelist={"enableStartEnd": True, "end": "1.99"}))

        assert exc_info.value.key == "whitelist.end"
        assert "1.99" in str(exc_info.value)

    def test_missing_bound(self, config_factory):
        """Test a missing bound is unresolvable."""
        with pytest.raises(InvalidRangeBound) as exc_info:
            build_snapshot(config_factory(whitelist={"enableStartEnd": True, "start": None}))

        assert exc_info.value.key == "whitelist.start"

    def test_empty_range(self, config_factory, monkeypatch):
        """Test a range that selects nothing."""
        monkeypatch.setattr("blockversion.policy.reload.get_all_between", lambda a, b: [])

        with pytest.raises(EmptyRange):
            build_snapshot(config_factory(whitelist={"enableStartEnd": True}))

    def test_invalid_whitelist_entry(self, config_factory):
        """Test an unknown whitelist entry."""
        with pytest.raises(InvalidWhitelistEntry) as exc_info:
            build_snapshot(config_factory(whitelist={"allowVersions": ["1.8", "1.8.99"]}))

        assert exc_info.value.value == "1.8.99"
        assert exc_info.value.key == "whitelist.allowVersions"

    def test_invalid_blacklist_entry(self, config_factory):
        """Test an unknown blacklist entry."""
        with pytest.raises(InvalidBlacklistEntry) as exc_info:
            build_snapshot(config_factory(blacklist=["b1.7.3"]))

        assert exc_info.value.value == "b1.7.3"
        assert exc_info.value.key == "blacklist"

    @pytest.mark.parametrize("key", ["whitelistMessage", "blacklistMessage", "bypassMessage"])
    def test_missing_message(self, config_factory, key):
        """Test each required message is named when missing."""
        with pytest.raises(MissingMessage) as exc_info:
            build_snapshot(config_factory(**{key: None}))

        assert exc_info.value.key == key
        assert key in str(exc_info.value)

    def test_invalid_recommended_version(self, config_factory):
        """Test an unknown recommended version."""
        with pytest.raises(InvalidRecommendedVersion):
            build_snapshot(config_factory(recommendedVersion="9.9", recommendMessage="hi"))

    def test_recommended_version_requires_message(self, config_factory):
        """Test the recommend message is required once enabled."""
        with pytest.raises(MissingMessage) as exc_info:
            build_snapshot(config_factory(recommendedVersion="1.8"))

        assert exc_info.value.key == "recommendMessage"

    def test_errors_are_value_errors(self):
        """Test the error hierarchy."""
        assert issubclass(ConfigError, ValueError)
        for error in (
            InvalidRangeBound,
            EmptyRange,
            InvalidWhitelistEntry,
            InvalidBlacklistEntry,
            MissingMessage,
            InvalidRecommendedVersion,
        ):
            assert issubclass(error, ConfigError)


class TestReloadAtomicity:
    """Test failed reloads leave the store untouched."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"whitelist": {"enableStartEnd": True, "start": "garbage"}},
            {"whitelist": {"allowVersions": ["nope"]}},
            {"blacklist": ["1.8", "nope"]},
            {"bypassMessage": None},
            {"recommendedVersion": "nope"},
        ],
    )
    def test_failure_keeps_previous(self, config_factory, overrides):
        """Test the store after a failed reload equals the store before."""
        store = PolicyStore()
        store.reload(
            config_factory(
                whitelist={"enableStartEnd": True, "start": "1.8", "end": "1.12.2"},
                blacklist=["1.7.5"],
                repeatBypassMessage=30,
            )
        )
        before = store.snapshot

        with pytest.raises(ConfigError):
            store.reload(config_factory(**overrides))

        assert store.snapshot is before
        assert store.repeat_bypass_message == 30
        assert store.is_blacklisted(ProtocolVersion.MINECRAFT_1_7_5)
