"""Build policy snapshots from raw configuration values.

Every step accumulates into locals; the snapshot is only constructed once
the whole configuration has been validated, so a failing reload never
leaves a half-built policy behind.
"""

from ..config.models import PolicyConfig
from ..protocol import ProtocolVersion, get_all_between, resolve
from ..utils.colors import translate_alternate_color_codes
from ..utils.logging import get_logger
from .errors import (
    EmptyRange,
    InvalidBlacklistEntry,
    InvalidRangeBound,
    InvalidRecommendedVersion,
    InvalidWhitelistEntry,
    MissingMessage,
)
from .snapshot import PolicySnapshot


logger = get_logger(__name__)

ALT_COLOR_CHAR = "&"


def build_snapshot(raw: PolicyConfig) -> PolicySnapshot:
    """Validate raw configuration and build an immutable snapshot.

    Args:
        raw: Parsed configuration values

    Returns:
        New policy snapshot

    Raises:
        ConfigError: On the first invalid value
    """
    whitelist: set[ProtocolVersion] = set()
    blacklist: set[ProtocolVersion] = set()

    range_enabled = raw.whitelist.enable_start_end
    start, end = None, None
    if range_enabled:
        start, end = _resolve_range(raw.whitelist.start, raw.whitelist.end)
        whitelist.update(_enumerate_range(start, end))

    for entry in raw.whitelist.allow_versions:
        version = resolve(entry)
        if version is None:
            raise InvalidWhitelistEntry(entry)
        whitelist.add(version)

    for entry in raw.blacklist:
        version = resolve(entry)
        if version is None:
            raise InvalidBlacklistEntry(entry)
        blacklist.add(version)

    whitelist_message = _require_message("whitelistMessage", raw.whitelist_message)
    blacklist_message = _require_message("blacklistMessage", raw.blacklist_message)
    bypass_message = _require_message("bypassMessage", raw.bypass_message)

    recommended_version = None
    recommend_message = ""
    if raw.recommended_version:
        recommended_version = resolve(raw.recommended_version)
        if recommended_version is None:
            raise InvalidRecommendedVersion(raw.recommended_version)
        recommend_message = _require_message("recommendMessage", raw.recommend_message)

    overlap = whitelist & blacklist
    if overlap:
        logger.debug(
            "blacklist_overrides_whitelist",
            versions=sorted(str(version) for version in overlap),
        )

    return PolicySnapshot(
        whitelist_range_enabled=range_enabled,
        whitelist_start=start,
        whitelist_end=end,
        whitelist=frozenset(whitelist),
        blacklist=frozenset(blacklist),
        whitelist_message=_colorize(whitelist_message),
        blacklist_message=_colorize(blacklist_message),
        bypass_message=_colorize(bypass_message),
        repeat_bypass_message=raw.repeat_bypass_message,
        recommended_version=recommended_version,
        recommend_message=_colorize(recommend_message),
    )


def _resolve_range(
    start_value: str | None, end_value: str | None
) -> tuple[ProtocolVersion, ProtocolVersion]:
    start = resolve(start_value)
    if start is None:
        raise InvalidRangeBound("whitelist.start", start_value)

    end = resolve(end_value)
    if end is None:
        raise InvalidRangeBound("whitelist.end", end_value)

    return start, end


def _enumerate_range(start: ProtocolVersion, end: ProtocolVersion) -> list[ProtocolVersion]:
    between = get_all_between(start, end)
    if not between:
        raise EmptyRange(start, end)
    return between


def _require_message(key: str, value: str | None) -> str:
    if value is None:
        raise MissingMessage(key)
    return value


def _colorize(message: str) -> str:
    return translate_alternate_color_codes(ALT_COLOR_CHAR, message)
