"""Configuration models for Block Version."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _version_to_str(value: Any) -> Any:
    # Unquoted YAML versions such as 1.8 arrive as floats
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


class WhitelistConfig(BaseModel):
    """Whitelist section."""

    enable_start_end: bool = Field(False, alias="enableStartEnd")
    start: str | None = None
    end: str | None = None
    allow_versions: list[str] = Field(default_factory=list, alias="allowVersions")

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_bound(cls, v: Any) -> Any:
        return _version_to_str(v)

    @field_validator("allow_versions", mode="before")
    @classmethod
    def coerce_versions(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [_version_to_str(item) for item in v]
        return v

    model_config = ConfigDict(populate_by_name=True)


class PolicyConfig(BaseModel):
    """Raw version policy values.

    Values are only type-checked here. Version strings are resolved and
    messages are required by the reload pipeline, so that a bad file
    reports which key is at fault.
    """

    whitelist: WhitelistConfig = Field(default_factory=WhitelistConfig)
    blacklist: list[str] = Field(default_factory=list)

    whitelist_message: str | None = Field(None, alias="whitelistMessage")
    blacklist_message: str | None = Field(None, alias="blacklistMessage")
    bypass_message: str | None = Field(None, alias="bypassMessage")

    repeat_bypass_message: int = Field(600, alias="repeatBypassMessage")

    recommended_version: str | None = Field(None, alias="recommendedVersion")
    recommend_message: str | None = Field(None, alias="recommendMessage")

    @field_validator("blacklist", mode="before")
    @classmethod
    def coerce_blacklist(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [_version_to_str(item) for item in v]
        return v

    @field_validator("recommended_version", mode="before")
    @classmethod
    def coerce_recommended(cls, v: Any) -> Any:
        return _version_to_str(v)

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "console"
    file: str | None = None


class Settings(PolicyConfig):
    """Main settings: the policy keys at top level plus ambient sections."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    fail_closed: bool = Field(True, alias="failClosed")

    model_config = ConfigDict(populate_by_name=True)
