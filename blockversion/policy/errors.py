"""Configuration errors raised while building a policy snapshot."""


class ConfigError(ValueError):
    """A configuration value could not be turned into policy.

    Attributes:
        key: Configuration key at fault
        value: Offending value (None if the key was missing)
    """

    def __init__(self, key: str, value: object, reason: str):
        self.key = key
        self.value = value
        super().__init__(f"{key}: {reason}")


class InvalidRangeBound(ConfigError):
    """whitelist.start or whitelist.end is not a known version."""

    def __init__(self, key: str, value: object):
        super().__init__(key, value, f"is the {key} version valid? '{value}' is given.")


class EmptyRange(ConfigError):
    """The whitelist range did not select any version."""

    def __init__(self, start: object, end: object):
        super().__init__(
            "whitelist.enableStartEnd",
            (start, end),
            f"could not load whitelisted versions between: {start} and {end}",
        )


class InvalidWhitelistEntry(ConfigError):
    """An entry of whitelist.allowVersions is not a known version."""

    def __init__(self, value: object):
        super().__init__(
            "whitelist.allowVersions", value, f"could not understand '{value}'"
        )


class InvalidBlacklistEntry(ConfigError):
    """An entry of blacklist is not a known version."""

    def __init__(self, value: object):
        super().__init__("blacklist", value, f"could not understand '{value}'")


class MissingMessage(ConfigError):
    """A required message template is absent."""

    def __init__(self, key: str):
        super().__init__(key, None, "must not be null")


class InvalidRecommendedVersion(ConfigError):
    """recommendedVersion is set but is not a known version."""

    def __init__(self, value: object):
        super().__init__(
            "recommendedVersion", value, f"is the recommended version valid? '{value}' is given."
        )
