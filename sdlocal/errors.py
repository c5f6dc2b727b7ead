"""Exceptions raised by the configuration model.

Every message is written to be shown to the user as-is, so callers should
print ``str(exc)`` rather than build their own wording.
"""


class ConfigError(Exception):
    """Base class for all configuration errors."""


class ParseError(ConfigError):
    """The config file exists but its contents cannot be understood."""

    def __init__(self, cause):
        super().__init__(f"failed to parse config file: {cause}")
        self.cause = cause


class NotFoundError(ConfigError):
    """Raised for an entry name that is not in the config.

    ``entry`` is the empty entry a lookup hands back alongside the error.
    """

    def __init__(self, name: str, entry=None):
        super().__init__(f"config `{name}` does not exist")
        self.name = name
        self.entry = entry


class AlreadyExistsError(ConfigError):
    def __init__(self, name: str):
        super().__init__(f"config `{name}` already exists")
        self.name = name


class CurrentEntryProtectedError(ConfigError):
    """Raised when deleting the entry that ``current`` points at."""

    def __init__(self, name: str):
        super().__init__(f"config `{name}` is current config")
        self.name = name


class UnknownKeyError(ConfigError):
    def __init__(self, key: str):
        super().__init__(f"invalid key {key}")
        self.key = key
