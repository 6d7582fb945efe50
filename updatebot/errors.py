"""Error types raised by updatebot.

Every error is terminal: the command line entry point catches
``UpdateBotError``, prints the message to stderr and exits non-zero.
"""


class UpdateBotError(Exception):
    """Base class for all updatebot failures."""

    prefix: str | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.prefix:
            return f"{self.prefix}: {message}"
        return message


class UsageError(UpdateBotError):
    """Bad or missing command line options."""

    def __init__(self, message: str, show_usage: bool = False):
        super().__init__(message)
        self.show_usage = show_usage


class ConfigError(UpdateBotError):
    prefix = "invalid configuration"


class CredentialError(UpdateBotError):
    """No bot token could be obtained."""


class AvatarError(UpdateBotError):
    """The avatar source could not be read or is not an allowed image."""

    prefix = "error reading avatar"


class APIError(UpdateBotError):
    """The profile update call to Discord failed."""

    prefix = "failed to modify user"
