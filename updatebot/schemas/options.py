from pydantic import BaseModel, ConfigDict, field_validator

from updatebot.errors import UsageError

USERNAME_MIN_EXCLUSIVE = 2
USERNAME_MAX_EXCLUSIVE = 32


class UpdateOptions(BaseModel):
    """Options collected from the command line, built once at startup."""

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    avatar: str | None = None

    @field_validator("username", "avatar")
    @classmethod
    def empty_as_missing(cls, v: str | None) -> str | None:
        return v or None


def validate_options(options: UpdateOptions) -> UpdateOptions:
    """Reject option combinations before any I/O happens.

    Raises:
        UsageError: If nothing was requested or the username length is out of range.
    """
    if options.username is None and options.avatar is None:
        raise UsageError(
            "incorrect usage: must provide at least one of `-avatar`, `-username`",
            show_usage=True,
        )

    if options.username is not None:
        length = len(options.username)
        if length <= USERNAME_MIN_EXCLUSIVE or length >= USERNAME_MAX_EXCLUSIVE:
            raise UsageError("username must be 2-32 characters in length.")

    return options
