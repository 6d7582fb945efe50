from updatebot.schemas.options import UpdateOptions, validate_options
from updatebot.schemas.profile import UpdatedAccount, UpdateRequest

__all__ = [
    "UpdateOptions",
    "UpdateRequest",
    "UpdatedAccount",
    "validate_options",
]
