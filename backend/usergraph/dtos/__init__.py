from .user import (
    CreateUserInput,
    UpdateUserInput,
    User,
    format_timestamp,
    to_user,
)

__all__ = [
    "CreateUserInput",
    "UpdateUserInput",
    "User",
    "format_timestamp",
    "to_user",
]
