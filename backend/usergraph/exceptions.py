"""Exceptions raised by the user gateway."""

from __future__ import annotations


class UserGraphError(Exception):
    """Base exception for gateway failures."""


class ConfigurationError(UserGraphError):
    """Raised when required configuration is missing."""


class DatabaseConnectionError(UserGraphError):
    """Raised when the MongoDB server cannot be reached."""


class DatabaseNotConnectedError(UserGraphError):
    """Raised when a database handle is requested before connecting."""


class EmailAlreadyExistsError(UserGraphError):
    """Raised when a create or update would duplicate a user's email."""

    def __init__(self, email: str | None):
        super().__init__(f"A user with email {email!r} already exists")
        self.email = email


class UserPersistenceError(UserGraphError):
    """Raised when an inserted user cannot be read back."""


class InvalidUserInputError(UserGraphError):
    """Raised when an update explicitly nulls a required field."""
