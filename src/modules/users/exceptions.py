"""User / authentication domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)


class UserAlreadyExists(ConflictError):
    """A user with the same e-mail is already registered."""

    default_message = "Email is already registered."


class UserNotFound(NotFoundError):
    default_message = "User not found."


class InvalidCredentials(UnauthorizedError):
    """Unknown e-mail or wrong password; both yield the same error."""

    default_message = "Invalid credentials."


class InactiveUser(ForbiddenError):
    default_message = "User is inactive."
