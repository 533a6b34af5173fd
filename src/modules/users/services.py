"""Authentication service layer (Use Cases).

Registration, login and profile look-up.  Password hashing is delegated
to Django's hashers and token issuance to SimpleJWT; this service only
decides *who* gets a token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

import structlog
from django.contrib.auth.models import update_last_login
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import RefreshToken

from modules.users.exceptions import (
    InactiveUser,
    InvalidCredentials,
    UserAlreadyExists,
    UserNotFound,
)
from modules.users.models import Role

if TYPE_CHECKING:
    from modules.users.dtos import RegisterUserDTO
    from modules.users.models import User
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


def issue_tokens(user: User) -> Dict[str, str]:
    """Return an access/refresh pair carrying ``role`` and ``email`` claims."""
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    refresh["email"] = user.email
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


class AuthService:
    """Application service for authentication use-cases."""

    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def register(self, dto: RegisterUserDTO) -> Dict[str, Any]:
        """Register a CLIENT user and return it with a token pair.

        Raises:
            UserAlreadyExists: e-mail already taken.
        """
        log = logger.bind(email=dto.email)
        if self._repo.get_by_email(dto.email):
            log.warning("auth.duplicate_email")
            raise UserAlreadyExists()

        try:
            with transaction.atomic():
                user = self._repo.create_user(
                    email=dto.email,
                    password=dto.password,
                    name=dto.name,
                    role=Role.CLIENT,
                )
        except IntegrityError as exc:
            log.warning("auth.duplicate_email_race")
            raise UserAlreadyExists() from exc

        log.info("auth.registered", user_id=str(user.id))
        return {"user": user, "tokens": issue_tokens(user)}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Authenticate by e-mail and password.

        Raises:
            InvalidCredentials: unknown e-mail or wrong password.
            InactiveUser: the account has been deactivated.
        """
        log = logger.bind(email=email.strip().lower())
        user = self._repo.get_by_email(email)
        if not user or not user.check_password(password):
            log.warning("auth.login_failed")
            raise InvalidCredentials()
        if not user.is_active:
            log.warning("auth.login_inactive", user_id=str(user.id))
            raise InactiveUser()

        update_last_login(None, user)
        log.info("auth.login_succeeded", user_id=str(user.id), role=user.role)
        return {"user": user, "tokens": issue_tokens(user)}

    def get_profile(self, user_id: str) -> User:
        """Raises ``UserNotFound`` if the user does not exist."""
        user = self._repo.get_by_id(user_id)
        if not user:
            raise UserNotFound()
        return user
