"""User model with ADMIN / CLIENT roles.

Business rules implemented:
- Email is the login identifier and must be unique.
- Public registration always yields CLIENT users (enforced at service layer).
- Inactive users cannot authenticate.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.models import PermissionsMixin
from django.core.validators import MinLengthValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    CLIENT = "CLIENT", "Client"


class UserManager(BaseUserManager):
    """Manager creating users keyed by e-mail address."""

    def create_user(
        self, email: str, password: Optional[str] = None, **extra_fields: Any
    ) -> "User":
        if not email:
            raise ValueError("Email is required.")
        email = self.normalize_email(email).lower()
        extra_fields.setdefault("role", Role.CLIENT)
        extra_fields.setdefault("name", email.split("@")[0])
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(
        self, email: str, password: Optional[str] = None, **extra_fields: Any
    ) -> "User":
        extra_fields["role"] = Role.ADMIN
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    """Authenticated caller of the API.

    ``role`` drives the order access policy: ADMIN may act on any order,
    CLIENT only on the orders it owns.
    """

    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    email = models.EmailField(max_length=100, unique=True)
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.CLIENT,
    )
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_client(self) -> bool:
        return self.role == Role.CLIENT

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> ({self.role})"
