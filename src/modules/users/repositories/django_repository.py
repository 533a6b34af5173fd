"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError

from modules.users.models import User
from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        try:
            return User.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.filter(email=email.strip().lower()).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        queryset = User.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: User) -> User:
        entity.save()
        logger.info("user.saved", user_id=str(entity.id))
        return entity

    def delete(self, id: str) -> bool:
        """Deactivate a user; users are never physically removed."""
        user = self.get_by_id(id)
        if not user:
            return False
        user.is_active = False
        user.save(update_fields=["is_active"])
        logger.info("user.deactivated", user_id=str(id))
        return True

    def create_user(self, email: str, password: str, **fields: Any) -> User:
        user = User.objects.create_user(email=email, password=password, **fields)
        logger.info("user.created", user_id=str(user.id), role=user.role)
        return user
