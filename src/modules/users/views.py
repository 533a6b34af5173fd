"""Authentication API views.

Exposes ``AuthService`` via HTTP.  Domain exceptions propagate to the
project exception handler, which renders the error envelope.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.responses import success_response
from modules.users.dtos import RegisterUserDTO
from modules.users.repositories.django_repository import UserDjangoRepository
from modules.users.serializers import (
    LoginSerializer,
    RegisterSerializer,
    UserSerializer,
)
from modules.users.services import AuthService


def _auth_service() -> AuthService:
    return AuthService(repository=UserDjangoRepository())


class RegisterView(APIView):
    """POST /api/v1/auth/register/"""

    permission_classes = [AllowAny]
    throttle_scope = "auth"

    def post(self, request: Request) -> Response:
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = RegisterUserDTO(**serializer.validated_data)

        result = _auth_service().register(dto)
        return success_response(
            {"user": UserSerializer(result["user"]).data, **result["tokens"]},
            message="User registered.",
            status_code=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """POST /api/v1/auth/login/"""

    permission_classes = [AllowAny]
    throttle_scope = "auth"

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = _auth_service().login(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        return success_response(
            {"user": UserSerializer(result["user"]).data, **result["tokens"]},
            message="Login succeeded.",
        )


class MeView(APIView):
    """GET /api/v1/auth/me/"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        user = _auth_service().get_profile(str(request.user.id))
        return success_response(UserSerializer(user).data)
