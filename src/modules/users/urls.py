"""Authentication URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from modules.users.views import LoginView, MeView, RegisterView

urlpatterns = [
    path("auth/register/", RegisterView.as_view(), name="auth_register"),
    path("auth/login/", LoginView.as_view(), name="auth_login"),
    path("auth/me/", MeView.as_view(), name="auth_me"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
]
