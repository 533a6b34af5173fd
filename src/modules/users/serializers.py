"""User DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.users.models import User


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    email = serializers.EmailField(max_length=100)
    password = serializers.CharField(
        min_length=6, max_length=100, write_only=True, trim_whitespace=False
    )


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UserSerializer(serializers.ModelSerializer):
    """Public profile (never exposes the password hash)."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "role", "is_active", "created_at"]
        read_only_fields = fields
