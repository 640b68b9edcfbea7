"""Serializers for user data embedded in booking responses."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserShortSerializer(serializers.ModelSerializer):
    """Name and email of the booking owner (admin listing)."""

    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "name", "email"]

    def get_name(self, obj) -> str:  # type: ignore
        return obj.get_full_name() or obj.username or obj.email
