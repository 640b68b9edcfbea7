"""Django ORM access to users for the booking engine."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore

from apps.bookings.application.ports import UserRepository


class DjangoUserRepository(UserRepository):

    def get_by_id(self, user_id):
        User = get_user_model()
        return User.objects.filter(pk=user_id).first()
