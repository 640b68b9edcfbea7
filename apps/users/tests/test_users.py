"""Tests for the custom user model and its repository."""

from __future__ import annotations

from django.test import TestCase

from apps.users.models import User
from apps.users.repositories import DjangoUserRepository


class UserModelTests(TestCase):
    def test_create_user_logs_in_by_email(self) -> None:
        user = User.objects.create_user(email="Traveller@Example.com", password="StrongPass123", username="trav")

        self.assertEqual(user.role, User.RoleChoices.USER)
        self.assertTrue(user.check_password("StrongPass123"))
        self.assertFalse(user.is_admin_role())
        self.assertEqual(User.USERNAME_FIELD, "email")

    def test_admin_role(self) -> None:
        admin = User.objects.create_user(email="a@example.com", password="x", role=User.RoleChoices.ADMIN)
        staff = User.objects.create_user(email="s@example.com", password="x", is_staff=True)
        superuser = User.objects.create_superuser(email="root@example.com", password="x")

        self.assertTrue(admin.is_admin_role())
        self.assertTrue(staff.is_admin_role())
        self.assertTrue(superuser.is_admin_role())
        self.assertEqual(superuser.role, User.RoleChoices.ADMIN)

    def test_repository_lookup(self) -> None:
        user = User.objects.create_user(email="r@example.com", password="x")
        repo = DjangoUserRepository()

        self.assertEqual(repo.get_by_id(user.pk), user)
        self.assertIsNone(repo.get_by_id(99999))
