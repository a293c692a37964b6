from __future__ import annotations

from django.contrib.auth.models import AnonymousUser, Group, User
from django.test import Client, TestCase
from django.urls import reverse

from kaloltsavam.apps.accounts.apps import ADMINS_GROUP
from kaloltsavam.apps.accounts.permissions import AuthorizationError, is_admin, require_admin


class IsAdminTest(TestCase):
    def test_roles(self):
        plain = User.objects.create_user(username="plain", password="x")
        staff = User.objects.create_user(username="staff", password="x", is_staff=True)
        member = User.objects.create_user(username="member", password="x")
        member.groups.add(Group.objects.get(name=ADMINS_GROUP))

        self.assertFalse(is_admin(plain))
        self.assertFalse(is_admin(AnonymousUser()))
        self.assertFalse(is_admin(None))
        self.assertTrue(is_admin(staff))
        self.assertTrue(is_admin(member))

        with self.assertRaises(AuthorizationError):
            require_admin(plain)
        require_admin(staff)

    def test_admins_group_created_on_migrate(self):
        self.assertTrue(Group.objects.filter(name=ADMINS_GROUP).exists())


class LoginSignupTest(TestCase):
    def setUp(self):
        self.client = Client()

    def test_admin_login_goes_to_dashboard(self):
        User.objects.create_user(username="admin", password="Pass1234!", is_staff=True)
        r = self.client.post(reverse("login"), {"username": "admin", "password": "Pass1234!"})
        self.assertRedirects(r, reverse("admin_dashboard"))

    def test_non_admin_login_goes_home(self):
        User.objects.create_user(username="viewer", password="Pass1234!")
        r = self.client.post(reverse("login"), {"username": "viewer", "password": "Pass1234!"})
        self.assertRedirects(r, reverse("home"))

    def test_bad_credentials(self):
        r = self.client.post(reverse("login"), {"username": "ghost", "password": "nope"})
        self.assertEqual(r.status_code, 200)
        self.assertNotIn("_auth_user_id", self.client.session)

    def test_signup_creates_non_admin(self):
        r = self.client.post(
            reverse("signup"),
            {"username": "newbie", "email": "New@Example.com", "password1": "S3cure-pass-99", "password2": "S3cure-pass-99"},
        )
        self.assertRedirects(r, reverse("home"))
        user = User.objects.get(username="newbie")
        self.assertEqual(user.email, "new@example.com")
        self.assertFalse(is_admin(user))

    def test_signup_rejects_duplicate_email(self):
        User.objects.create_user(username="a", email="dup@example.com", password="x")
        r = self.client.post(
            reverse("signup"),
            {"username": "b", "email": "DUP@example.com", "password1": "S3cure-pass-99", "password2": "S3cure-pass-99"},
        )
        self.assertEqual(r.status_code, 200)
        self.assertIn("email", r.context["form"].errors)
