from __future__ import annotations

from django.contrib.auth.models import User
from django.contrib.messages import get_messages
from django.test import Client, TestCase
from django.urls import reverse

from kaloltsavam.apps.appeals.models import Appeal


def valid_appeal(**over):
    data = {
        "participant_id": "P1234",
        "event_id": "E100",
        "category": "LP",
        "name": "John Smith",
        "email": "John@Example.com ",
        "phone": "",
        "reason": "My rank was recorded incorrectly.",
    }
    data.update(over)
    return data


class SubmitAppealTest(TestCase):
    def setUp(self):
        self.client = Client()

    def test_submit(self):
        r = self.client.post(reverse("appeal_submit"), valid_appeal())
        self.assertRedirects(r, reverse("appeal_submit"))
        appeal = Appeal.objects.get()
        self.assertEqual(appeal.email, "john@example.com")
        self.assertEqual(appeal.status, "new")
        self.assertTrue(appeal.is_pending)
        msgs = [str(m) for m in get_messages(r.wsgi_request)]
        self.assertTrue(any(m.startswith("Appeal Submitted Successfully") for m in msgs))

    def test_missing_reason(self):
        r = self.client.post(reverse("appeal_submit"), valid_appeal(reason=""))
        self.assertEqual(r.status_code, 200)
        self.assertIn("reason", r.context["form"].errors)
        self.assertFalse(Appeal.objects.exists())

    def test_invalid_email(self):
        r = self.client.post(reverse("appeal_submit"), valid_appeal(email="not-an-email"))
        self.assertIn("email", r.context["form"].errors)
        self.assertFalse(Appeal.objects.exists())

    def test_prefill_from_query_string(self):
        r = self.client.get(reverse("appeal_submit"), {"participant_id": "P9", "event_id": "E2"})
        self.assertEqual(r.context["form"].initial, {"participant_id": "P9", "event_id": "E2"})


class AppealStatusTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.appeal = Appeal.objects.create(
            participant_id="P1", event_id="E1", category="LP", name="N", email="n@example.com", reason="r"
        )

    def test_admin_changes_status(self):
        User.objects.create_user(username="admin", password="Pass1234!", is_staff=True)
        self.client.login(username="admin", password="Pass1234!")
        r = self.client.post(reverse("appeal_set_status", args=[self.appeal.pk]), {"status": "accepted"})
        self.assertRedirects(r, reverse("admin_dashboard"))
        self.appeal.refresh_from_db()
        self.assertEqual(self.appeal.status, "accepted")
        self.assertFalse(self.appeal.is_pending)

    def test_invalid_status_is_ignored(self):
        User.objects.create_user(username="admin", password="Pass1234!", is_staff=True)
        self.client.login(username="admin", password="Pass1234!")
        self.client.post(reverse("appeal_set_status", args=[self.appeal.pk]), {"status": "closed"})
        self.appeal.refresh_from_db()
        self.assertEqual(self.appeal.status, "new")

    def test_non_admin_cannot_change_status(self):
        User.objects.create_user(username="viewer", password="Pass1234!")
        self.client.login(username="viewer", password="Pass1234!")
        r = self.client.post(reverse("appeal_set_status", args=[self.appeal.pk]), {"status": "rejected"})
        self.assertEqual(r.status_code, 302)
        self.appeal.refresh_from_db()
        self.assertEqual(self.appeal.status, "new")
