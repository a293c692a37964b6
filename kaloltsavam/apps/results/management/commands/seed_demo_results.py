from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand
from django.db import transaction

from kaloltsavam.apps.accounts.apps import ADMINS_GROUP
from kaloltsavam.apps.results.models import Result

DEMO_RESULTS = [
    # (participant_id, name, event, category, time, rank, points)
    ("BK1001", "Anna Thomas", "Bible Reading", "LP", "", 1, 100),
    ("BK1002", "Joel Mathew", "Bible Reading", "LP", "", 2, 80),
    ("BK1003", "Sara Philip", "Bible Reading", "LP", "", None, None),
    ("BK2001", "Abel Varghese", "Bible Quiz", "UP", "", 1, 100),
    ("BK2002", "Merin Joseph", "Bible Quiz", "UP", "", 3, 60),
    ("BK3001", "Ruth George", "Memory Verse", "HS", "", 2, 80),
]


def ensure_demo_admin(username: str, password: str):
    User = get_user_model()
    user, created = User.objects.get_or_create(username=username, defaults={"email": f"{username}@example.com"})
    if created or not user.has_usable_password():
        user.set_password(password)
        user.save()
    group, _ = Group.objects.get_or_create(name=ADMINS_GROUP)
    user.groups.add(group)
    return user


class Command(BaseCommand):
    help = "Create DEMO results (and optionally an admin user) to try the search page and the console."

    def add_arguments(self, parser):
        parser.add_argument("--reset", action="store_true", help="Delete every result before seeding")
        parser.add_argument("--create-admin", action="store_true", help="Create the admin user 'admin' / 'Pass1234!'")

    @transaction.atomic
    def handle(self, *args, **opts):
        if opts["reset"]:
            deleted, _ = Result.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} results."))

        created = 0
        for pid, name, event, category, time, rank, points in DEMO_RESULTS:
            _, was_created = Result.objects.get_or_create(
                participant_id=pid,
                event=event,
                category=category,
                defaults={"participant_name": name, "time": time, "rank": rank, "points": points},
            )
            created += int(was_created)
        self.stdout.write(self.style.SUCCESS(f"DEMO results created: {created}"))

        if opts["create_admin"]:
            ensure_demo_admin("admin", "Pass1234!")
            self.stdout.write(self.style.SUCCESS("Admin ready: admin / Pass1234!"))
