from __future__ import annotations

from django.db import models

STATUS_CHOICES = (
    ("new", "New"),
    ("in_review", "In Review"),
    ("accepted", "Accepted"),
    ("rejected", "Rejected"),
)
PENDING_STATUSES = ("new", "in_review")
RESOLVED_STATUSES = ("accepted", "rejected")


class Appeal(models.Model):
    """Apelación de un participante sobre un resultado publicado."""
    participant_id = models.CharField(max_length=64, db_index=True)
    event_id = models.CharField("Event ID", max_length=64)
    category = models.CharField(max_length=120)

    name = models.CharField("Full name", max_length=160)
    email = models.EmailField()
    phone = models.CharField(max_length=32, blank=True)
    reason = models.TextField("Reason for appeal")

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="new")
    submitted_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-submitted_at", "-id")

    def __str__(self) -> str:
        return f"{self.participant_id} · {self.event_id} · {self.get_status_display()}"

    @property
    def is_pending(self) -> bool:
        return self.status in PENDING_STATUSES
