# kaloltsavam/apps/results/models.py
from __future__ import annotations

from django.db import models

STATUS_CHOICES = (
    ("published", "Published"),
    ("under_appeal", "Under appeal"),
    ("revised", "Revised"),
)


class Result(models.Model):
    """
    Resultado de un participante en un evento/categoría.
    participant_id + event + category identifican la inscripción en la práctica,
    pero no se fuerza unicidad (la carga masiva puede repetir filas).
    """
    participant_id = models.CharField(max_length=64, db_index=True)
    participant_name = models.CharField(max_length=160)
    event = models.CharField(max_length=160, db_index=True)
    category = models.CharField(max_length=120, blank=True, default="")

    # La carga masiva guarda aquí el "score" en texto libre (10.5s, 6.2m, 87/100 ...)
    time = models.CharField(max_length=64, blank=True, default="")
    rank = models.IntegerField(null=True, blank=True)
    points = models.IntegerField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default="published")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("event", models.F("rank").asc(nulls_last=True), "id")

    def __str__(self) -> str:
        return f"{self.participant_id} · {self.participant_name} · {self.event}"

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "participant_id": self.participant_id,
            "participant_name": self.participant_name,
            "event": self.event,
            "category": self.category,
            "time": self.time or None,
            "rank": self.rank,
            "points": self.points,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
