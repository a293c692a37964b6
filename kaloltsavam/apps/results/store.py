# kaloltsavam/apps/results/store.py
"""
Acceso al almacén de resultados (ORM).
Traduce errores de base de datos a StoreReadError / StoreWriteError para que
las vistas reporten un único mensaje legible.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.db import DatabaseError, transaction
from django.db.models import F, Q, QuerySet

from .exceptions import StoreReadError, StoreWriteError
from .models import Result

logger = logging.getLogger(__name__)

RESULT_FIELDS = ("participant_id", "participant_name", "event", "category", "time", "rank", "points", "status")

# SQLite no convierte enteros fuera de 64 bits: OverflowError, no DatabaseError
WRITE_ERRORS = (DatabaseError, OverflowError, ValueError)


def _clean_data(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k in RESULT_FIELDS}


def create_result(data: Dict[str, Any]) -> Result:
    try:
        with transaction.atomic():
            return Result.objects.create(**_clean_data(data))
    except WRITE_ERRORS as exc:
        logger.error("Result create failed: %s", exc)
        raise StoreWriteError("Could not save the result.") from exc


def update_result(pk: int, data: Dict[str, Any]) -> Result:
    try:
        obj = Result.objects.get(pk=pk)
        for k, v in _clean_data(data).items():
            setattr(obj, k, v)
        with transaction.atomic():
            obj.save()
        return obj
    except Result.DoesNotExist as exc:
        raise StoreWriteError("The result no longer exists.") from exc
    except WRITE_ERRORS as exc:
        logger.error("Result %s update failed: %s", pk, exc)
        raise StoreWriteError("Could not update the result.") from exc


def delete_result(pk: int) -> None:
    try:
        deleted, _ = Result.objects.filter(pk=pk).delete()
    except DatabaseError as exc:
        logger.error("Result %s delete failed: %s", pk, exc)
        raise StoreWriteError("Could not delete the result.") from exc
    if not deleted:
        raise StoreWriteError("The result no longer exists.")


def query_results(
    *,
    search: Optional[str] = None,
    event: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Result]:
    """
    Una lectura filtrada + ordenada:
      - search: subcadena sin mayúsculas en participant_id O participant_name
      - event / category: igualdad exacta
      - orden: event ASC, rank ASC con nulos al final, id
    """
    try:
        qs: QuerySet[Result] = Result.objects.all()
        if search:
            qs = qs.filter(Q(participant_id__icontains=search) | Q(participant_name__icontains=search))
        if event:
            qs = qs.filter(event=event)
        if category:
            qs = qs.filter(category=category)
        qs = qs.order_by("event", F("rank").asc(nulls_last=True), "id")
        return list(qs)
    except DatabaseError as exc:
        logger.error("Results query failed: %s", exc)
        raise StoreReadError("Could not fetch results. Please try again.") from exc


def distinct_values(field_name: str) -> List[str]:
    """Valores distintos no vacíos (para sugerencias en el formulario de búsqueda)."""
    try:
        values = (
            Result.objects.exclude(**{field_name: ""})
            .order_by(field_name)
            .values_list(field_name, flat=True)
            .distinct()
        )
        return list(values)
    except DatabaseError as exc:
        raise StoreReadError("Could not fetch results. Please try again.") from exc
