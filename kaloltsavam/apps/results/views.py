# kaloltsavam/apps/results/views.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from django.contrib import messages
from django.db.models import Count, Q
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from kaloltsavam.apps.accounts.permissions import admin_required
from kaloltsavam.apps.appeals.models import Appeal, PENDING_STATUSES, RESOLVED_STATUSES

from .exceptions import StoreReadError, StoreWriteError, UploadError
from .forms import BulkUploadForm, ResultForm, ResultSearchForm
from .importer import EXPECTED_COLUMNS, ValidatedRow, build_preview, commit_rows
from .models import Result
from .query import ResultQuery, search_results
from .store import create_result, delete_result, distinct_values, update_result

logger = logging.getLogger(__name__)

# Estado del preview entre requests (se borra al confirmar/cancelar)
BULK_SESSION_KEY = "results_bulk_upload"

# Cuántos errores se listan en pantalla (el resto se resume)
UPLOAD_ERROR_DISPLAY_LIMIT = 10
PREVIEW_ERROR_DISPLAY_LIMIT = 5


def _capped(errors: List[str], limit: int) -> Dict[str, Any]:
    return {"shown": errors[:limit], "hidden_count": max(0, len(errors) - limit), "total": len(errors)}


# -------------------------------
# Público
# -------------------------------
def results_search(request: HttpRequest) -> HttpResponse:
    """
    Búsqueda pública:
      • q: ID o nombre (subcadena, sin mayúsculas)
      • event / category: exactos
    Orden: evento ASC, rank ASC (sin rank al final).
    """
    form = ResultSearchForm(request.GET or None)
    query = ResultQuery.from_params(request.GET)

    results: List[Result] = []
    events: List[str] = []
    categories: List[str] = []
    try:
        results = search_results(query)
        events = distinct_values("event")
        categories = distinct_values("category")
    except StoreReadError as exc:
        messages.error(request, str(exc))

    ctx = {
        "form": form,
        "query": query,
        "results": results,
        "events": events,
        "categories": categories,
    }
    return render(request, "results/search.html", ctx)


# -------------------------------
# Consola admin
# -------------------------------
@admin_required
def admin_dashboard(request: HttpRequest) -> HttpResponse:
    results = Result.objects.all()
    appeal_counts = Appeal.objects.aggregate(
        pending=Count("id", filter=Q(status__in=PENDING_STATUSES)),
        resolved=Count("id", filter=Q(status__in=RESOLVED_STATUSES)),
    )
    ctx = {
        "results": results,
        "total_results": results.count(),
        "total_events": results.values("event").distinct().count(),
        "pending_appeals": appeal_counts["pending"],
        "resolved_appeals": appeal_counts["resolved"],
        "appeals": Appeal.objects.all()[:200],
        "appeal_statuses": Appeal._meta.get_field("status").choices,
    }
    return render(request, "results/admin_dashboard.html", ctx)


@admin_required
def result_add(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = ResultForm(request.POST)
        if form.is_valid():
            try:
                create_result(form.cleaned_data)
            except StoreWriteError as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, "Result added.")
                return redirect("admin_dashboard")
    else:
        form = ResultForm()
    return render(request, "results/result_form.html", {"form": form, "editing": False})


@admin_required
def result_edit(request: HttpRequest, pk: int) -> HttpResponse:
    obj = get_object_or_404(Result, pk=pk)
    if request.method == "POST":
        form = ResultForm(request.POST, instance=obj)
        if form.is_valid():
            try:
                update_result(obj.pk, form.cleaned_data)
            except StoreWriteError as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, "Result updated.")
                return redirect("admin_dashboard")
    else:
        form = ResultForm(instance=obj)
    return render(request, "results/result_form.html", {"form": form, "editing": True, "result": obj})


@admin_required
@require_POST
def result_delete(request: HttpRequest, pk: int) -> HttpResponse:
    try:
        delete_result(pk)
    except StoreWriteError as exc:
        messages.error(request, str(exc))
    else:
        messages.success(request, "Result deleted.")
    return redirect("admin_dashboard")


# -------------------------------
# Carga masiva: upload → preview → confirm
# -------------------------------
@admin_required
def bulk_upload(request: HttpRequest) -> HttpResponse:
    errors: List[str] = []
    if request.method == "POST":
        # Un archivo nuevo descarta cualquier preview anterior
        request.session.pop(BULK_SESSION_KEY, None)
        form = BulkUploadForm(request.POST, request.FILES)
        if form.is_valid():
            upload = form.cleaned_data["file"]
            try:
                preview = build_preview(upload, upload.name)
            except UploadError as exc:
                logger.info("Upload %s rejected: %s", upload.name, exc)
                errors = [str(exc)]
            else:
                if preview.can_preview:
                    request.session[BULK_SESSION_KEY] = {
                        "filename": upload.name,
                        "rows": [row.to_session() for row in preview.valid],
                        "errors": preview.messages,
                        "skipped_rows": len(preview.errors),
                    }
                    return redirect("results_bulk_preview")
                errors = preview.messages
    else:
        form = BulkUploadForm()

    ctx = {
        "form": form,
        "errors": _capped(errors, UPLOAD_ERROR_DISPLAY_LIMIT),
        "expected_columns": EXPECTED_COLUMNS,
    }
    return render(request, "results/bulk_upload.html", ctx)


@admin_required
def bulk_preview(request: HttpRequest) -> HttpResponse:
    state = request.session.get(BULK_SESSION_KEY)
    if state is None:
        return redirect("results_bulk_upload")
    ctx = {
        "filename": state["filename"],
        "rows": state["rows"],
        "skipped_rows": state["skipped_rows"],
        "errors": _capped(state["errors"], PREVIEW_ERROR_DISPLAY_LIMIT),
    }
    return render(request, "results/bulk_preview.html", ctx)


@admin_required
@require_POST
def bulk_confirm(request: HttpRequest) -> HttpResponse:
    state = request.session.pop(BULK_SESSION_KEY, None)
    if not state or not state.get("rows"):
        messages.info(request, "Nothing to import.")
        return redirect("admin_dashboard")

    rows = [ValidatedRow.from_session(r) for r in state["rows"]]
    report = commit_rows(rows)

    if report.created:
        messages.success(request, f"Imported {report.created} results from {state['filename']}.")
    if report.failures:
        detail = "; ".join(f"Preview row {pos}: {msg}" for pos, msg in report.failures[:PREVIEW_ERROR_DISPLAY_LIMIT])
        messages.error(request, f"{len(report.failures)} rows could not be saved. {detail}")
    return redirect("admin_dashboard")


@admin_required
@require_POST
def bulk_cancel(request: HttpRequest) -> HttpResponse:
    request.session.pop(BULK_SESSION_KEY, None)
    return redirect("results_bulk_upload")
