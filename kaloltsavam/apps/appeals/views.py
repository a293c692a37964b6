from __future__ import annotations

import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from kaloltsavam.apps.accounts.permissions import admin_required
from .forms import AppealForm, AppealStatusForm
from .models import Appeal

logger = logging.getLogger(__name__)


def submit_appeal(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = AppealForm(request.POST)
        if form.is_valid():
            try:
                appeal = form.save()
            except DatabaseError:
                logger.exception("Appeal could not be saved")
                messages.error(request, "Your appeal could not be submitted. Please try again.")
            else:
                logger.info("Appeal %s submitted for participant %s", appeal.pk, appeal.participant_id)
                messages.success(
                    request,
                    "Appeal Submitted Successfully. Your appeal has been recorded. "
                    "You will receive updates via email.",
                )
                # Formulario limpio
                return redirect("appeal_submit")
    else:
        initial = {k: request.GET[k] for k in ("participant_id", "event_id", "category") if request.GET.get(k)}
        form = AppealForm(initial=initial)

    return render(request, "appeals/submit.html", {"form": form})


@admin_required
@require_POST
def appeal_set_status(request: HttpRequest, pk: int) -> HttpResponse:
    appeal = get_object_or_404(Appeal, pk=pk)
    form = AppealStatusForm(request.POST)
    if form.is_valid():
        appeal.status = form.cleaned_data["status"]
        appeal.save(update_fields=["status", "updated_at"])
        messages.success(request, f"Appeal from {appeal.participant_id} marked as {appeal.get_status_display()}.")
    else:
        messages.error(request, "Invalid appeal status.")
    return redirect("admin_dashboard")
