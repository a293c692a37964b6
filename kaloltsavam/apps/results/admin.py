from __future__ import annotations

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from .models import Result


@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ("participant_id", "participant_name", "event", "category", "time", "rank", "points", "status", "updated_at")
    list_filter = ("event", "category", "status")
    search_fields = ("participant_id", "participant_name", "event")
    actions = ["action_mark_revised"]

    @admin.action(description=_("Mark selected results as revised"))
    def action_mark_revised(self, request, queryset):
        updated = queryset.update(status="revised")
        self.message_user(request, f"{updated} results marked as revised.", level=messages.SUCCESS)
