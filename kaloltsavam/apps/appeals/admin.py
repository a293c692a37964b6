from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from .models import Appeal


@admin.register(Appeal)
class AppealAdmin(admin.ModelAdmin):
    list_display = ("participant_id", "name", "event_id", "category", "status", "submitted_at")
    list_filter = ("status", "category")
    search_fields = ("participant_id", "name", "email", "event_id")
    readonly_fields = ("submitted_at", "updated_at")
    actions = ["mark_in_review"]

    @admin.action(description=_("Mark selected appeals as in review"))
    def mark_in_review(self, request, queryset):
        updated = queryset.filter(status="new").update(status="in_review")
        self.message_user(request, f"{updated} appeals moved to review.", level=messages.SUCCESS)
