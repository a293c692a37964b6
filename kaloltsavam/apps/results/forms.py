# kaloltsavam/apps/results/forms.py
from __future__ import annotations

from django import forms
from django.conf import settings

from .importer import ACCEPTED_EXTENSIONS
from .models import Result


class ResultSearchForm(forms.Form):
    q = forms.CharField(
        required=False,
        label="Participant ID or Name",
        widget=forms.TextInput(attrs={"placeholder": "Search..."}),
    )
    event = forms.CharField(
        required=False,
        label="Event (Optional)",
        widget=forms.TextInput(attrs={"placeholder": "e.g. Bible Reading", "list": "event-options"}),
    )
    category = forms.CharField(
        required=False,
        label="Category (Optional)",
        widget=forms.TextInput(attrs={"placeholder": "e.g. LP, UP, HS, HSS", "list": "category-options"}),
    )


class ResultForm(forms.ModelForm):
    """
    Alta/edición manual. Validación en servidor (no se confía en el navegador):
    ID, nombre, evento y categoría obligatorios (recortados); rank/points enteros opcionales.
    """

    class Meta:
        model = Result
        fields = ["participant_id", "participant_name", "event", "category", "time", "rank", "points", "status"]
        widgets = {
            "participant_id": forms.TextInput(attrs={"placeholder": "e.g. BK1234"}),
            "participant_name": forms.TextInput(attrs={"placeholder": "e.g. John Smith"}),
            "event": forms.TextInput(attrs={"placeholder": "e.g. Bible Reading"}),
            "category": forms.TextInput(attrs={"placeholder": "e.g. LP, UP, HS, HSS"}),
            "time": forms.TextInput(attrs={"placeholder": "e.g. 10.5s"}),
            "rank": forms.NumberInput(attrs={"placeholder": "e.g. 1", "step": 1}),
            "points": forms.NumberInput(attrs={"placeholder": "e.g. 100", "step": 1}),
        }
        labels = {
            "participant_id": "Participant ID",
            "participant_name": "Participant Name",
            "time": "Score / Time",
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["category"].required = True

    def _required_text(self, name: str, label: str) -> str:
        value = (self.cleaned_data.get(name) or "").strip()
        if not value:
            raise forms.ValidationError(f"{label} is required.")
        return value

    def clean_participant_id(self):
        return self._required_text("participant_id", "Participant ID")

    def clean_participant_name(self):
        return self._required_text("participant_name", "Participant name")

    def clean_event(self):
        return self._required_text("event", "Event")

    def clean_category(self):
        return self._required_text("category", "Category")

    def clean_time(self):
        return (self.cleaned_data.get("time") or "").strip()


class BulkUploadForm(forms.Form):
    # Archivo vacío = 0 filas; avanza al preview con 0 registros
    file = forms.FileField(
        allow_empty_file=True,
        label="Results file",
        help_text="CSV or Excel (.csv, .xlsx, .xls). Required columns: participantId, name, event, score, rank",
        widget=forms.ClearableFileInput(attrs={"accept": ",".join(f".{e}" for e in ACCEPTED_EXTENSIONS)}),
    )

    def clean_file(self):
        f = self.cleaned_data["file"]
        limit = getattr(settings, "RESULTS_UPLOAD_MAX_BYTES", 5 * 1024 * 1024)
        if f.size and f.size > limit:
            raise forms.ValidationError(f"File is too large (max {limit // (1024 * 1024)} MB).")
        return f

