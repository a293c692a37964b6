from __future__ import annotations

from django import forms

from .models import Appeal, STATUS_CHOICES


class AppealForm(forms.ModelForm):
    class Meta:
        model = Appeal
        fields = ["participant_id", "event_id", "category", "name", "email", "phone", "reason"]
        widgets = {
            "participant_id": forms.TextInput(attrs={"placeholder": "e.g. P1234"}),
            "event_id": forms.TextInput(attrs={"placeholder": "e.g. E100"}),
            "category": forms.TextInput(attrs={"placeholder": "e.g. Under 18 Male"}),
            "name": forms.TextInput(attrs={"placeholder": "John Smith"}),
            "email": forms.EmailInput(attrs={"placeholder": "john@example.com"}),
            "phone": forms.TextInput(attrs={"placeholder": "+91 98765 43210", "type": "tel"}),
            "reason": forms.Textarea(attrs={"rows": 6}),
        }
        labels = {"participant_id": "Participant ID", "phone": "Phone Number (Optional)"}
        help_texts = {"reason": "Be specific and include any relevant details that support your appeal."}

    def clean_email(self):
        return self.cleaned_data["email"].strip().lower()


class AppealStatusForm(forms.Form):
    status = forms.ChoiceField(choices=STATUS_CHOICES)
