# patients/forms.py

from django import forms
from .models import Patient


class PatientForm(forms.ModelForm):
    class Meta:
        model = Patient
        fields = [
            'ic_number', 'first_name', 'last_name', 'date_of_birth', 'gender',
            'phone_number', 'email', 'address', 'emergency_contact', 'blood_type', 'allergies',
        ]


class PatientUpdateForm(PatientForm):
    """The IC number identifies the row and is not editable."""

    class Meta(PatientForm.Meta):
        fields = [name for name in PatientForm.Meta.fields if name != 'ic_number']
