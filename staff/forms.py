# staff/forms.py

from django import forms
from .models import Doctor, Role, Specialization, StaffMember


class RoleForm(forms.ModelForm):
    class Meta:
        model = Role
        fields = ['name', 'description']


class StaffMemberForm(forms.ModelForm):
    class Meta:
        model = StaffMember
        fields = ['first_name', 'last_name', 'role', 'contact_number', 'email', 'hire_date', 'shift']


class SpecializationForm(forms.ModelForm):
    class Meta:
        model = Specialization
        fields = ['name', 'description']


class DoctorForm(forms.ModelForm):
    class Meta:
        model = Doctor
        fields = ['first_name', 'last_name', 'specialization', 'email', 'contact_number', 'license_number']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # A doctor is always registered under a specialization.
        self.fields['specialization'].required = True
