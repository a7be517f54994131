# patients/views.py

from core.resources import ResourceDetailView, ResourceListView
from .forms import PatientForm, PatientUpdateForm
from .models import Patient


class PatientResourceMixin:
    model = Patient
    noun = 'Patient'
    aliases = {
        'patientIC': 'ic_number',
        'firstName': 'first_name',
        'lastName': 'last_name',
        'dateOfBirth': 'date_of_birth',
        'phone': 'phone_number',
        'emergencyContact': 'emergency_contact',
        'bloodType': 'blood_type',
    }
    columns = {
        'PATIENT_IC': 'ic_number',
        'FIRST_NAME': 'first_name',
        'LAST_NAME': 'last_name',
        'DATE_OF_BIRTH': 'date_of_birth',
        'GENDER': 'gender',
        'PHONE': 'phone_number',
        'EMAIL': 'email',
        'ADDRESS': 'address',
        'EMERGENCY_CONTACT': 'emergency_contact',
        'BLOOD_TYPE': 'blood_type',
        'ALLERGIES': 'allergies',
    }


class PatientListView(PatientResourceMixin, ResourceListView):
    form_class = PatientForm
    id_key = 'patientIC'


class PatientDetailView(PatientResourceMixin, ResourceDetailView):
    form_class = PatientUpdateForm
