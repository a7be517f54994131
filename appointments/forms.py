# appointments/forms.py

from django import forms

from patients.models import Patient
from staff.models import Doctor, StaffMember
from .models import Appointment, Room


class AppointmentForm(forms.Form):
    """Booking request. Field names follow the API's request keys."""

    staffId = forms.ModelChoiceField(queryset=StaffMember.objects.all(), required=False)
    patientIC = forms.ModelChoiceField(queryset=Patient.objects.all(), to_field_name='ic_number')
    doctorId = forms.ModelChoiceField(queryset=Doctor.objects.all())
    roomId = forms.ModelChoiceField(queryset=Room.objects.all(), required=False)
    appointmentDate = forms.DateField(input_formats=['%Y-%m-%d'])
    appointmentTime = forms.TimeField(input_formats=['%H:%M', '%H:%M:%S'])
    reasonToVisit = forms.CharField(required=False)

    def appointment_fields(self):
        data = self.cleaned_data
        return {
            'staff': data['staffId'],
            'patient': data['patientIC'],
            'doctor': data['doctorId'],
            'room': data['roomId'],
            'appointment_date': data['appointmentDate'],
            'appointment_time': data['appointmentTime'],
            'reason_to_visit': data['reasonToVisit'],
        }


class AppointmentUpdateForm(AppointmentForm):
    status = forms.CharField(max_length=Appointment._meta.get_field('status').max_length, required=False)

    def appointment_fields(self):
        fields = super().appointment_fields()
        fields['status'] = self.cleaned_data['status']
        return fields


class RoomForm(forms.ModelForm):
    class Meta:
        model = Room
        fields = ['room_type', 'availability_status']
