# appointments/models.py

from django.db import models
from django.db.models import Case, CharField, F, Q, Value, When
from django.db.models.functions import Concat

from patients.models import Patient
from staff.models import Doctor, StaffMember
from .lifecycle import CANCELLED, SCHEDULED, STATUS_CHOICES, TERMINAL_STATUSES


class Room(models.Model):
    room_type = models.CharField(max_length=50, help_text="e.g., 'Consultation', 'Procedure'")
    availability_status = models.CharField(max_length=20, blank=True, default='Available')

    def __str__(self):
        return f"{self.room_type} (Room {self.pk})"

    class Meta:
        ordering = ['pk']


def full_name(relation):
    """First and last name across a relation; NULL when the relation is unset."""
    return Case(
        When(**{f'{relation}__isnull': True}, then=Value(None)),
        default=Concat(f'{relation}__first_name', Value(' '), f'{relation}__last_name'),
        output_field=CharField(),
    )


class AppointmentQuerySet(models.QuerySet):

    def active(self):
        """Appointments that occupy their slot."""
        return self.exclude(status=CANCELLED)

    def in_slot(self, doctor, appointment_date, appointment_time):
        return self.filter(doctor=doctor, appointment_date=appointment_date, appointment_time=appointment_time)

    def on_date(self, day):
        return self.filter(appointment_date=day)

    def with_details(self, contact=False):
        """
        Flattens each appointment with patient, doctor, staff and room
        details. Staff and room are optional and joined with outer joins.
        """
        columns = {
            'APPOINTMENT_ID': F('pk'),
            'STAFF_ID': F('staff_id'),
            'PATIENT_IC': F('patient_id'),
            'DOCTOR_ID': F('doctor_id'),
            'ROOM_ID': F('room_id'),
            'APPOINTMENT_DATE': F('appointment_date'),
            'APPOINTMENT_TIME': F('appointment_time'),
            'REASON_TO_VISIT': F('reason_to_visit'),
            'STATUS': F('status'),
            'PATIENT_NAME': full_name('patient'),
            'PATIENT_PHONE': F('patient__phone_number'),
            'DOCTOR_NAME': full_name('doctor'),
            'STAFF_NAME': full_name('staff'),
            'ROOM_TYPE': F('room__room_type'),
        }
        if contact:
            columns['PATIENT_EMAIL'] = F('patient__email')
        return self.values(**columns)


class Appointment(models.Model):
    staff = models.ForeignKey(
        StaffMember,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='appointments'
    )
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='appointments')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='appointments')
    room = models.ForeignKey(
        Room,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='appointments'
    )

    appointment_date = models.DateField()
    appointment_time = models.TimeField()
    reason_to_visit = models.TextField(blank=True, null=True)

    # Not limited to STATUS_CHOICES at the database level; see lifecycle.check_transition.
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=SCHEDULED)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AppointmentQuerySet.as_manager()

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    def __str__(self):
        return (
            f"Appointment for {self.patient.name} with {self.doctor} on "
            f"{self.appointment_date:%Y-%m-%d} {self.appointment_time:%H:%M}"
        )

    class Meta:
        ordering = ['-appointment_date', '-appointment_time']
        indexes = [
            models.Index(fields=['appointment_date'], name='idx_appointment_date'),
        ]
        constraints = [
            # One non-cancelled appointment per doctor, date and time.
            models.UniqueConstraint(
                fields=['doctor', 'appointment_date', 'appointment_time'],
                condition=~Q(status=CANCELLED),
                name='unique_active_doctor_slot',
                violation_error_message='This time slot is already booked for this doctor',
            ),
        ]
