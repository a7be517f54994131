# medical_records/models.py

from django.db import models

from appointments.models import Appointment


class MedicalRecord(models.Model):
    # No database constraint: deleting the appointment leaves the record in place.
    appointment = models.ForeignKey(
        Appointment,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='medical_records'
    )
    visit_date = models.DateField()
    symptom = models.TextField(blank=True, null=True)
    diagnosis = models.TextField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Medical record {self.pk} (appointment {self.appointment_id}, {self.visit_date})"

    class Meta:
        verbose_name = "Medical Record"
        verbose_name_plural = "Medical Records"
        ordering = ['-visit_date']


class Prescription(models.Model):
    record = models.ForeignKey(
        MedicalRecord,
        on_delete=models.CASCADE,
        related_name='prescriptions'
    )
    instruction = models.TextField(blank=True, null=True, help_text="General instruction for the whole prescription.")

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Prescription {self.pk} for record {self.record_id}"

    class Meta:
        verbose_name = "Prescription"
        verbose_name_plural = "Prescriptions"


class PrescriptionItem(models.Model):
    prescription = models.ForeignKey(
        Prescription,
        on_delete=models.CASCADE,
        related_name='items'
    )
    medicine = models.ForeignKey(
        'billing.Medicine',
        on_delete=models.PROTECT,
        related_name='prescription_items'
    )
    quantity = models.PositiveIntegerField()
    dosage = models.CharField(max_length=100, blank=True, null=True, help_text="e.g., '1 tablet 3 times a day'")
    date_prescribed = models.DateField(auto_now_add=True)

    def __str__(self):
        return f"{self.medicine} x{self.quantity}"

    class Meta:
        verbose_name = "Prescription Item"
        verbose_name_plural = "Prescription Items"
