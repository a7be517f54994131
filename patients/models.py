# patients/models.py

from datetime import date

from django.db import models
from phonenumber_field.modelfields import PhoneNumberField


class Patient(models.Model):
    ic_number = models.CharField(
        max_length=20,
        primary_key=True,
        help_text="National identity card number; used as the patient identifier."
    )
    first_name = models.CharField(max_length=60)
    last_name = models.CharField(max_length=60)
    date_of_birth = models.DateField()

    GENDER_CHOICES = [('M', 'Male'), ('F', 'Female'), ('O', 'Other')]
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)

    phone_number = PhoneNumberField(
        blank=False,
        null=False,
        help_text="Enter phone number with country code (e.g., +60)."
    )
    email = models.EmailField(blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    emergency_contact = models.CharField(max_length=100, blank=True, null=True)
    blood_type = models.CharField(max_length=5, blank=True, null=True)
    allergies = models.TextField(blank=True, null=True, help_text="e.g., Penicillin, Aspirin")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def age(self):
        if self.date_of_birth:
            today = date.today()
            return (
                today.year
                - self.date_of_birth.year
                - ((today.month, today.day) < (self.date_of_birth.month, self.date_of_birth.day))
            )
        return None

    def __str__(self):
        return f"{self.name} (IC: {self.pk})"

    class Meta:
        ordering = ['-ic_number']
