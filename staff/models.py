# staff/models.py

from django.db import models
from phonenumber_field.modelfields import PhoneNumberField


class Role(models.Model):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['name']


class StaffMember(models.Model):
    first_name = models.CharField(max_length=60)
    last_name = models.CharField(max_length=60)
    role = models.ForeignKey(Role, on_delete=models.PROTECT, related_name='staff_members')
    contact_number = PhoneNumberField(blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    hire_date = models.DateField(blank=True, null=True)
    shift = models.CharField(max_length=30, blank=True, null=True, help_text="e.g., 'Morning', 'Night'")

    @property
    def name(self):
        return f"{self.first_name} {self.last_name}"

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['first_name', 'last_name']


class Specialization(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['name']


class Doctor(models.Model):
    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Inactive', 'Inactive'),
    ]
    first_name = models.CharField(max_length=60)
    last_name = models.CharField(max_length=60)
    specialization = models.ForeignKey(
        Specialization,
        on_delete=models.SET_NULL,
        null=True,
        related_name='doctors'
    )
    email = models.EmailField()
    contact_number = PhoneNumberField()
    license_number = models.CharField(max_length=50)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='Active')

    @property
    def name(self):
        return f"{self.first_name} {self.last_name}"

    def __str__(self):
        return f"Dr. {self.name}"

    class Meta:
        ordering = ['first_name', 'last_name']
