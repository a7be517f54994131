# patients/admin.py

from django.contrib import admin
from .models import Patient

class PatientAdmin(admin.ModelAdmin):
    list_display = ('ic_number', 'name', 'phone_number', 'gender', 'age', 'updated_at')
    search_fields = ('ic_number', 'first_name', 'last_name', 'phone_number')

admin.site.register(Patient, PatientAdmin)
