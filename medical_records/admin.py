# medical_records/admin.py

from django.contrib import admin
from .models import MedicalRecord, Prescription, PrescriptionItem


class PrescriptionItemInline(admin.TabularInline):
    model = PrescriptionItem
    extra = 0
    fields = ('medicine', 'quantity', 'dosage')
    raw_id_fields = ('medicine',)


class PrescriptionAdmin(admin.ModelAdmin):
    inlines = [PrescriptionItemInline]
    list_display = ('__str__', 'record', 'created_at')
    raw_id_fields = ('record',)


class MedicalRecordAdmin(admin.ModelAdmin):
    list_display = ('pk', 'appointment_id', 'visit_date', 'diagnosis')
    list_filter = ('visit_date',)
    search_fields = ('symptom', 'diagnosis')
    raw_id_fields = ('appointment',)


admin.site.register(MedicalRecord, MedicalRecordAdmin)
admin.site.register(Prescription, PrescriptionAdmin)
