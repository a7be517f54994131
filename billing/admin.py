# billing/admin.py

from django.contrib import admin
from .models import Invoice, Medicine


@admin.register(Medicine)
class MedicineAdmin(admin.ModelAdmin):
    list_display = ('name', 'dosage_form', 'price', 'current_stock', 'expiry_date')
    search_fields = ('name', 'manufacturer')
    list_filter = ('dosage_form',)


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ('pk', 'appointment_id', 'total_amount', 'payment_method', 'date_paid', 'payment_status')
    list_filter = ('date_paid', 'payment_method')
    raw_id_fields = ('appointment',)
