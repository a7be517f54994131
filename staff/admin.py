# staff/admin.py

from django.contrib import admin
from .models import Doctor, Role, Specialization, StaffMember


@admin.register(StaffMember)
class StaffMemberAdmin(admin.ModelAdmin):
    list_display = ('name', 'role', 'email', 'contact_number', 'shift', 'hire_date')
    list_filter = ('role', 'shift')
    search_fields = ('first_name', 'last_name', 'email', 'contact_number')
    ordering = ('-hire_date',)


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('name', 'specialization', 'email', 'contact_number', 'license_number', 'status')
    list_filter = ('status', 'specialization')
    search_fields = ('first_name', 'last_name', 'email', 'license_number')


admin.site.register(Role)
admin.site.register(Specialization)
