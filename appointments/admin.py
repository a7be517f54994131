# appointments/admin.py

from django.contrib import admin
from .models import Appointment, Room

class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('patient', 'doctor', 'appointment_date', 'appointment_time', 'room', 'status', 'is_terminal')
    list_filter = ('status', 'doctor', 'appointment_date')
    search_fields = ('patient__first_name', 'patient__last_name', 'patient__ic_number', 'reason_to_visit')
    list_select_related = ('patient', 'doctor', 'room')
    list_per_page = 20

class RoomAdmin(admin.ModelAdmin):
    list_display = ('pk', 'room_type', 'availability_status')
    list_filter = ('availability_status',)

admin.site.register(Appointment, AppointmentAdmin)
admin.site.register(Room, RoomAdmin)
