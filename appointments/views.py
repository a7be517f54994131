# appointments/views.py

from django.utils.dateparse import parse_date

from core.api import api_response, api_view, clean_form
from core.exceptions import NotFound, ValidationFailed
from core.resources import ResourceDetailView, ResourceListView
from . import services
from .forms import AppointmentForm, AppointmentUpdateForm, RoomForm
from .models import Appointment, Room

STATUS_MAX_LENGTH = Appointment._meta.get_field('status').max_length


# --- List / Book ---
@api_view(['GET', 'POST'])
def appointment_list_view(request):
    if request.method == 'POST':
        form = AppointmentForm(request.data)
        clean_form(form)
        appointment = services.book_appointment(**form.appointment_fields())
        return api_response(
            message='Appointment created successfully',
            status=201,
            appointmentId=appointment.pk
        )

    appointments = Appointment.objects.order_by('-appointment_date', '-appointment_time').with_details()
    return api_response(data=list(appointments))


# --- Day view ---
@api_view(['GET'])
def appointments_by_date_view(request, day):
    try:
        parsed_day = parse_date(day)
    except ValueError:
        parsed_day = None
    if parsed_day is None:
        raise ValidationFailed('Invalid date, expected YYYY-MM-DD')

    appointments = Appointment.objects.on_date(parsed_day).order_by('appointment_time').with_details()
    return api_response(data=list(appointments))


# --- Detail / Replace / Delete ---
@api_view(['GET', 'PUT', 'DELETE'])
def appointment_detail_view(request, pk):
    if request.method == 'PUT':
        form = AppointmentUpdateForm(request.data)
        clean_form(form)
        services.update_appointment(pk, **form.appointment_fields())
        return api_response(message='Appointment updated successfully')

    if request.method == 'DELETE':
        services.delete_appointment(pk)
        return api_response(message='Appointment deleted successfully')

    appointment = Appointment.objects.filter(pk=pk).with_details(contact=True).first()
    if appointment is None:
        raise NotFound('Appointment not found')
    return api_response(data=appointment)


# --- Status ---
@api_view(['PATCH'])
def appointment_status_view(request, pk):
    status = request.data.get('status')
    if not status:
        raise ValidationFailed('Status is required')
    if not isinstance(status, str) or len(status) > STATUS_MAX_LENGTH:
        raise ValidationFailed(f'Status must be text of at most {STATUS_MAX_LENGTH} characters')

    services.change_status(pk, status)
    return api_response(message='Appointment status updated successfully')


# --- Rooms ---
class RoomResourceMixin:
    model = Room
    form_class = RoomForm
    noun = 'Room'
    aliases = {'roomType': 'room_type', 'availabilityStatus': 'availability_status'}
    columns = {
        'ROOM_ID': 'pk',
        'ROOM_TYPE': 'room_type',
        'AVAILABILITY_STATUS': 'availability_status',
    }


class RoomListView(RoomResourceMixin, ResourceListView):
    ordering = ('pk',)
    id_key = 'roomId'


class RoomDetailView(RoomResourceMixin, ResourceDetailView):
    pass
