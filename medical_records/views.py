# medical_records/views.py

from django.db.models import F

from appointments.models import full_name
from core.api import api_response, api_view, clean_form
from core.exceptions import NotFound
from core.resources import ResourceDetailView, ResourceListView
from . import services
from .forms import MedicalRecordForm, PrescriptionForm
from .models import MedicalRecord, Prescription, PrescriptionItem


# --- Medical records ---
class MedicalRecordResourceMixin:
    model = MedicalRecord
    form_class = MedicalRecordForm
    noun = 'Medical record'
    aliases = {
        'appointmentid': 'appointment',
        'visitdate': 'visit_date',
    }
    columns = {
        'RECORDID': 'pk',
        'VISITDATE': 'visit_date',
        'PATIENTIC': 'appointment__patient_id',
        'PATIENT_NAME': full_name('appointment__patient'),
        'DOCTORID': 'appointment__doctor_id',
        'DOCTOR_NAME': full_name('appointment__doctor'),
        'SYMPTOM': 'symptom',
        'DIAGNOSIS': 'diagnosis',
        'APPOINTMENTID': 'appointment_id',
    }


class MedicalRecordListView(MedicalRecordResourceMixin, ResourceListView):
    ordering = ('-visit_date', '-pk')

    def created_response(self, instance):
        return api_response(
            message='Medical record created successfully',
            status=201,
            data={'recordId': instance.pk}
        )


class MedicalRecordDetailView(MedicalRecordResourceMixin, ResourceDetailView):
    pass


# --- Prescriptions ---
PRESCRIPTION_COLUMNS = {
    'PRESCRIPTIONID': F('pk'),
    'RECORDID': F('record_id'),
    'INSTRUCTION': F('instruction'),
    'VISITDATE': F('record__visit_date'),
    'PATIENTIC': F('record__appointment__patient_id'),
    'PATIENT_NAME': full_name('record__appointment__patient'),
    'DOCTORID': F('record__appointment__doctor_id'),
    'DOCTOR_NAME': full_name('record__appointment__doctor'),
    'DIAGNOSIS': F('record__diagnosis'),
}

ITEM_COLUMNS = {
    'PRESCRIPTIONITEMID': F('pk'),
    'PRESCRIPTIONID': F('prescription_id'),
    'MEDICINEID': F('medicine_id'),
    'MEDNAME': F('medicine__name'),
    'MEDDOSAGEFORM': F('medicine__dosage_form'),
    'QUANTITY': F('quantity'),
    'DOSAGE': F('dosage'),
    'DATEPRESCRIBED': F('date_prescribed'),
}


@api_view(['GET', 'POST'])
def prescription_list_view(request):
    if request.method == 'POST':
        form = PrescriptionForm(request.data)
        items = form.cleaned_items()
        data = clean_form(form)
        prescription = services.create_prescription(data['recordId'], items, instruction=data['instruction'])
        return api_response(
            message='Prescription created successfully',
            status=201,
            prescriptionId=prescription.pk
        )

    prescriptions = Prescription.objects.order_by('-record__visit_date', '-pk').values(**PRESCRIPTION_COLUMNS)
    return api_response(data=list(prescriptions))


@api_view(['GET', 'DELETE'])
def prescription_detail_view(request, pk):
    if request.method == 'DELETE':
        services.delete_prescription(pk)
        return api_response(message='Prescription deleted successfully')

    prescription = (
        Prescription.objects.filter(pk=pk)
        .values(SYMPTOM=F('record__symptom'), **PRESCRIPTION_COLUMNS)
        .first()
    )
    if prescription is None:
        raise NotFound('Prescription not found')

    items = PrescriptionItem.objects.filter(prescription_id=pk).order_by('pk').values(**ITEM_COLUMNS)
    prescription['items'] = list(items)
    return api_response(data=prescription)
