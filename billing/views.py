# billing/views.py

from core.api import api_response, api_view, clean_form
from core.resources import ResourceDetailView, ResourceListView
from . import services
from .forms import InvoiceCreateForm, InvoiceForm, MedicineForm, PaymentForm
from .models import Invoice, Medicine


# ========== Medicines ==========

class MedicineResourceMixin:
    model = Medicine
    form_class = MedicineForm
    noun = 'Medicine'
    aliases = {
        'postingDate': 'posting_date',
        'expiryDate': 'expiry_date',
        'dosageForm': 'dosage_form',
        'currentStock': 'current_stock',
        'sideEffects': 'side_effects',
    }
    columns = {
        'MEDICINE_ID': 'pk',
        'NAME': 'name',
        'POSTING_DATE': 'posting_date',
        'EXPIRY_DATE': 'expiry_date',
        'DOSAGE_FORM': 'dosage_form',
        'DESCRIPTION': 'description',
        'PRICE': 'price',
        'CURRENT_STOCK': 'current_stock',
        'MANUFACTURER': 'manufacturer',
        'SIDE_EFFECTS': 'side_effects',
    }


class MedicineListView(MedicineResourceMixin, ResourceListView):
    id_key = 'medicineId'


class MedicineDetailView(MedicineResourceMixin, ResourceDetailView):
    pass


# ========== Invoices ==========

class InvoiceResourceMixin:
    model = Invoice
    form_class = InvoiceForm
    noun = 'Invoice'
    aliases = {
        'totalamount': 'total_amount',
        'paymentmethod': 'payment_method',
        'datepaid': 'date_paid',
    }

    def rows(self, queryset):
        return list(queryset.with_details(reason=self.with_reason))


class InvoiceListView(InvoiceResourceMixin, ResourceListView):
    with_reason = False

    def post(self, request):
        data = clean_form(InvoiceCreateForm(request.data))
        invoice, medicine_cost = services.create_invoice(
            data['appointmentid'],
            consultation_fee=data['totalamount'],
            payment_method=data['paymentmethod'],
            date_paid=data['datepaid'],
        )
        return api_response(
            message='Invoice created successfully',
            status=201,
            data={
                'invoiceId': invoice.pk,
                'medicineCost': medicine_cost,
                'totalAmount': invoice.total_amount,
            }
        )


class InvoiceDetailView(InvoiceResourceMixin, ResourceDetailView):
    with_reason = True


@api_view(['PATCH'])
def invoice_payment_view(request, pk):
    data = clean_form(PaymentForm(request.data))
    invoice = services.mark_paid(pk, payment_method=data['paymentmethod'], date_paid=data['datepaid'])
    return api_response(
        message='Invoice marked as paid',
        data={'invoiceId': invoice.pk, 'datePaid': invoice.date_paid, 'paymentStatus': invoice.payment_status}
    )


# ========== Prescription cost ==========

@api_view(['GET'])
def prescription_cost_view(request, pk):
    return api_response(data=services.prescription_cost(pk))
