# billing/services.py

import logging
from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.exceptions import NotFound
from medical_records.models import Prescription, PrescriptionItem
from .models import Invoice

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')


def prescription_cost(appointment_id):
    """
    Sums quantity times unit price over every prescription item attached to
    any medical record of the appointment.
    """
    line_total = ExpressionWrapper(
        F('quantity') * F('medicine__price'),
        output_field=DecimalField(max_digits=12, decimal_places=2)
    )
    totals = PrescriptionItem.objects.filter(prescription__record__appointment_id=appointment_id).aggregate(
        cost=Coalesce(Sum(line_total), Value(Decimal('0.00')), output_field=DecimalField(max_digits=12, decimal_places=2)),
        items=Count('pk'),
    )
    prescriptions = Prescription.objects.filter(record__appointment_id=appointment_id).count()
    return {
        'medicineCost': Decimal(totals['cost']).quantize(CENTS),
        'prescriptionCount': prescriptions,
        'medicineCount': totals['items'],
    }


def create_invoice(appointment, consultation_fee=None, payment_method=None, date_paid=None):
    """
    Persists an invoice whose total is the consultation fee plus the current
    medicine cost of the appointment. The total is never recomputed later.
    """
    medicine_cost = prescription_cost(appointment.pk)['medicineCost']
    total = ((consultation_fee or Decimal('0.00')) + medicine_cost).quantize(CENTS)

    invoice = Invoice.objects.create(
        appointment=appointment,
        total_amount=total,
        payment_method=payment_method or None,
        date_paid=date_paid,
    )
    logger.info(
        "Invoice %s for appointment %s: base %s, medicine %s, total %s",
        invoice.pk, appointment.pk, consultation_fee or 0, medicine_cost, total
    )
    return invoice, medicine_cost


def mark_paid(invoice_id, payment_method=None, date_paid=None):
    """Sets the paid date (today unless given) and, when supplied, the payment method."""
    try:
        invoice = Invoice.objects.get(pk=invoice_id)
    except Invoice.DoesNotExist:
        raise NotFound('Invoice not found')

    invoice.date_paid = date_paid or timezone.localdate()
    if payment_method:
        invoice.payment_method = payment_method
    invoice.save(update_fields=['date_paid', 'payment_method', 'updated_at'])
    logger.info("Invoice %s marked paid on %s", invoice.pk, invoice.date_paid)
    return invoice
