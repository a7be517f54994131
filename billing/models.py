# billing/models.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Case, CharField, F, OuterRef, Subquery, Value, When

from appointments.models import Appointment, full_name

PAID = 'Paid'
PENDING = 'Pending'


# ========== Medicine ==========

class Medicine(models.Model):
    name = models.CharField(max_length=200)
    posting_date = models.DateField(blank=True, null=True)
    expiry_date = models.DateField(blank=True, null=True)
    dosage_form = models.CharField(max_length=100, blank=True, null=True, help_text="e.g., 'Tablet', 'Syrup'")
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    # Signed: prescribing never checks stock, so this may go below zero.
    current_stock = models.IntegerField(default=0)
    manufacturer = models.CharField(max_length=200, blank=True, null=True)
    side_effects = models.TextField(blank=True, null=True)

    class Meta:
        verbose_name = "Medicine"
        verbose_name_plural = "Medicines"
        ordering = ['name']

    def __str__(self):
        return self.name


# ========== Invoice ==========

def _appointment_value(expression):
    """A scalar subquery over the invoice's appointment; NULL once the appointment is gone."""
    return Subquery(
        Appointment.objects.filter(pk=OuterRef('appointment_id'))
        .annotate(value=expression)
        .values('value')[:1]
    )


class InvoiceQuerySet(models.QuerySet):

    def with_payment_status(self):
        return self.annotate(
            payment_status_label=Case(
                When(date_paid__isnull=False, then=Value(PAID)),
                default=Value(PENDING),
                output_field=CharField(),
            )
        )

    def with_details(self, reason=False):
        columns = {
            'INVOICEID': F('pk'),
            'APPOINTMENTID': F('appointment_id'),
            'TOTALAMOUNT': F('total_amount'),
            'PAYMENTMETHOD': F('payment_method'),
            'DATEPAID': F('date_paid'),
            'APPOINTMENTDATE': _appointment_value(F('appointment_date')),
            'PATIENT_IC': _appointment_value(F('patient_id')),
            'PATIENT_NAME': _appointment_value(full_name('patient')),
            'DOCTOR_NAME': _appointment_value(full_name('doctor')),
        }
        if reason:
            columns['REASON_TO_VISIT'] = _appointment_value(F('reason_to_visit'))
        columns['PAYMENT_STATUS'] = F('payment_status_label')
        return self.with_payment_status().values(**columns)


class Invoice(models.Model):
    # No database constraint: deleting the appointment leaves the invoice in place.
    appointment = models.ForeignKey(
        Appointment,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='invoices'
    )
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    payment_method = models.CharField(max_length=50, blank=True, null=True)
    date_paid = models.DateField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = InvoiceQuerySet.as_manager()

    class Meta:
        ordering = ['-pk']

    def __str__(self):
        return f"Invoice {self.pk} (appointment {self.appointment_id})"

    @property
    def payment_status(self):
        return PAID if self.date_paid else PENDING
