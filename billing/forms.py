# billing/forms.py

from django import forms

from appointments.models import Appointment
from .models import Invoice, Medicine


class MedicineForm(forms.ModelForm):
    class Meta:
        model = Medicine
        fields = [
            'name', 'posting_date', 'expiry_date', 'dosage_form', 'description',
            'price', 'current_stock', 'manufacturer', 'side_effects',
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Only the name is required; price and stock fall back to the model defaults.
        self.fields['price'].required = False
        self.fields['current_stock'].required = False

    def _default_for(self, name):
        value = self.cleaned_data.get(name)
        if value is None:
            return Medicine._meta.get_field(name).get_default()
        return value

    def clean_price(self):
        return self._default_for('price')

    def clean_current_stock(self):
        return self._default_for('current_stock')


class InvoiceCreateForm(forms.Form):
    appointmentid = forms.ModelChoiceField(queryset=Appointment.objects.all())
    totalamount = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    paymentmethod = forms.CharField(max_length=50, required=False)
    datepaid = forms.DateField(input_formats=['%Y-%m-%d'], required=False)


class InvoiceForm(forms.ModelForm):
    """Full replacement of an invoice's payment fields; an empty date paid marks it unpaid."""

    class Meta:
        model = Invoice
        fields = ['total_amount', 'payment_method', 'date_paid']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['total_amount'].required = True


class PaymentForm(forms.Form):
    paymentmethod = forms.CharField(max_length=50, required=False)
    datepaid = forms.DateField(input_formats=['%Y-%m-%d'], required=False)
