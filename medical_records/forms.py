# medical_records/forms.py

from django import forms

from core.exceptions import ValidationFailed
from .models import MedicalRecord


class MedicalRecordForm(forms.ModelForm):
    class Meta:
        model = MedicalRecord
        fields = ['appointment', 'visit_date', 'symptom', 'diagnosis']


class PrescriptionItemForm(forms.Form):
    # A plain id: the medicine row is looked up and locked while the prescription is written.
    medicineId = forms.IntegerField(min_value=1)
    quantity = forms.IntegerField(min_value=1)
    dosage = forms.CharField(max_length=100, required=False)


class PrescriptionForm(forms.Form):
    recordId = forms.ModelChoiceField(queryset=MedicalRecord.objects.all())
    instruction = forms.CharField(required=False)

    def __init__(self, data, *args, **kwargs):
        super().__init__(data, *args, **kwargs)
        self.raw_items = data.get('items')

    def cleaned_items(self):
        """
        Validates the item list and returns it as (medicine id, quantity,
        dosage) tuples, naming the first offending position.
        """
        if not isinstance(self.raw_items, list) or not self.raw_items:
            raise ValidationFailed('Required fields: recordId, items (array with at least one item)')

        items = []
        for position, raw in enumerate(self.raw_items, start=1):
            item_form = PrescriptionItemForm(raw if isinstance(raw, dict) else {})
            if not item_form.is_valid():
                raise ValidationFailed(
                    f"Invalid item at position {position}: {', '.join(item_form.errors)}",
                    errors={'items': {position: item_form.errors.get_json_data()}}
                )
            data = item_form.cleaned_data
            items.append((data['medicineId'], data['quantity'], data['dosage'] or None))
        return items
