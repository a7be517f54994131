# medical_records/services.py

import logging

from django.db import transaction
from django.db.models import F

from billing.models import Medicine
from core.exceptions import NotFound, ValidationFailed
from .models import Prescription, PrescriptionItem

logger = logging.getLogger(__name__)


def create_prescription(record, items, instruction=None):
    """
    Creates a prescription with its items and takes each item's quantity
    off the medicine's stock. Everything happens in one transaction, so an
    unknown medicine leaves no prescription, no items and no stock change.

    `items` is a sequence of (medicine_id, quantity, dosage) tuples.
    Stock is allowed to go negative.
    """
    with transaction.atomic():
        prescription = Prescription.objects.create(record=record, instruction=instruction or None)

        for medicine_id, quantity, dosage in items:
            medicine = Medicine.objects.select_for_update().filter(pk=medicine_id).first()
            if medicine is None:
                raise ValidationFailed(f'Medicine {medicine_id} not found')

            PrescriptionItem.objects.create(
                prescription=prescription,
                medicine=medicine,
                quantity=quantity,
                dosage=dosage,
            )
            Medicine.objects.filter(pk=medicine.pk).update(current_stock=F('current_stock') - quantity)

    logger.info("Prescription %s created for record %s with %d item(s)", prescription.pk, record.pk, len(items))
    return prescription


def delete_prescription(prescription_id):
    """Removes the items and the prescription together. Stock is not restored."""
    with transaction.atomic():
        PrescriptionItem.objects.filter(prescription_id=prescription_id).delete()
        deleted, __ = Prescription.objects.filter(pk=prescription_id).delete()
        if not deleted:
            raise NotFound('Prescription not found')
    logger.info("Prescription %s deleted", prescription_id)
