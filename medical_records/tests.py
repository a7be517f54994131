from datetime import date
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse

from appointments.tests import AppointmentFixtureMixin
from billing.models import Medicine
from .models import MedicalRecord, Prescription, PrescriptionItem


class MedicalRecordApiTests(AppointmentFixtureMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.appointment = self.create_appointment()

    def test_create_record(self):
        response = self.client.post(reverse('medical_records:record_list'), {
            'appointmentid': self.appointment.pk,
            'visitdate': '2025-06-01',
            'symptom': 'Cough',
            'diagnosis': 'URTI',
        }, content_type='application/json')
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['message'], 'Medical record created successfully')
        record = MedicalRecord.objects.get(pk=body['data']['recordId'])
        self.assertEqual(record.appointment, self.appointment)

    def test_create_record_requires_appointment_and_date(self):
        response = self.client.post(
            reverse('medical_records:record_list'), {'symptom': 'Cough'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('appointmentid', response.json()['message'])
        self.assertIn('visitdate', response.json()['message'])

    def test_list_and_detail(self):
        record = MedicalRecord.objects.create(appointment=self.appointment, visit_date=date(2025, 6, 1), diagnosis='URTI')
        rows = self.client.get(reverse('medical_records:record_list')).json()['data']
        self.assertEqual(rows[0]['RECORDID'], record.pk)
        self.assertEqual(rows[0]['PATIENT_NAME'], 'Aisyah Rahman')
        self.assertEqual(rows[0]['DOCTOR_NAME'], 'Tan Wei Ming')

        detail = self.client.get(reverse('medical_records:record_detail', args=[record.pk])).json()['data']
        self.assertEqual(detail['DIAGNOSIS'], 'URTI')
        self.assertEqual(detail['APPOINTMENTID'], self.appointment.pk)

    def test_update_and_delete(self):
        record = MedicalRecord.objects.create(appointment=self.appointment, visit_date=date(2025, 6, 1))
        url = reverse('medical_records:record_detail', args=[record.pk])
        response = self.client.put(url, {
            'appointmentid': self.appointment.pk, 'visitdate': '2025-06-02', 'diagnosis': 'Influenza',
        }, content_type='application/json')
        self.assertEqual(response.status_code, 200)
        record.refresh_from_db()
        self.assertEqual(record.visit_date, date(2025, 6, 2))

        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(self.client.delete(url).status_code, 404)

    def test_deleting_appointment_leaves_record(self):
        record = MedicalRecord.objects.create(appointment=self.appointment, visit_date=date(2025, 6, 1))
        appointment_id = self.appointment.pk
        response = self.client.delete(reverse('appointments:appointment_detail', args=[appointment_id]))
        self.assertEqual(response.status_code, 200)
        record.refresh_from_db()
        self.assertEqual(record.appointment_id, appointment_id)


class PrescriptionApiTests(AppointmentFixtureMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.record = MedicalRecord.objects.create(
            appointment=self.create_appointment(), visit_date=date(2025, 6, 1), symptom='Fever', diagnosis='Flu'
        )
        self.paracetamol = Medicine.objects.create(
            name='Paracetamol', dosage_form='Tablet', price=Decimal('3.50'), current_stock=10
        )
        self.syrup = Medicine.objects.create(
            name='Cough Syrup', dosage_form='Syrup', price=Decimal('10.00'), current_stock=1
        )
        self.url = reverse('medical_records:prescription_list')

    def prescribe(self, items, **extra):
        data = {'recordId': self.record.pk, 'instruction': 'After meals', 'items': items}
        data.update(extra)
        return self.client.post(self.url, data, content_type='application/json')

    def test_create_prescription_decrements_stock(self):
        response = self.prescribe([
            {'medicineId': self.paracetamol.pk, 'quantity': 2, 'dosage': '1 tablet 3x daily'},
            {'medicineId': self.syrup.pk, 'quantity': 3, 'dosage': '10ml at night'},
        ])
        self.assertEqual(response.status_code, 201)
        prescription = Prescription.objects.get(pk=response.json()['prescriptionId'])
        self.assertEqual(prescription.items.count(), 2)

        self.paracetamol.refresh_from_db()
        self.syrup.refresh_from_db()
        self.assertEqual(self.paracetamol.current_stock, 8)
        # Stock is not floored at zero.
        self.assertEqual(self.syrup.current_stock, -2)

    def test_unknown_medicine_rolls_back_everything(self):
        response = self.prescribe([
            {'medicineId': self.paracetamol.pk, 'quantity': 2},
            {'medicineId': 9999, 'quantity': 1},
            {'medicineId': self.syrup.pk, 'quantity': 1},
        ])
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Medicine 9999 not found')
        self.assertEqual(Prescription.objects.count(), 0)
        self.assertEqual(PrescriptionItem.objects.count(), 0)
        self.paracetamol.refresh_from_db()
        self.syrup.refresh_from_db()
        self.assertEqual(self.paracetamol.current_stock, 10)
        self.assertEqual(self.syrup.current_stock, 1)

    def test_items_required(self):
        response = self.prescribe([])
        self.assertEqual(response.status_code, 400)
        self.assertIn('items', response.json()['message'])

    def test_invalid_item_quantity(self):
        response = self.prescribe([{'medicineId': self.paracetamol.pk, 'quantity': 0}])
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid item at position 1: quantity')
        self.assertEqual(Prescription.objects.count(), 0)

    def test_unknown_record(self):
        response = self.prescribe([{'medicineId': self.paracetamol.pk, 'quantity': 1}], recordId=9999)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid fields: recordId')

    def test_detail_with_items(self):
        prescription_id = self.prescribe([{'medicineId': self.paracetamol.pk, 'quantity': 2, 'dosage': '1 tablet'}]).json()['prescriptionId']
        response = self.client.get(reverse('medical_records:prescription_detail', args=[prescription_id]))
        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertEqual(data['PATIENT_NAME'], 'Aisyah Rahman')
        self.assertEqual(data['SYMPTOM'], 'Fever')
        self.assertEqual(len(data['items']), 1)
        self.assertEqual(data['items'][0]['MEDNAME'], 'Paracetamol')
        self.assertEqual(data['items'][0]['QUANTITY'], 2)

        rows = self.client.get(self.url).json()['data']
        self.assertEqual([row['PRESCRIPTIONID'] for row in rows], [prescription_id])

    def test_delete_prescription_keeps_stock(self):
        prescription_id = self.prescribe([{'medicineId': self.paracetamol.pk, 'quantity': 4}]).json()['prescriptionId']
        url = reverse('medical_records:prescription_detail', args=[prescription_id])
        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(PrescriptionItem.objects.count(), 0)
        self.paracetamol.refresh_from_db()
        self.assertEqual(self.paracetamol.current_stock, 6)
        self.assertEqual(self.client.delete(url).status_code, 404)
        self.assertEqual(self.client.get(url).status_code, 404)
