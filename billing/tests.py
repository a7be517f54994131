from datetime import date
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from appointments.tests import AppointmentFixtureMixin
from medical_records.models import MedicalRecord
from medical_records.services import create_prescription
from . import services
from .models import Invoice, Medicine


class MedicineApiTests(TestCase):

    def test_medicine_crud(self):
        response = self.client.post(reverse('billing:medicine_list'), {
            'name': 'Amoxicillin',
            'dosageForm': 'Capsule',
            'price': '1.25',
            'currentStock': 100,
            'expiryDate': '2027-01-31',
        }, content_type='application/json')
        self.assertEqual(response.status_code, 201)
        medicine_id = response.json()['medicineId']

        url = reverse('billing:medicine_detail', args=[medicine_id])
        row = self.client.get(url).json()['data']
        self.assertEqual(row['NAME'], 'Amoxicillin')
        self.assertEqual(row['PRICE'], 1.25)
        self.assertEqual(row['CURRENT_STOCK'], 100)
        self.assertEqual(row['EXPIRY_DATE'], '2027-01-31')

        response = self.client.put(url, {'name': 'Amoxicillin 500mg', 'price': '1.50', 'currentStock': 80}, content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Medicine.objects.get(pk=medicine_id).price, Decimal('1.50'))

        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_create_with_name_only_uses_defaults(self):
        response = self.client.post(reverse('billing:medicine_list'), {'name': 'Paracetamol'}, content_type='application/json')
        self.assertEqual(response.status_code, 201)
        medicine = Medicine.objects.get(pk=response.json()['medicineId'])
        self.assertEqual(medicine.price, Decimal('0.00'))
        self.assertEqual(medicine.current_stock, 0)

    def test_null_price_falls_back_to_default(self):
        response = self.client.post(
            reverse('billing:medicine_list'), {'name': 'Ibuprofen', 'price': None, 'currentStock': None},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        medicine = Medicine.objects.get(pk=response.json()['medicineId'])
        self.assertEqual(medicine.price, Decimal('0.00'))
        self.assertEqual(medicine.current_stock, 0)

    def test_name_required(self):
        response = self.client.post(reverse('billing:medicine_list'), {'price': '2.00'}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Required fields: name')


class InvoiceTests(AppointmentFixtureMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.appointment = self.create_appointment()
        record = MedicalRecord.objects.create(appointment=self.appointment, visit_date=date(2025, 6, 1))
        paracetamol = Medicine.objects.create(name='Paracetamol', price=Decimal('3.50'), current_stock=50)
        syrup = Medicine.objects.create(name='Cough Syrup', price=Decimal('10.00'), current_stock=5)
        create_prescription(record, [(paracetamol.pk, 2, '1 tablet'), (syrup.pk, 1, '10ml')])

    def create_invoice(self, **data):
        payload = {'appointmentid': self.appointment.pk}
        payload.update(data)
        return self.client.post(reverse('billing:invoice_list'), payload, content_type='application/json')

    def test_prescription_cost(self):
        for name in ('billing:prescription_cost', 'billing:invoice_prescription_cost'):
            response = self.client.get(reverse(name, args=[self.appointment.pk]))
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json()['data'], {'medicineCost': 17.0, 'prescriptionCount': 1, 'medicineCount': 2})

    def test_prescription_cost_without_prescriptions(self):
        other = self.create_appointment(doctor=self.other_doctor)
        self.assertEqual(
            services.prescription_cost(other.pk),
            {'medicineCost': Decimal('0.00'), 'prescriptionCount': 0, 'medicineCount': 0}
        )

    def test_invoice_total_adds_medicine_cost(self):
        response = self.create_invoice(totalamount='50.00', paymentmethod='Cash')
        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(data['medicineCost'], 17.0)
        self.assertEqual(data['totalAmount'], 67.0)
        invoice = Invoice.objects.get(pk=data['invoiceId'])
        self.assertEqual(invoice.total_amount, Decimal('67.00'))
        self.assertEqual(invoice.payment_status, 'Pending')

    def test_invoice_without_fee(self):
        data = self.create_invoice().json()['data']
        self.assertEqual(data['totalAmount'], 17.0)

    def test_invoice_for_unknown_appointment(self):
        response = self.create_invoice(appointmentid=9999)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid fields: appointmentid')

    def test_invoice_not_recomputed(self):
        invoice_id = self.create_invoice(totalamount='50.00').json()['data']['invoiceId']
        Medicine.objects.update(price=Decimal('100.00'))
        self.assertEqual(Invoice.objects.get(pk=invoice_id).total_amount, Decimal('67.00'))

    def test_listing_derives_payment_status(self):
        self.create_invoice(totalamount='50.00', datepaid='2025-06-01')
        self.create_invoice(totalamount='20.00')
        rows = self.client.get(reverse('billing:invoice_list')).json()['data']
        self.assertEqual([row['PAYMENT_STATUS'] for row in rows], ['Pending', 'Paid'])
        self.assertEqual(rows[1]['PATIENT_NAME'], 'Aisyah Rahman')
        self.assertEqual(rows[1]['DOCTOR_NAME'], 'Tan Wei Ming')
        self.assertEqual(rows[1]['APPOINTMENTDATE'], '2025-06-01')
        self.assertNotIn('REASON_TO_VISIT', rows[1])

    def test_payment_status_toggles_with_date_paid(self):
        invoice_id = self.create_invoice(totalamount='50.00').json()['data']['invoiceId']
        url = reverse('billing:invoice_detail', args=[invoice_id])
        self.assertEqual(self.client.get(url).json()['data']['PAYMENT_STATUS'], 'Pending')

        response = self.client.patch(
            reverse('billing:invoice_payment', args=[invoice_id]), {'paymentmethod': 'Card'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)
        data = self.client.get(url).json()['data']
        self.assertEqual(data['PAYMENT_STATUS'], 'Paid')
        self.assertEqual(data['PAYMENTMETHOD'], 'Card')
        self.assertEqual(data['DATEPAID'], timezone.localdate().isoformat())

        response = self.client.put(url, {'totalamount': '67.00', 'paymentmethod': 'Card'}, content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(url).json()['data']['PAYMENT_STATUS'], 'Pending')

    def test_put_requires_amount(self):
        invoice_id = self.create_invoice().json()['data']['invoiceId']
        response = self.client.put(reverse('billing:invoice_detail', args=[invoice_id]), {}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Required fields: totalamount')

    def test_unknown_invoice(self):
        self.assertEqual(self.client.get(reverse('billing:invoice_detail', args=[9999])).status_code, 404)
        self.assertEqual(self.client.delete(reverse('billing:invoice_detail', args=[9999])).status_code, 404)
        response = self.client.patch(reverse('billing:invoice_payment', args=[9999]), {}, content_type='application/json')
        self.assertEqual(response.status_code, 404)

    def test_invoice_survives_appointment_deletion(self):
        invoice_id = self.create_invoice(totalamount='50.00').json()['data']['invoiceId']
        self.client.delete(reverse('appointments:appointment_detail', args=[self.appointment.pk]))
        data = self.client.get(reverse('billing:invoice_detail', args=[invoice_id])).json()['data']
        self.assertEqual(data['APPOINTMENTID'], self.appointment.pk)
        self.assertIsNone(data['PATIENT_NAME'])
        self.assertEqual(data['TOTALAMOUNT'], 67.0)
