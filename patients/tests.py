from datetime import date

from django.test import TestCase, Client
from django.urls import reverse

from .models import Patient


class PatientApiTests(TestCase):

    def setUp(self):
        self.client = Client()
        self.patient = Patient.objects.create(
            ic_number='900101-14-5678',
            first_name='Aisyah',
            last_name='Rahman',
            date_of_birth=date(1990, 1, 1),
            gender='F',
            phone_number='+60123456789',
        )
        self.list_url = reverse('patients:patient_list')
        self.detail_url = reverse('patients:patient_detail', args=[self.patient.pk])

    def payload(self, **overrides):
        data = {
            'patientIC': '850505-10-1234',
            'firstName': 'Daniel',
            'lastName': 'Lim',
            'dateOfBirth': '1985-05-05',
            'gender': 'M',
            'phone': '+60129876543',
            'email': 'daniel@example.my',
            'bloodType': 'O+',
        }
        data.update(overrides)
        return data

    def test_list_patients(self):
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, 200)
        rows = response.json()['data']
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]['PATIENT_IC'], '900101-14-5678')
        self.assertEqual(rows[0]['PHONE'], '+60123456789')

    def test_create_patient(self):
        response = self.client.post(self.list_url, self.payload(), content_type='application/json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['patientIC'], '850505-10-1234')
        patient = Patient.objects.get(pk='850505-10-1234')
        self.assertEqual(patient.name, 'Daniel Lim')
        self.assertEqual(patient.blood_type, 'O+')

    def test_create_patient_missing_fields(self):
        response = self.client.post(
            self.list_url, {'patientIC': '111', 'firstName': 'X'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        message = response.json()['message']
        self.assertTrue(message.startswith('Required fields:'))
        self.assertIn('lastName', message)
        self.assertIn('dateOfBirth', message)

    def test_duplicate_ic_rejected(self):
        response = self.client.post(
            self.list_url, self.payload(patientIC=self.patient.pk), content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('patientIC', response.json()['message'])

    def test_get_patient(self):
        response = self.client.get(self.detail_url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['FIRST_NAME'], 'Aisyah')

    def test_get_unknown_patient(self):
        response = self.client.get(reverse('patients:patient_detail', args=['000000-00-0000']))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'Patient not found')

    def test_update_patient(self):
        data = self.payload()
        del data['patientIC']
        response = self.client.put(self.detail_url, data, content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.patient.refresh_from_db()
        self.assertEqual(self.patient.first_name, 'Daniel')
        self.assertEqual(self.patient.pk, '900101-14-5678')

    def test_delete_patient(self):
        response = self.client.delete(self.detail_url)
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Patient.objects.filter(pk=self.patient.pk).exists())

        response = self.client.delete(self.detail_url)
        self.assertEqual(response.status_code, 404)

    def test_age(self):
        today = date.today()
        patient = Patient(date_of_birth=date(today.year - 30, 1, 1))
        self.assertEqual(patient.age, 30)
