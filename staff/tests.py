from django.test import TestCase, Client
from django.urls import reverse

from .models import Doctor, Role, Specialization, StaffMember


class RoleAndStaffApiTests(TestCase):

    def setUp(self):
        self.client = Client()
        self.role = Role.objects.create(name='Nurse', description='Ward nurse')

    def test_create_and_list_roles(self):
        response = self.client.post(
            reverse('staff:role_list'), {'roleName': 'Receptionist'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        role_id = response.json()['roleId']
        self.assertEqual(Role.objects.get(pk=role_id).name, 'Receptionist')

        names = [row['ROLE_NAME'] for row in self.client.get(reverse('staff:role_list')).json()['data']]
        self.assertEqual(sorted(names), ['Nurse', 'Receptionist'])

    def test_create_staff_member(self):
        response = self.client.post(reverse('staff:staff_list'), {
            'firstName': 'Siti',
            'lastName': 'Aminah',
            'roleId': self.role.pk,
            'phoneNum': '+60123456789',
            'shift': 'Morning',
        }, content_type='application/json')
        self.assertEqual(response.status_code, 201)

        row = self.client.get(reverse('staff:staff_detail', args=[response.json()['staffId']])).json()['data']
        self.assertEqual(row['ROLE_NAME'], 'Nurse')
        self.assertEqual(row['SHIFT'], 'Morning')

    def test_staff_member_needs_existing_role(self):
        response = self.client.post(reverse('staff:staff_list'), {
            'firstName': 'Siti', 'lastName': 'Aminah', 'roleId': 9999,
        }, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid fields: roleId')

    def test_staff_member_requires_role(self):
        response = self.client.post(reverse('staff:staff_list'), {
            'firstName': 'Siti', 'lastName': 'Aminah',
        }, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Required fields: roleId')

    def test_role_in_use_cannot_be_deleted(self):
        StaffMember.objects.create(first_name='Siti', last_name='Aminah', role=self.role)
        with self.assertLogs('core.api', level='ERROR'):
            response = self.client.delete(reverse('staff:role_detail', args=[self.role.pk]))
        self.assertEqual(response.status_code, 400)
        self.assertTrue(Role.objects.filter(pk=self.role.pk).exists())

    def test_unknown_staff_member(self):
        response = self.client.put(reverse('staff:staff_detail', args=[9999]), {}, content_type='application/json')
        self.assertEqual(response.status_code, 404)


class DoctorApiTests(TestCase):

    def setUp(self):
        self.client = Client()
        self.specialization = Specialization.objects.create(name='General Practice')

    def payload(self, **overrides):
        data = {
            'firstName': 'Tan',
            'lastName': 'Wei Ming',
            'specialization': self.specialization.pk,
            'email': 'tan@clinic.my',
            'phone': '+60129876543',
            'licenseNumber': 'MMC-12345',
        }
        data.update(overrides)
        return data

    def test_create_doctor(self):
        response = self.client.post(reverse('staff:doctor_list'), self.payload(), content_type='application/json')
        self.assertEqual(response.status_code, 201)
        doctor = Doctor.objects.get(pk=response.json()['doctorId'])
        self.assertEqual(doctor.status, 'Active')
        self.assertEqual(str(doctor), 'Dr. Tan Wei Ming')

        rows = self.client.get(reverse('staff:doctor_list')).json()['data']
        self.assertEqual(rows[0]['SPECIALIZATION'], 'General Practice')

    def test_doctor_requires_specialization(self):
        data = self.payload()
        del data['specialization']
        response = self.client.post(reverse('staff:doctor_list'), data, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('specialization', response.json()['message'])

    def test_specialization_crud(self):
        url = reverse('staff:specialization_detail', args=[self.specialization.pk])
        response = self.client.put(url, {'name': 'Family Medicine'}, content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(url).json()['data']['NAME'], 'Family Medicine')

        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(self.client.get(url).status_code, 404)
