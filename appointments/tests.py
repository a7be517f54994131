import threading
import time as clock
from datetime import date, time
from unittest import mock

from django.db import OperationalError, connection
from django.test import TestCase, TransactionTestCase, Client, override_settings
from django.urls import reverse

from core.exceptions import InvalidStatusTransition, SlotUnavailable
from patients.models import Patient
from staff.models import Doctor, Role, Specialization, StaffMember
from . import services
from .lifecycle import CANCELLED, CHECKED_IN, COMPLETED, NO_SHOW, SCHEDULED, check_transition
from .models import Appointment, Room


class AppointmentFixtureMixin:

    @classmethod
    def setUpTestData(cls):
        cls.patient = Patient.objects.create(
            ic_number='900101-14-5678',
            first_name='Aisyah',
            last_name='Rahman',
            date_of_birth=date(1990, 1, 1),
            gender='F',
            phone_number='+60123456789',
            email='aisyah@example.my',
        )
        specialization = Specialization.objects.create(name='General Practice')
        cls.doctor = Doctor.objects.create(
            first_name='Tan', last_name='Wei Ming', specialization=specialization,
            email='tan@clinic.my', contact_number='+60129876543', license_number='MMC-1',
        )
        cls.other_doctor = Doctor.objects.create(
            first_name='Priya', last_name='Nair', specialization=specialization,
            email='priya@clinic.my', contact_number='+60129876544', license_number='MMC-2',
        )
        cls.staff = StaffMember.objects.create(
            first_name='Siti', last_name='Aminah', role=Role.objects.create(name='Nurse')
        )
        cls.room = Room.objects.create(room_type='Consultation')

    def setUp(self):
        self.client = Client()

    def booking(self, **overrides):
        data = {
            'patientIC': self.patient.pk,
            'doctorId': self.doctor.pk,
            'appointmentDate': '2025-06-01',
            'appointmentTime': '09:00',
            'reasonToVisit': 'Fever',
        }
        data.update(overrides)
        return data

    def book(self, **overrides):
        return self.client.post(
            reverse('appointments:appointment_list'), self.booking(**overrides), content_type='application/json'
        )

    def create_appointment(self, status=SCHEDULED, **fields):
        values = {
            'patient': self.patient,
            'doctor': self.doctor,
            'appointment_date': date(2025, 6, 1),
            'appointment_time': time(9, 0),
            'status': status,
        }
        values.update(fields)
        return Appointment.objects.create(**values)

    def set_status(self, appointment, status):
        return self.client.patch(
            reverse('appointments:appointment_status', args=[appointment.pk]),
            {'status': status},
            content_type='application/json'
        )


class BookingTests(AppointmentFixtureMixin, TestCase):

    def test_book_appointment(self):
        response = self.book()
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['message'], 'Appointment created successfully')
        appointment = Appointment.objects.get(pk=body['appointmentId'])
        self.assertEqual(appointment.status, SCHEDULED)
        self.assertEqual(appointment.appointment_time, time(9, 0))
        self.assertIsNone(appointment.staff)

    def test_missing_fields(self):
        response = self.client.post(
            reverse('appointments:appointment_list'), {'patientIC': self.patient.pk}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        message = response.json()['message']
        self.assertTrue(message.startswith('Required fields:'))
        for name in ('doctorId', 'appointmentDate', 'appointmentTime'):
            self.assertIn(name, message)
        self.assertEqual(Appointment.objects.count(), 0)

    def test_unknown_patient(self):
        response = self.book(patientIC='does-not-exist')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid fields: patientIC')

    def test_double_booking_rejected(self):
        self.assertEqual(self.book().status_code, 201)
        response = self.book()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'This time slot is already booked for this doctor')
        self.assertEqual(Appointment.objects.count(), 1)

    def test_same_slot_other_doctor_allowed(self):
        self.assertEqual(self.book().status_code, 201)
        self.assertEqual(self.book(doctorId=self.other_doctor.pk).status_code, 201)

    def test_seconds_in_time_are_the_same_slot(self):
        self.assertEqual(self.book().status_code, 201)
        self.assertEqual(self.book(appointmentTime='09:00:00').status_code, 400)

    def test_cancelled_appointment_frees_slot(self):
        self.create_appointment(status=CANCELLED)
        response = self.book()
        self.assertEqual(response.status_code, 201)

    def test_cancel_then_rebook(self):
        first = Appointment.objects.get(pk=self.book().json()['appointmentId'])
        self.assertEqual(self.set_status(first, CANCELLED).status_code, 200)
        self.assertEqual(self.book().status_code, 201)
        self.assertEqual(Appointment.objects.active().count(), 1)

    def test_race_lost_at_insert_reports_slot_taken(self):
        # Another request committed the slot between our check and our insert.
        self.create_appointment()
        with mock.patch('appointments.services.slot_is_taken', return_value=False):
            response = self.book()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'This time slot is already booked for this doctor')
        self.assertEqual(Appointment.objects.count(), 1)

    def test_service_raises_slot_unavailable(self):
        self.create_appointment()
        with self.assertRaises(SlotUnavailable):
            services.book_appointment(
                patient=self.patient, doctor=self.doctor,
                appointment_date=date(2025, 6, 1), appointment_time=time(9, 0),
            )


class ListingTests(AppointmentFixtureMixin, TestCase):

    def test_listing_tolerates_missing_staff_and_room(self):
        self.create_appointment()
        rows = self.client.get(reverse('appointments:appointment_list')).json()['data']
        self.assertEqual(len(rows), 1)
        row = rows[0]
        self.assertEqual(row['PATIENT_NAME'], 'Aisyah Rahman')
        self.assertEqual(row['DOCTOR_NAME'], 'Tan Wei Ming')
        self.assertEqual(row['PATIENT_PHONE'], '+60123456789')
        self.assertEqual(row['APPOINTMENT_TIME'], '09:00')
        self.assertIsNone(row['STAFF_NAME'])
        self.assertIsNone(row['ROOM_TYPE'])

    def test_listing_ordered_newest_first(self):
        self.create_appointment(appointment_date=date(2025, 6, 1))
        self.create_appointment(appointment_date=date(2025, 6, 3))
        self.create_appointment(appointment_date=date(2025, 6, 3), appointment_time=time(14, 30))
        rows = self.client.get(reverse('appointments:appointment_list')).json()['data']
        self.assertEqual(
            [(row['APPOINTMENT_DATE'], row['APPOINTMENT_TIME']) for row in rows],
            [('2025-06-03', '14:30'), ('2025-06-03', '09:00'), ('2025-06-01', '09:00')]
        )

    def test_by_date(self):
        self.create_appointment(appointment_time=time(11, 0), staff=self.staff, room=self.room)
        self.create_appointment(appointment_time=time(8, 30))
        self.create_appointment(appointment_date=date(2025, 6, 2))
        response = self.client.get(reverse('appointments:appointments_by_date', args=['2025-06-01']))
        rows = response.json()['data']
        self.assertEqual([row['APPOINTMENT_TIME'] for row in rows], ['08:30', '11:00'])
        self.assertEqual(rows[1]['STAFF_NAME'], 'Siti Aminah')
        self.assertEqual(rows[1]['ROOM_TYPE'], 'Consultation')

    def test_by_date_invalid(self):
        response = self.client.get(reverse('appointments:appointments_by_date', args=['2025-13-45']))
        self.assertEqual(response.status_code, 400)

    def test_detail_includes_patient_email(self):
        appointment = self.create_appointment()
        response = self.client.get(reverse('appointments:appointment_detail', args=[appointment.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['PATIENT_EMAIL'], 'aisyah@example.my')

    def test_detail_not_found(self):
        response = self.client.get(reverse('appointments:appointment_detail', args=[9999]))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'Appointment not found')


class StatusTests(AppointmentFixtureMixin, TestCase):

    def test_permissive_mode_accepts_any_status(self):
        appointment = self.create_appointment(status=COMPLETED)
        response = self.set_status(appointment, SCHEDULED)
        self.assertEqual(response.status_code, 200)
        appointment.refresh_from_db()
        self.assertEqual(appointment.status, SCHEDULED)

    def test_status_required(self):
        appointment = self.create_appointment()
        response = self.client.patch(
            reverse('appointments:appointment_status', args=[appointment.pk]), {}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Status is required')

    def test_unknown_appointment_is_404(self):
        response = self.client.patch(
            reverse('appointments:appointment_status', args=[9999]),
            {'status': CANCELLED},
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)

    @override_settings(APPOINTMENT_STRICT_TRANSITIONS=True)
    def test_strict_mode_follows_lifecycle(self):
        appointment = self.create_appointment()
        self.assertEqual(self.set_status(appointment, CHECKED_IN).status_code, 200)
        self.assertEqual(self.set_status(appointment, COMPLETED).status_code, 200)

        response = self.set_status(appointment, SCHEDULED)
        self.assertEqual(response.status_code, 400)
        self.assertIn('terminal', response.json()['message'])
        appointment.refresh_from_db()
        self.assertEqual(appointment.status, COMPLETED)

    @override_settings(APPOINTMENT_STRICT_TRANSITIONS=True)
    def test_strict_mode_rejects_unknown_status(self):
        appointment = self.create_appointment()
        response = self.set_status(appointment, 'Rescheduled')
        self.assertEqual(response.status_code, 400)
        self.assertIn('Unknown status', response.json()['message'])

    def test_reopening_cancelled_appointment_into_taken_slot(self):
        cancelled = self.create_appointment(status=CANCELLED)
        self.create_appointment()
        response = self.set_status(cancelled, SCHEDULED)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'This time slot is already booked for this doctor')
        cancelled.refresh_from_db()
        self.assertEqual(cancelled.status, CANCELLED)

    def test_check_transition_table(self):
        check_transition(SCHEDULED, NO_SHOW)
        check_transition(CHECKED_IN, COMPLETED)
        with self.assertRaises(InvalidStatusTransition):
            check_transition(SCHEDULED, COMPLETED)
        with self.assertRaises(InvalidStatusTransition):
            check_transition(NO_SHOW, SCHEDULED)


class UpdateAndDeleteTests(AppointmentFixtureMixin, TestCase):

    def replace(self, appointment, **overrides):
        return self.client.put(
            reverse('appointments:appointment_detail', args=[appointment.pk]),
            self.booking(**overrides),
            content_type='application/json'
        )

    def test_full_update_keeps_status_when_omitted(self):
        appointment = self.create_appointment(status=CHECKED_IN)
        response = self.replace(appointment, appointmentTime='10:15', roomId=self.room.pk, staffId=self.staff.pk)
        self.assertEqual(response.status_code, 200)
        appointment.refresh_from_db()
        self.assertEqual(appointment.appointment_time, time(10, 15))
        self.assertEqual(appointment.room, self.room)
        self.assertEqual(appointment.status, CHECKED_IN)

    def test_update_into_taken_slot(self):
        self.create_appointment(appointment_time=time(10, 0))
        appointment = self.create_appointment()
        response = self.replace(appointment, appointmentTime='10:00')
        self.assertEqual(response.status_code, 400)
        appointment.refresh_from_db()
        self.assertEqual(appointment.appointment_time, time(9, 0))

    def test_update_same_slot_is_not_a_conflict(self):
        appointment = self.create_appointment()
        response = self.replace(appointment, reasonToVisit='Follow-up')
        self.assertEqual(response.status_code, 200)

    @override_settings(APPOINTMENT_STRICT_TRANSITIONS=True)
    def test_update_cannot_reopen_in_strict_mode(self):
        appointment = self.create_appointment(status=CANCELLED)
        response = self.replace(appointment, status=SCHEDULED)
        self.assertEqual(response.status_code, 400)

    def test_update_unknown(self):
        response = self.client.put(
            reverse('appointments:appointment_detail', args=[9999]), self.booking(), content_type='application/json'
        )
        self.assertEqual(response.status_code, 404)

    def test_delete(self):
        appointment = self.create_appointment()
        url = reverse('appointments:appointment_detail', args=[appointment.pk])
        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertEqual(self.client.delete(url).status_code, 404)


class RoomApiTests(TestCase):

    def test_room_crud(self):
        client = Client()
        response = client.post(reverse('appointments:room_list'), {'roomType': 'Procedure'}, content_type='application/json')
        self.assertEqual(response.status_code, 201)
        room = Room.objects.get(pk=response.json()['roomId'])
        self.assertEqual(room.availability_status, 'Available')

        response = client.post(reverse('appointments:room_list'), {}, content_type='application/json')
        self.assertEqual(response.json()['message'], 'Required fields: roomType')


class ConcurrentBookingTests(TransactionTestCase):
    """Parallel bookings of one slot on real connections: exactly one wins."""

    attempts = 8

    def setUp(self):
        self.patient = Patient.objects.create(
            ic_number='900101-14-5678', first_name='Aisyah', last_name='Rahman',
            date_of_birth=date(1990, 1, 1), gender='F', phone_number='+60123456789',
        )
        self.doctor = Doctor.objects.create(
            first_name='Tan', last_name='Wei Ming',
            specialization=Specialization.objects.create(name='General Practice'),
            email='tan@clinic.my', contact_number='+60129876543', license_number='MMC-1',
        )

    def attempt_booking(self, barrier, outcomes):
        barrier.wait()
        try:
            for __ in range(100):
                try:
                    services.book_appointment(
                        patient=self.patient, doctor=self.doctor,
                        appointment_date=date(2025, 6, 1), appointment_time=time(9, 0),
                    )
                    outcomes.append('booked')
                    return
                except SlotUnavailable:
                    outcomes.append('rejected')
                    return
                except OperationalError:
                    # SQLite reports a locked table instead of waiting for it.
                    clock.sleep(0.01)
            outcomes.append('gave up')
        finally:
            connection.close()

    def test_parallel_bookings_of_one_slot(self):
        barrier = threading.Barrier(self.attempts)
        outcomes = []
        threads = [
            threading.Thread(target=self.attempt_booking, args=(barrier, outcomes))
            for __ in range(self.attempts)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(outcomes.count('booked'), 1)
        self.assertEqual(outcomes.count('rejected'), self.attempts - 1)
        self.assertEqual(Appointment.objects.count(), 1)
