# appointments/services.py

import logging

from django.conf import settings
from django.db import IntegrityError, transaction

from core.exceptions import InvalidStatusTransition, NotFound, SlotUnavailable
from .lifecycle import CANCELLED, SCHEDULED, check_transition
from .models import Appointment

logger = logging.getLogger(__name__)


def slot_is_taken(doctor, appointment_date, appointment_time, exclude_pk=None):
    """True when a non-cancelled appointment already holds the slot."""
    taken = Appointment.objects.active().in_slot(doctor, appointment_date, appointment_time)
    if exclude_pk is not None:
        taken = taken.exclude(pk=exclude_pk)
    return taken.exists()


def _raise_if_slot_conflict(exc, doctor, appointment_date, appointment_time, exclude_pk=None):
    """
    Called after a write failed with IntegrityError. If the slot is now held
    by another appointment, the failure was the slot constraint losing a race
    and is reported as SlotUnavailable; any other integrity error propagates.
    """
    occupied = Appointment.objects.active().in_slot(doctor, appointment_date, appointment_time)
    if exclude_pk is not None:
        occupied = occupied.exclude(pk=exclude_pk)
    if occupied.exists():
        logger.info(
            "Slot constraint rejected booking for doctor %s on %s %s",
            doctor.pk, appointment_date, appointment_time
        )
        raise SlotUnavailable() from exc
    raise exc


def _get_for_update(appointment_id):
    try:
        return Appointment.objects.select_for_update().get(pk=appointment_id)
    except Appointment.DoesNotExist:
        raise NotFound('Appointment not found')


def _enforce_transition(appointment, status):
    try:
        check_transition(appointment.status, status)
    except InvalidStatusTransition:
        logger.info("Appointment %s: rejected status change %s -> %s", appointment.pk, appointment.status, status)
        raise


def book_appointment(*, patient, doctor, appointment_date, appointment_time,
                     staff=None, room=None, reason_to_visit=None):
    """
    Creates a Scheduled appointment unless the doctor already has a
    non-cancelled appointment at the same date and time.
    """
    try:
        with transaction.atomic():
            if slot_is_taken(doctor, appointment_date, appointment_time):
                logger.info(
                    "Booking rejected: doctor %s already booked on %s %s",
                    doctor.pk, appointment_date, appointment_time
                )
                raise SlotUnavailable()

            appointment = Appointment.objects.create(
                staff=staff,
                patient=patient,
                doctor=doctor,
                room=room,
                appointment_date=appointment_date,
                appointment_time=appointment_time,
                reason_to_visit=reason_to_visit or None,
                status=SCHEDULED,
            )
    except IntegrityError as exc:
        _raise_if_slot_conflict(exc, doctor, appointment_date, appointment_time)

    logger.info("Appointment %s booked for patient %s with doctor %s", appointment.pk, patient.pk, doctor.pk)
    return appointment


def change_status(appointment_id, status, strict=None):
    """
    Writes a new status. In strict mode the lifecycle transition table is
    enforced; otherwise any status string is accepted.
    """
    if strict is None:
        strict = settings.APPOINTMENT_STRICT_TRANSITIONS

    try:
        with transaction.atomic():
            appointment = _get_for_update(appointment_id)
            previous = appointment.status
            if strict:
                _enforce_transition(appointment, status)
            appointment.status = status
            appointment.save(update_fields=['status', 'updated_at'])
    except IntegrityError as exc:
        _raise_if_slot_conflict(
            exc, appointment.doctor, appointment.appointment_date, appointment.appointment_time,
            exclude_pk=appointment.pk
        )

    logger.info("Appointment %s status changed: %s -> %s", appointment.pk, previous, status)
    return appointment


def update_appointment(appointment_id, *, patient, doctor, appointment_date, appointment_time,
                       staff=None, room=None, reason_to_visit=None, status=None, strict=None):
    """Replaces every field of an appointment; a missing status keeps the current one."""
    if strict is None:
        strict = settings.APPOINTMENT_STRICT_TRANSITIONS

    try:
        with transaction.atomic():
            appointment = _get_for_update(appointment_id)
            if status and status != appointment.status:
                if strict:
                    _enforce_transition(appointment, status)
                appointment.status = status

            if appointment.status != CANCELLED and slot_is_taken(
                doctor, appointment_date, appointment_time, exclude_pk=appointment.pk
            ):
                raise SlotUnavailable()

            appointment.staff = staff
            appointment.patient = patient
            appointment.doctor = doctor
            appointment.room = room
            appointment.appointment_date = appointment_date
            appointment.appointment_time = appointment_time
            appointment.reason_to_visit = reason_to_visit or None
            appointment.save()
    except IntegrityError as exc:
        _raise_if_slot_conflict(exc, doctor, appointment_date, appointment_time, exclude_pk=appointment_id)

    logger.info("Appointment %s updated", appointment.pk)
    return appointment


def delete_appointment(appointment_id):
    """
    Hard delete. Medical records and invoices that reference the appointment
    are left in place.
    """
    deleted, __ = Appointment.objects.filter(pk=appointment_id).delete()
    if not deleted:
        raise NotFound('Appointment not found')
    logger.info("Appointment %s deleted", appointment_id)
