"""
Appointment booking and triage.

A user books an appointment for themselves; it always starts as
``pending``.  Only an administrator may move it on, and only once:
``accepted`` and ``rejected`` are final.  Re-applying the current
status is accepted as a no-op.  There is no slot conflict check, so
two bookings for the same doctor and time can coexist.
"""
from __future__ import annotations

import datetime
import logging
from typing import Optional

from django.db import transaction

from clinic.exceptions import (
    InvalidStatusError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from clinic.models import Appointment, Doctor, User
from clinic.services.doctors import format_doctor
from clinic.services.users import format_user, require_admin

logger = logging.getLogger(__name__)

VALID_STATUSES = tuple(value for value, _ in Appointment.STATUS_CHOICES)


def can_transition(current: str, new: str) -> bool:
    if current == new:
        return True
    return current == Appointment.STATUS_PENDING and new in Appointment.TERMINAL_STATUSES


def create_appointment(caller: User, *, doctor_id, date: datetime.date, time: datetime.time,
                       reason: str) -> Appointment:
    # Inactive doctors are still bookable by id; only the booking list hides them.
    doctor = Doctor.objects.filter(pk=doctor_id).first()
    if doctor is None:
        raise ValidationError('Doctor not found', fields={'doctorId': ['Doctor not found']})
    appointment = Appointment.objects.create(
        user=caller,
        doctor=doctor,
        date=date,
        time=time,
        reason=reason,
        status=Appointment.STATUS_PENDING,
    )
    logger.info('User %s booked appointment %s with doctor %s', caller.pk, appointment.pk, doctor.pk)
    return appointment


def list_appointments(caller: User, status: Optional[str] = None) -> list[Appointment]:
    """Appointments visible to ``caller``, newest first.

    Admins see everything and may filter by status; anyone else sees
    only their own bookings and the filter is ignored.
    """
    qs = Appointment.objects.select_related('user', 'doctor')
    if caller.role == User.ROLE_ADMIN:
        if status and status != 'all':
            if status not in VALID_STATUSES:
                raise InvalidStatusError()
            qs = qs.filter(status=status)
    else:
        qs = qs.filter(user=caller)
    return list(qs.order_by('-created_at', '-id'))


def set_status(caller: Optional[User], appointment_id, new_status) -> Appointment:
    require_admin(caller)
    if new_status not in VALID_STATUSES:
        raise InvalidStatusError()

    with transaction.atomic():
        appointment = (
            Appointment.objects.select_for_update()
            .select_related('user', 'doctor')
            .filter(pk=appointment_id)
            .first()
        )
        if appointment is None:
            raise NotFoundError('Appointment not found')
        if appointment.status == new_status:
            return appointment
        if not can_transition(appointment.status, new_status):
            raise InvalidTransitionError(
                f'Appointment is already {appointment.status}'
            )
        previous = appointment.status
        appointment.status = new_status
        appointment.save(update_fields=['status', 'updated_at'])

    logger.info('Admin %s moved appointment %s from %s to %s', caller.pk, appointment.pk, previous, new_status)
    return appointment


def _format_time(value: datetime.time) -> str:
    # seconds only when the booking carried them
    return value.strftime('%H:%M:%S' if value.second else '%H:%M')


def format_appointment(appointment: Appointment, *, with_relations: bool = False) -> dict:
    data = {
        'id': appointment.id,
        'userId': appointment.user_id,
        'doctorId': appointment.doctor_id,
        'date': appointment.date.isoformat(),
        'time': _format_time(appointment.time),
        'reason': appointment.reason,
        'status': appointment.status,
        'createdAt': appointment.created_at.isoformat() if appointment.created_at else None,
        'updatedAt': appointment.updated_at.isoformat() if appointment.updated_at else None,
    }
    if with_relations:
        data['user'] = format_user(appointment.user)
        data['doctor'] = format_doctor(appointment.doctor)
    return data
