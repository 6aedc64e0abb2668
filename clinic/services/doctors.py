from __future__ import annotations

import logging
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Q

from clinic.exceptions import ConflictError, NotFoundError
from clinic.models import Doctor, User
from clinic.services.users import require_admin

logger = logging.getLogger(__name__)

# Serializer field name -> model attribute
DOCTOR_FIELDS = {
    'first_name': 'first_name',
    'last_name': 'last_name',
    'email': 'email',
    'specialty': 'specialty',
    'phone': 'phone',
    'experience': 'experience_years',
    'is_active': 'is_active',
}


def list_doctors(*, include_inactive: bool = False, q: Optional[str] = None,
                 specialty: Optional[str] = None) -> list[Doctor]:
    qs = Doctor.objects.all()
    if not include_inactive:
        qs = qs.filter(is_active=True)
    if specialty:
        qs = qs.filter(specialty__iexact=specialty)
    if q:
        qs = qs.filter(Q(first_name__icontains=q) | Q(last_name__icontains=q))
    return list(qs.order_by('last_name', 'first_name', 'id'))


def get_doctor(doctor_id) -> Doctor:
    doctor = Doctor.objects.filter(pk=doctor_id).first()
    if doctor is None:
        raise NotFoundError('Doctor not found')
    return doctor


def _email_taken(email: str, exclude_pk=None) -> bool:
    qs = Doctor.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


def create_doctor(caller: Optional[User], data: dict) -> Doctor:
    require_admin(caller)
    if _email_taken(data['email']):
        raise ConflictError('A doctor with this email already exists')
    doctor = Doctor(**{DOCTOR_FIELDS[k]: v for k, v in data.items() if k in DOCTOR_FIELDS})
    try:
        with transaction.atomic():
            doctor.save()
    except IntegrityError as exc:
        raise ConflictError('A doctor with this email already exists') from exc
    logger.info('Admin %s added doctor %s', caller.pk, doctor.pk)
    return doctor


def update_doctor(caller: Optional[User], doctor_id, data: dict) -> Doctor:
    """Partially update a doctor, including (de)activation."""
    require_admin(caller)
    doctor = get_doctor(doctor_id)
    if 'email' in data and _email_taken(data['email'], exclude_pk=doctor.pk):
        raise ConflictError('A doctor with this email already exists')

    changed = []
    for key, value in data.items():
        attr = DOCTOR_FIELDS.get(key)
        if attr is None:
            continue
        setattr(doctor, attr, value)
        changed.append(attr)
    if changed:
        try:
            with transaction.atomic():
                doctor.save(update_fields=changed + ['updated_at'])
        except IntegrityError as exc:
            raise ConflictError('A doctor with this email already exists') from exc
        logger.info('Admin %s updated doctor %s: %s', caller.pk, doctor.pk, ', '.join(changed))
    return doctor


def format_doctor(doctor: Doctor) -> dict:
    return {
        'id': doctor.id,
        'firstName': doctor.first_name,
        'lastName': doctor.last_name,
        'email': doctor.email,
        'specialty': doctor.specialty,
        'phone': doctor.phone or None,
        'experience': doctor.experience_years,
        'isActive': doctor.is_active,
        'createdAt': doctor.created_at.isoformat() if doctor.created_at else None,
        'updatedAt': doctor.updated_at.isoformat() if doctor.updated_at else None,
    }
