"""
Account registration, login and admin provisioning.

Self-service registration always yields a plain ``user``; an admin
account can only be created by another admin or from the command line.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth.models import update_last_login
from django.db import IntegrityError, transaction

from clinic.exceptions import AuthenticationError, AuthorizationError, ConflictError
from clinic.models import User
from clinic.services.credentials import hash_password, verify_password

logger = logging.getLogger(__name__)


def require_admin(caller: Optional[User]) -> User:
    """Raise unless ``caller`` is an authenticated administrator."""
    if caller is None or not getattr(caller, 'is_authenticated', False):
        raise AuthenticationError()
    if caller.role != User.ROLE_ADMIN:
        raise AuthorizationError()
    return caller


def _create_account(*, email: str, password: str, first_name: str, last_name: str, role: str) -> User:
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise ConflictError('Email already exists')
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_staff=role == User.ROLE_ADMIN,
    )
    user.password = hash_password(password)
    try:
        with transaction.atomic():
            user.save()
    except IntegrityError as exc:
        raise ConflictError('Email already exists') from exc
    return user


def register_user(*, email: str, password: str, first_name: str, last_name: str) -> User:
    user = _create_account(
        email=email, password=password, first_name=first_name, last_name=last_name,
        role=User.ROLE_USER,
    )
    logger.info('Registered user %s', user.pk)
    return user


def create_admin(caller: Optional[User], *, email: str, password: str, first_name: str, last_name: str) -> User:
    require_admin(caller)
    user = _create_account(
        email=email, password=password, first_name=first_name, last_name=last_name,
        role=User.ROLE_ADMIN,
    )
    logger.info('Admin %s created admin account %s', caller.pk, user.pk)
    return user


def authenticate_user(*, email: str, password: str) -> User:
    """Return the user for valid credentials.

    Unknown email, wrong password and deactivated account all fail
    with the same message.
    """
    user = User.objects.filter(email__iexact=User.objects.normalize_email(email)).first()
    if user is None or not user.is_active or not verify_password(password, user.password):
        logger.info('Failed login attempt')
        raise AuthenticationError('Invalid credentials')
    update_last_login(None, user)
    logger.info('User %s logged in', user.pk)
    return user


def format_user(user: User) -> dict:
    return {
        'id': user.id,
        'email': user.email,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'role': user.role,
        'createdAt': user.created_at.isoformat() if user.created_at else None,
        'updatedAt': user.updated_at.isoformat() if user.updated_at else None,
    }
