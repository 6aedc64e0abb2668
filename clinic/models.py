"""
Database models for the MediCare backend.

Four entities make up the data model: users (patients and
administrators), doctors, appointments and messages.  Users, doctors
and appointments are never deleted through the API; references to
them are protected at the database level so that history survives.
Messages are the only rows an administrator may remove.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """Manager for the email-keyed user model."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields):
        from clinic.services.credentials import hash_password

        if not email:
            raise ValueError('An email address is required')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.password = hash_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_USER)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Account holder identified by email.

    ``role`` is either ``user`` (a patient) or ``admin``.  It is read
    from the database on every request and never copied into the
    session token, so a role change takes effect immediately.
    """
    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'User'),
        (ROLE_ADMIN, 'Administrator'),
    ]

    username = None
    email = models.EmailField('email address', unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    objects = UserManager()

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Doctor(models.Model):
    """A doctor patients can book.  Inactive doctors stay in history."""
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    specialty = models.CharField(max_length=100)
    phone = models.CharField(max_length=32, blank=True, default='')
    experience_years = models.PositiveIntegerField(null=True, blank=True)
    # booking lists filter on this
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['is_active', 'last_name'], name='doctor_active_lastname_idx'),
        ]

    def __str__(self) -> str:
        return f"Dr. {self.first_name} {self.last_name} ({self.specialty})"


class Appointment(models.Model):
    """A booking request from a user for a doctor.

    Status starts at ``pending``; an administrator moves it to
    ``accepted`` or ``rejected``, both of which are final.
    """
    STATUS_PENDING = 'pending'
    STATUS_ACCEPTED = 'accepted'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_ACCEPTED, 'Accepted'),
        (STATUS_REJECTED, 'Rejected'),
    )
    TERMINAL_STATUSES = frozenset({STATUS_ACCEPTED, STATUS_REJECTED})

    user = models.ForeignKey(User, on_delete=models.PROTECT, related_name='appointments')
    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='appointments')
    date = models.DateField()
    time = models.TimeField()
    reason = models.TextField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='appt_user_created_idx'),
            models.Index(fields=['status', 'created_at'], name='appt_status_created_idx'),
        ]

    def __str__(self) -> str:
        return f"Appointment #{self.pk} {self.date} {self.time} ({self.status})"


class Message(models.Model):
    """A message from a user to the staff inbox."""
    SUBJECT_MAX_LENGTH = 100

    user = models.ForeignKey(User, on_delete=models.PROTECT, related_name='messages')
    subject = models.CharField(max_length=SUBJECT_MAX_LENGTH, null=True, blank=True)
    content = models.TextField()
    is_read = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['is_read', 'created_at'], name='message_read_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.subject or '(no subject)'} ({self.user_id})"
