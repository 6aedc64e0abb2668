"""Clinic application for the MediCare backend.

This package contains models, serializers, services, views and route
registrations for accounts, the doctor directory, appointments and the
staff inbox.
"""
