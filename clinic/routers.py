"""
URL mappings for the MediCare API.

Paths match the ones the web client calls, without trailing slashes.
Users, doctors and appointments have no delete route; messages are
the only deletable resource.
"""
from django.urls import path, include

from .auth_views import (
    create_admin_view,
    current_user_view,
    login_view,
    logout_view,
    register_view,
)
from .views import health
from .views.appointments import appointment_status, appointments
from .views.dashboard import admin_dashboard_stats
from .views.doctors import doctor_detail, doctors
from .views.messages import message_detail, message_read, messages


urlpatterns = [
    # exposes /metrics
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Authentication
    path('api/register', register_view, name='register_view'),
    path('api/login', login_view, name='login_view'),
    path('api/logout', logout_view, name='logout_view'),
    path('api/auth/user', current_user_view, name='current_user_view'),
    path('api/admin/create', create_admin_view, name='create_admin_view'),
    # Doctors
    path('api/doctors', doctors, name='doctors'),
    path('api/doctors/<int:pk>', doctor_detail, name='doctor_detail'),
    # Appointments
    path('api/appointments', appointments, name='appointments'),
    path('api/appointments/<int:pk>/status', appointment_status, name='appointment_status'),
    # Messages
    path('api/messages', messages, name='messages'),
    path('api/messages/<int:pk>', message_detail, name='message_detail'),
    path('api/messages/<int:pk>/read', message_read, name='message_read'),
    # Dashboard
    path('api/dashboard/stats', admin_dashboard_stats, name='dashboard_stats'),
]
