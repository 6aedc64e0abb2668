"""
Django admin registrations for the clinic models.

Hooks the models into Django's built-in admin interface so that staff
can inspect data via the ``/admin/`` URL.  Deletion is switched off for
every model except messages, matching the API.
"""

from django.contrib import admin

from .models import Appointment, Doctor, Message, User


class NoDeleteAdmin(admin.ModelAdmin):
    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(User)
class UserAdmin(NoDeleteAdmin):
    list_display = ('email', 'first_name', 'last_name', 'role', 'is_active', 'created_at')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('email',)
    exclude = ('password',)


@admin.register(Doctor)
class DoctorAdmin(NoDeleteAdmin):
    list_display = ('last_name', 'first_name', 'specialty', 'email', 'is_active')
    list_filter = ('specialty', 'is_active')
    search_fields = ('first_name', 'last_name', 'email')


@admin.register(Appointment)
class AppointmentAdmin(NoDeleteAdmin):
    list_display = ('id', 'user', 'doctor', 'date', 'time', 'status', 'created_at')
    list_filter = ('status', 'date')
    search_fields = ('user__email', 'doctor__last_name', 'reason')


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'subject', 'is_read', 'created_at')
    list_filter = ('is_read',)
    search_fields = ('subject', 'content', 'user__email')
