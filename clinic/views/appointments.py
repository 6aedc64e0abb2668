"""
Appointment endpoints.

Any signed-in user may book and list appointments; the list is scoped
to the caller unless they are an administrator.  Status changes are
admin only.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.serializers.appointments import AppointmentCreateSerializer
from clinic.services.appointments import (
    create_appointment,
    format_appointment,
    list_appointments,
    set_status,
)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments(request):
    if request.method == 'GET':
        status_filter = (request.query_params.get('status') or '').strip() or None
        data = list_appointments(request.user, status=status_filter)
        return Response([format_appointment(a, with_relations=True) for a in data])

    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appointment = create_appointment(request.user, **s.validated_data)
    return Response(format_appointment(appointment), status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def appointment_status(request, pk: int):
    new_status = request.data.get('status') if isinstance(request.data, dict) else None
    appointment = set_status(request.user, pk, new_status)
    return Response(format_appointment(appointment, with_relations=True))
