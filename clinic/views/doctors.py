"""
Doctor directory endpoints.

``GET /api/doctors`` is public and lists active doctors ordered by last
name.  Admins may add ``includeInactive=1`` to see the whole directory.
Creating and updating doctors is admin only.  There is no delete.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.authentication import OptionalCookieJWTAuthentication
from clinic.models import User
from clinic.permissions import IsAdminRole
from clinic.serializers.doctors import DoctorListQuerySerializer, DoctorSerializer
from clinic.services.doctors import create_doctor, format_doctor, list_doctors, update_doctor
from clinic.services.users import require_admin


@api_view(['GET', 'POST'])
@authentication_classes([OptionalCookieJWTAuthentication])
@permission_classes([AllowAny])
def doctors(request):
    user = request.user
    if request.method == 'GET':
        q = DoctorListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        is_admin = bool(user and user.role == User.ROLE_ADMIN)
        data = list_doctors(
            include_inactive=is_admin and q.validated_data.get('includeInactive', False),
            q=(q.validated_data.get('q') or '').strip() or None,
            specialty=(q.validated_data.get('specialty') or '').strip() or None,
        )
        return Response([format_doctor(d) for d in data])

    require_admin(user)
    s = DoctorSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = create_doctor(user, s.validated_data)
    return Response(format_doctor(doctor), status=status.HTTP_201_CREATED)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def doctor_detail(request, pk: int):
    """Partially update a doctor; ``{"isActive": false}`` deactivates."""
    s = DoctorSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    doctor = update_doctor(request.user, pk, s.validated_data)
    return Response(format_doctor(doctor))
