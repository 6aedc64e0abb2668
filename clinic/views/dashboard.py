"""
Administrative dashboard endpoint.

Returns the four headline counters shown on the admin dashboard.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.services.dashboard import dashboard_stats


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard_stats(request):
    return Response(dashboard_stats(request.user))
