"""
Authentication views.

Registration, login, logout, the current-user lookup and admin account
creation.  Register, login and logout run without any authentication
class so that an expired cookie never blocks them.  The session token
is handed out only as an http-only cookie.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
    throttle_classes,
)
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from clinic.authentication import clear_auth_cookie, set_auth_cookie
from clinic.permissions import IsAdminRole
from clinic.serializers.auth import LoginSerializer, RegisterSerializer
from clinic.services.credentials import issue_token
from clinic.services.users import authenticate_user, create_admin, format_user, register_user


class LoginRateThrottle(AnonRateThrottle):
    scope = 'login'


def _session_response(user, status_code: int) -> Response:
    resp = Response(format_user(user), status=status_code)
    set_auth_cookie(resp, issue_token(user.pk))
    return resp


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def register_view(request):
    """Create a plain user account and start a session for it.

    Accepts ``email``, ``password``, ``firstName`` and ``lastName``.
    Any ``role`` in the body is ignored.
    """
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = register_user(**s.validated_data)
    return _session_response(user, status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    """Log in with email and password; sets the ``token`` cookie."""
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = authenticate_user(**s.validated_data)
    return _session_response(user, status.HTTP_200_OK)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def logout_view(request):
    resp = Response({'ok': True, 'message': 'Logged out successfully'})
    clear_auth_cookie(resp)
    return resp


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user_view(request):
    return Response(format_user(request.user))


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def create_admin_view(request):
    """Create another administrator account.  Admin only."""
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user = create_admin(request.user, **s.validated_data)
    return Response(format_user(user), status=status.HTTP_201_CREATED)
