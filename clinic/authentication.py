"""
Session-token authentication for the API.

The token is read from the ``token`` cookie first and from an
``Authorization: Bearer <token>`` header second.  After the signature
and expiry check the user is loaded from the database on every
request, so the role attached to ``request.user`` is always current.

The cookie helpers live here as well so that issuing and reading the
cookie stay in one place.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication

from clinic.exceptions import InvalidTokenError
from clinic.models import User
from clinic.services.credentials import verify_token

logger = logging.getLogger(__name__)


class CookieJWTAuthentication(JWTAuthentication):
    """Authenticate with the session cookie, falling back to a bearer header."""

    def get_raw_token_from_request(self, request):
        cookie = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if cookie:
            return cookie
        header = self.get_header(request)
        if header is None:
            return None
        return self.get_raw_token(header)

    def authenticate(self, request):
        raw_token = self.get_raw_token_from_request(request)
        if raw_token is None:
            return None
        try:
            user_id = verify_token(raw_token)
        except InvalidTokenError:
            raise exceptions.AuthenticationFailed('Invalid token', code='token_not_valid')

        user = User.objects.filter(pk=user_id).first()
        if user is None or not user.is_active:
            logger.info('Token for unknown or inactive user %s rejected', user_id)
            raise exceptions.AuthenticationFailed('Invalid token', code='user_not_found')
        return user, raw_token


class OptionalCookieJWTAuthentication(CookieJWTAuthentication):
    """Same as :class:`CookieJWTAuthentication` but a bad token means anonymous.

    Used on public endpoints so that a stale cookie never turns a
    public read into a 401.
    """

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except exceptions.AuthenticationFailed:
            return None


def set_auth_cookie(response, token: str) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=int(settings.SESSION_TOKEN_TTL.total_seconds()),
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )


def clear_auth_cookie(response) -> None:
    response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite=settings.AUTH_COOKIE_SAMESITE)
