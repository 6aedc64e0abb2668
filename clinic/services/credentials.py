"""
Password hashing and session token handling.

Hashing goes through Django's configured password hashers and tokens
are simplejwt access tokens.  A token carries the user id and the
standard timing claims only; the caller's role is always re-read from
the database.
"""
from __future__ import annotations

from django.contrib.auth.hashers import check_password, make_password
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from clinic.exceptions import CredentialError, InvalidTokenError


def hash_password(plaintext: str) -> str:
    try:
        return make_password(plaintext)
    except (TypeError, ValueError) as exc:
        raise CredentialError() from exc


def verify_password(plaintext: str, digest: str) -> bool:
    """Constant-time check of ``plaintext`` against ``digest``.

    An empty or unusable digest simply fails the check.
    """
    if not plaintext or not digest:
        return False
    return check_password(plaintext, digest)


def issue_token(user_id) -> str:
    token = AccessToken()
    token[api_settings.USER_ID_CLAIM] = str(user_id)
    return str(token)


def verify_token(raw_token) -> str:
    """Return the user id bound to ``raw_token``.

    Expired, malformed, wrongly typed or badly signed tokens all raise
    the same :class:`InvalidTokenError`.
    """
    try:
        token = AccessToken(raw_token)
    except TokenError as exc:
        raise InvalidTokenError() from exc
    user_id = token.get(api_settings.USER_ID_CLAIM)
    if not user_id:
        raise InvalidTokenError()
    return user_id
