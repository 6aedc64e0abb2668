"""
Unified API exception handler.

Wired into DRF via ``REST_FRAMEWORK['EXCEPTION_HANDLER']``; turns the
domain errors, DRF's own exceptions and database failures into the
common ``{'ok': False, 'error': {...}}`` envelope.
"""
from __future__ import annotations

import logging

from django.db import DatabaseError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from clinic.exceptions import ClinicError, PersistenceError

logger = logging.getLogger(__name__)


def _error(code: str, message, status: int, fields=None) -> Response:
    body: dict = {'code': code, 'message': message}
    if fields:
        body['fields'] = fields
    return Response({'ok': False, 'error': body}, status=status)


def api_exception_handler(exc, context):
    if isinstance(exc, ClinicError):
        if exc.status_code >= 500:
            logger.error('%s in %s: %s', type(exc).__name__, _view_name(context), exc.message)
        return _error(exc.code, exc.message, exc.status_code, exc.fields)

    if isinstance(exc, DatabaseError):
        logger.exception('Database error in %s', _view_name(context))
        return _error(PersistenceError.code, PersistenceError.default_message, 500)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('Unhandled error in %s', _view_name(context))
        return _error('server_error', 'Internal server error', 500)

    # normalize response
    codes = exc.get_codes() if hasattr(exc, 'get_codes') else None
    if isinstance(resp.data, dict) and 'detail' in resp.data:
        code = codes.get('detail') if isinstance(codes, dict) else codes
        resp.data = {'ok': False, 'error': {'code': code or 'api_error', 'message': str(resp.data['detail'])}}
    else:
        resp.data = {
            'ok': False,
            'error': {'code': 'invalid', 'message': 'Invalid input', 'fields': resp.data},
        }
    return resp


def _view_name(context) -> str:
    view = (context or {}).get('view')
    return type(view).__name__ if view is not None else 'unknown view'
