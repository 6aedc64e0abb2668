"""
Domain errors raised by the clinic services.

Each error carries the HTTP status and machine code it maps to;
``clinic.handlers.api_exception_handler`` renders them.  No DRF imports
here: DRF imports the authentication classes, which use this module,
while loading its own views.
"""
from __future__ import annotations


class ClinicError(Exception):
    status_code = 400
    code = 'error'
    default_message = 'Request failed'

    def __init__(self, message: str | None = None, *, fields: dict | None = None):
        self.message = message or self.default_message
        self.fields = fields
        super().__init__(self.message)


class ValidationError(ClinicError):
    status_code = 400
    code = 'invalid'
    default_message = 'Invalid input'


class InvalidStatusError(ValidationError):
    code = 'invalid_status'
    default_message = 'Invalid status'


class ConflictError(ClinicError):
    status_code = 400
    code = 'conflict'
    default_message = 'Already exists'


class AuthenticationError(ClinicError):
    status_code = 401
    code = 'not_authenticated'
    default_message = 'Authentication required'


class InvalidTokenError(AuthenticationError):
    code = 'token_not_valid'
    default_message = 'Invalid token'


class AuthorizationError(ClinicError):
    status_code = 403
    code = 'permission_denied'
    default_message = 'Admin access required'


class NotFoundError(ClinicError):
    status_code = 404
    code = 'not_found'
    default_message = 'Not found'


class InvalidTransitionError(ClinicError):
    status_code = 409
    code = 'invalid_transition'
    default_message = 'Status change not allowed'


class PersistenceError(ClinicError):
    status_code = 500
    code = 'persistence_error'
    default_message = 'Service temporarily unavailable'


class CredentialError(ClinicError):
    status_code = 500
    code = 'credential_error'
    default_message = 'Could not process credentials'
