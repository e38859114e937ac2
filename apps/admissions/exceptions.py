# apps/admissions/exceptions.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AdmissionError(Exception):
    """Base class for admission workflow errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Admission workflow error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response_data(self):
        return {'success': False, 'error': self.message}


class NotFoundError(AdmissionError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, admission_id):
        self.admission_id = admission_id
        super().__init__(f'Admission {admission_id} not found')


class ValidationError(AdmissionError):
    """Payload rejected; ``errors`` maps each offending field to its messages."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors, message='Validation failed'):
        self.errors = {field: [str(msg) for msg in _as_list(msgs)] for field, msgs in dict(errors).items()}
        super().__init__(message)

    @property
    def fields(self):
        return sorted(self.errors)

    def to_response_data(self):
        return {'success': False, 'error': self.message, 'errors': self.errors}


class InvalidTransitionError(AdmissionError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current_status, attempted_status):
        self.current_status = current_status
        self.attempted_status = attempted_status
        super().__init__(f'Cannot move admission from {current_status} to {attempted_status}')

    def to_response_data(self):
        return {
            'success': False,
            'error': self.message,
            'currentStatus': str(self.current_status),
            'attemptedStatus': str(self.attempted_status),
        }


class EnrollmentError(AdmissionError):
    """The admission could not be converted into a student record."""
    default_message = 'Enrollment failed'

    def to_response_data(self):
        # Detail stays in the logs.
        return {'success': False, 'error': self.default_message}


def _as_list(value):
    if isinstance(value, (list, tuple)):
        return value
    return [value]


def envelope_exception_handler(exc, context):
    """DRF exception handler that wraps every error in the API envelope."""
    if isinstance(exc, AdmissionError):
        if exc.status_code >= 500:
            logger.error('Admission request failed: %s', exc.message, exc_info=exc)
        return Response(exc.to_response_data(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    detail = response.data
    if isinstance(detail, dict) and 'detail' in detail:
        response.data = {'success': False, 'error': str(detail['detail'])}
    else:
        response.data = {'success': False, 'error': 'Request failed', 'errors': detail}
    return response
