# apps/admissions/validators.py
"""
Stage validator: checks the payload that accompanies a transition and turns
it into the typed stage object for that transition.
"""
from . import serializers as payloads
from .exceptions import ValidationError
from .stages import STAGE_TYPES
from .workflow import AdmissionStatus


STAGE_SERIALIZERS = {
    AdmissionStatus.APPLIED: payloads.ApplicationSerializer,
    AdmissionStatus.TEST_SCHEDULED: payloads.ScheduleTestSerializer,
    AdmissionStatus.TESTED: payloads.RecordTestScoreSerializer,
    AdmissionStatus.INTERVIEW_SCHEDULED: payloads.ScheduleInterviewSerializer,
    AdmissionStatus.INTERVIEWED: payloads.InterviewSerializer,
    AdmissionStatus.ADMITTED: payloads.AdmitSerializer,
    AdmissionStatus.ENROLLED: payloads.EnrollSerializer,
    AdmissionStatus.REJECTED: payloads.RejectSerializer,
}


def run_serializer(serializer_class, payload):
    """Validate ``payload`` and return the cleaned data, or raise ValidationError."""
    serializer = serializer_class(data=payload if payload is not None else {})
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return dict(serializer.validated_data)


def validate_inquiry(payload):
    return run_serializer(payloads.InquirySerializer, payload)


def validate_stage(target, payload):
    """Validate the payload for a transition into ``target``.

    Returns the stage object from ``stages.STAGE_TYPES`` for ``target``.
    Nothing is written to the database here.
    """
    try:
        serializer_class = STAGE_SERIALIZERS[target]
    except KeyError:
        raise ValueError(f'No stage validation defined for {target}') from None
    data = run_serializer(serializer_class, payload)
    return STAGE_TYPES[target](**data)
