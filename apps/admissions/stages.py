# apps/admissions/stages.py
"""
Typed payloads for each workflow transition.

Every transition carries exactly one of these, keyed by its target status in
``STAGE_TYPES``. ``apply`` copies the payload onto the flat ``Admission`` row;
it only writes the columns the stage owns and never blanks a column that is
already filled.
"""
from dataclasses import dataclass, fields
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from .workflow import AdmissionStatus


@dataclass(frozen=True)
class Stage:
    target = None

    def apply(self, admission):
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not None:
                setattr(admission, field.name, value)


@dataclass(frozen=True)
class ApplicationDetails(Stage):
    target = AdmissionStatus.APPLIED

    first_name_np: Optional[str] = None
    middle_name_np: Optional[str] = None
    last_name_np: Optional[str] = None
    date_of_birth_bs: Optional[str] = None
    date_of_birth_ad: Optional[date] = None
    gender: Optional[str] = None
    address_en: Optional[str] = None
    address_np: Optional[str] = None
    father_name: Optional[str] = None
    father_phone: Optional[str] = None
    mother_name: Optional[str] = None
    mother_phone: Optional[str] = None
    guardian_relation: Optional[str] = None
    previous_school: Optional[str] = None
    previous_class: Optional[int] = None
    previous_gpa: Optional[Decimal] = None
    application_fee: Optional[Decimal] = None
    application_fee_paid: Optional[bool] = None
    documents_verified: Optional[bool] = None
    documents_notes: Optional[str] = None


@dataclass(frozen=True)
class AdmissionTestSchedule(Stage):
    target = AdmissionStatus.TEST_SCHEDULED

    admission_test_date: datetime


@dataclass(frozen=True)
class AdmissionTestResult(Stage):
    target = AdmissionStatus.TESTED

    admission_test_score: Decimal
    admission_test_max_score: Decimal
    admission_test_remarks: Optional[str] = None


@dataclass(frozen=True)
class InterviewSchedule(Stage):
    target = AdmissionStatus.INTERVIEW_SCHEDULED

    interview_date: datetime
    interviewer_name: Optional[str] = None


@dataclass(frozen=True)
class InterviewResult(Stage):
    target = AdmissionStatus.INTERVIEWED

    interview_feedback: str
    interview_score: Optional[int] = None


@dataclass(frozen=True)
class AdmissionOffer(Stage):
    target = AdmissionStatus.ADMITTED


@dataclass(frozen=True)
class Enrollment(Stage):
    """Roll number and optional class placement. Consumed by the converter, not copied onto the admission."""
    target = AdmissionStatus.ENROLLED

    roll_number: int
    current_class: Optional[object] = None

    def apply(self, admission):
        pass


@dataclass(frozen=True)
class Rejection(Stage):
    target = AdmissionStatus.REJECTED

    rejection_reason: str


STAGE_TYPES = {
    stage.target: stage
    for stage in (
        ApplicationDetails,
        AdmissionTestSchedule,
        AdmissionTestResult,
        InterviewSchedule,
        InterviewResult,
        AdmissionOffer,
        Enrollment,
        Rejection,
    )
}
