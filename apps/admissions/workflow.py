# apps/admissions/workflow.py
"""
Admission status set and the table of legal status transitions.

Every legal move lives in ``TRANSITIONS``; nothing else in the app compares
statuses to decide whether a transition is allowed.
"""
from django.db import models


class AdmissionStatus(models.TextChoices):
    INQUIRY = 'inquiry', 'Inquiry'
    APPLIED = 'applied', 'Applied'
    TEST_SCHEDULED = 'test_scheduled', 'Test Scheduled'
    TESTED = 'tested', 'Tested'
    INTERVIEW_SCHEDULED = 'interview_scheduled', 'Interview Scheduled'
    INTERVIEWED = 'interviewed', 'Interviewed'
    ADMITTED = 'admitted', 'Admitted'
    ENROLLED = 'enrolled', 'Enrolled'
    REJECTED = 'rejected', 'Rejected'
    # Terminal; only written by data imports, never by the engine.
    WITHDRAWN = 'withdrawn', 'Withdrawn'


FORWARD_PATH = (
    AdmissionStatus.INQUIRY,
    AdmissionStatus.APPLIED,
    AdmissionStatus.TEST_SCHEDULED,
    AdmissionStatus.TESTED,
    AdmissionStatus.INTERVIEW_SCHEDULED,
    AdmissionStatus.INTERVIEWED,
    AdmissionStatus.ADMITTED,
    AdmissionStatus.ENROLLED,
)

TRANSITIONS = {
    AdmissionStatus.INQUIRY: frozenset({AdmissionStatus.APPLIED, AdmissionStatus.REJECTED}),
    AdmissionStatus.APPLIED: frozenset({AdmissionStatus.TEST_SCHEDULED, AdmissionStatus.REJECTED}),
    AdmissionStatus.TEST_SCHEDULED: frozenset({AdmissionStatus.TESTED, AdmissionStatus.REJECTED}),
    AdmissionStatus.TESTED: frozenset({AdmissionStatus.INTERVIEW_SCHEDULED, AdmissionStatus.REJECTED}),
    AdmissionStatus.INTERVIEW_SCHEDULED: frozenset({AdmissionStatus.INTERVIEWED, AdmissionStatus.REJECTED}),
    AdmissionStatus.INTERVIEWED: frozenset({AdmissionStatus.ADMITTED, AdmissionStatus.REJECTED}),
    AdmissionStatus.ADMITTED: frozenset({AdmissionStatus.ENROLLED, AdmissionStatus.REJECTED}),
    AdmissionStatus.ENROLLED: frozenset(),
    AdmissionStatus.REJECTED: frozenset(),
    AdmissionStatus.WITHDRAWN: frozenset(),
}

TERMINAL_STATES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def allowed_targets(status):
    return TRANSITIONS.get(status, frozenset())


def can_transition(current, target):
    """True if ``current -> target`` is a legal move. Unknown statuses are never legal."""
    return target in allowed_targets(current)


def is_terminal(status):
    return status in TERMINAL_STATES


def next_status(status):
    """Forward successor of ``status`` on the canonical path, or None."""
    if status not in FORWARD_PATH or is_terminal(status):
        return None
    return FORWARD_PATH[FORWARD_PATH.index(status) + 1]
