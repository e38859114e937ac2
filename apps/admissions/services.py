# apps/admissions/services.py
"""
Admission workflow service.

Each public operation runs one transition end to end inside a single atomic
scope: lock and load the admission, check the transition table, validate the
stage payload, apply it, and (for enrollment) create the student record.
Notifications and audit are left to the caller.
"""
import logging
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone
from django.conf import settings

from .enrollment import EnrollmentConverter
from .exceptions import AdmissionError, EnrollmentError, InvalidTransitionError, NotFoundError
from .models import Admission, Student, last_in_sequence
from .offer_letters import get_offer_letter_generator
from .validators import validate_inquiry, validate_stage
from .workflow import AdmissionStatus, can_transition

logger = logging.getLogger(__name__)


@dataclass
class EnrollmentResult:
    admission: Admission
    student: Student


TEMPORARY_ID_ATTEMPTS = 5

# Timestamp column stamped when a transition into the status commits.
STAGE_TIMESTAMPS = {
    AdmissionStatus.APPLIED: 'application_date',
    AdmissionStatus.ADMITTED: 'admission_date',
    AdmissionStatus.REJECTED: 'rejection_date',
}


class AdmissionWorkflowService:
    """Orchestrates admission transitions.

    Args:
        atomic: context-manager factory giving the all-or-nothing scope;
            defaults to ``django.db.transaction.atomic``.
        converter: the ``EnrollmentConverter`` used by ``enroll``.
        offer_letter_generator: callable ``(admission, admitted_at) -> str``;
            defaults to the one named in ``ADMISSIONS_OFFER_LETTER_GENERATOR``.
    """

    def __init__(self, atomic=transaction.atomic, converter=None, offer_letter_generator=None):
        self.atomic = atomic
        self.converter = converter or EnrollmentConverter()
        self._offer_letter_generator = offer_letter_generator

    @property
    def offer_letter_generator(self):
        return self._offer_letter_generator or get_offer_letter_generator()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def create_inquiry(self, payload, acting_user_id=None):
        data = validate_inquiry(payload)
        with self.atomic():
            admission = Admission(
                **data,
                status=AdmissionStatus.INQUIRY,
                inquiry_date=timezone.now(),
                application_fee_paid=False,
                documents_verified=False,
                processed_by_id=acting_user_id,
            )
            self._save_with_temporary_id(admission)

        logger.info(
            "Admission inquiry created",
            extra={"admission_id": admission.pk, "temporary_id": admission.temporary_id},
        )
        return admission

    def _save_with_temporary_id(self, admission):
        # A concurrent inquiry may take the id between generation and insert.
        for attempt in range(1, TEMPORARY_ID_ATTEMPTS + 1):
            admission.temporary_id = self.generate_temporary_id()
            try:
                with transaction.atomic():
                    admission.save()
                return
            except IntegrityError:
                if not Admission.objects.filter(temporary_id=admission.temporary_id).exists():
                    raise
                logger.warning(
                    "Temporary id already taken, retrying",
                    extra={"temporary_id": admission.temporary_id, "attempt": attempt},
                )
        raise AdmissionError('Could not allocate an inquiry id')

    def convert_to_application(self, admission_id, payload, acting_user_id=None):
        return self._transition(admission_id, AdmissionStatus.APPLIED, payload, acting_user_id)

    def schedule_test(self, admission_id, payload, acting_user_id=None):
        return self._transition(admission_id, AdmissionStatus.TEST_SCHEDULED, payload, acting_user_id)

    def record_test_score(self, admission_id, payload, acting_user_id=None):
        return self._transition(admission_id, AdmissionStatus.TESTED, payload, acting_user_id)

    def schedule_interview(self, admission_id, payload, acting_user_id=None):
        return self._transition(admission_id, AdmissionStatus.INTERVIEW_SCHEDULED, payload, acting_user_id)

    def record_interview(self, admission_id, payload, acting_user_id=None):
        return self._transition(admission_id, AdmissionStatus.INTERVIEWED, payload, acting_user_id)

    def admit(self, admission_id, payload=None, acting_user_id=None):
        return self._transition(admission_id, AdmissionStatus.ADMITTED, payload, acting_user_id)

    def enroll(self, admission_id, payload, acting_user_id=None):
        """Enroll an admitted applicant. Returns an ``EnrollmentResult``."""
        return self._transition(admission_id, AdmissionStatus.ENROLLED, payload, acting_user_id)

    def reject(self, admission_id, payload, acting_user_id=None):
        return self._transition(admission_id, AdmissionStatus.REJECTED, payload, acting_user_id)

    def _transition(self, admission_id, target, payload, acting_user_id):
        student = None
        with self.atomic():
            admission = self._load_for_update(admission_id)
            current = admission.status

            if not can_transition(current, target):
                logger.warning(
                    "Refused admission transition",
                    extra={"admission_id": admission_id, "from": current, "to": target},
                )
                raise InvalidTransitionError(current, target)

            stage = validate_stage(target, payload)
            now = timezone.now()

            stage.apply(admission)
            timestamp_field = STAGE_TIMESTAMPS.get(target)
            if timestamp_field:
                setattr(admission, timestamp_field, now)

            if target == AdmissionStatus.ADMITTED:
                admission.admission_offer_letter_url = self.offer_letter_generator(admission, now)

            if target == AdmissionStatus.ENROLLED:
                try:
                    student = self.converter.convert(admission, stage)
                except EnrollmentError:
                    logger.exception(
                        "Enrollment failed, admission left unchanged",
                        extra={"admission_id": admission_id, "temporary_id": admission.temporary_id},
                    )
                    raise

            admission.status = target
            admission.processed_by_id = acting_user_id
            admission.save()

        logger.info(
            "Admission status changed",
            extra={
                "admission_id": admission.pk,
                "temporary_id": admission.temporary_id,
                "from": current,
                "to": target,
            },
        )
        if student is not None:
            return EnrollmentResult(admission=admission, student=student)
        return admission

    def _load_for_update(self, admission_id):
        # Re-read under a row lock so a concurrent transition is seen, not a stale copy.
        try:
            return Admission.objects.select_for_update().get(pk=admission_id)
        except (Admission.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(admission_id) from None

    def generate_temporary_id(self):
        """Human facing inquiry id: SCH-INQ-2024-0001"""
        year = timezone.localdate().year
        prefix = f'{settings.ADMISSIONS_SCHOOL_CODE}-INQ-{year}-'
        last_admission = last_in_sequence(
            Admission.objects.filter(temporary_id__startswith=prefix), "temporary_id"
        )

        if last_admission:
            new_num = int(last_admission.temporary_id.rsplit('-', 1)[-1]) + 1
        else:
            new_num = 1

        return f'{prefix}{new_num:04d}'

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, admission_id):
        try:
            return Admission.objects.get(pk=admission_id)
        except (Admission.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(admission_id) from None

    def list_admissions(self, status=None, applying_for_class=None, academic_year=None,
                        search=None, page=1, limit=None):
        """Filtered, newest-first page of admissions. Returns ``(admissions, total)``."""
        admissions = Admission.objects.all()

        if status:
            admissions = admissions.filter(status=status)
        if applying_for_class:
            admissions = admissions.filter(applying_for_class=applying_for_class)
        if academic_year:
            admissions = admissions.filter(academic_year=academic_year)
        if search:
            admissions = admissions.filter(
                Q(first_name_en__icontains=search)
                | Q(last_name_en__icontains=search)
                | Q(temporary_id__icontains=search)
            )

        limit = min(limit or settings.ADMISSIONS_PAGE_SIZE, settings.ADMISSIONS_MAX_PAGE_SIZE)
        page = max(page or 1, 1)
        offset = (page - 1) * limit

        total = admissions.count()
        return list(admissions[offset:offset + limit]), total

    def get_statistics(self, academic_year=None):
        admissions = Admission.objects.all()
        if academic_year:
            admissions = admissions.filter(academic_year=academic_year)

        by_status = {status: 0 for status in AdmissionStatus.values}
        for row in admissions.order_by().values('status').annotate(count=Count('id')):
            by_status[row['status']] = row['count']

        by_class = {
            row['applying_for_class']: row['count']
            for row in admissions.values('applying_for_class')
            .annotate(count=Count('id'))
            .order_by('applying_for_class')
        }

        return {
            'total': admissions.count(),
            'byStatus': by_status,
            'byClass': by_class,
        }
