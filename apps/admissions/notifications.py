# apps/admissions/notifications.py
import logging

from django.conf import settings
from django.core.mail import send_mail

from .workflow import AdmissionStatus

logger = logging.getLogger(__name__)


STATUS_SUBJECTS = {
    AdmissionStatus.INQUIRY: 'Inquiry received',
    AdmissionStatus.APPLIED: 'Application received',
    AdmissionStatus.TEST_SCHEDULED: 'Admission test scheduled',
    AdmissionStatus.INTERVIEW_SCHEDULED: 'Interview scheduled',
    AdmissionStatus.ADMITTED: 'Admission offer',
    AdmissionStatus.ENROLLED: 'Enrollment confirmed',
    AdmissionStatus.REJECTED: 'Admission decision',
}


def send_admission_status_email(admission, student=None):
    """
    Tell the applicant's contact address about the admission's new status.

    Returns True if a message went out. Failures are logged and never raised:
    the transition has already committed by the time this runs.
    """
    if not settings.ADMISSIONS_SEND_NOTIFICATIONS or not admission.email:
        return False

    subject_line = STATUS_SUBJECTS.get(admission.status)
    if subject_line is None:
        return False

    lines = [
        f"Dear Parent/Guardian of {admission.full_name_en},",
        "",
        f"Status of application {admission.temporary_id}: {admission.get_status_display()}.",
    ]
    if admission.status == AdmissionStatus.TEST_SCHEDULED and admission.admission_test_date:
        lines.append(f"Test date: {admission.admission_test_date:%Y-%m-%d %H:%M}")
    if admission.status == AdmissionStatus.INTERVIEW_SCHEDULED and admission.interview_date:
        lines.append(f"Interview date: {admission.interview_date:%Y-%m-%d %H:%M}")
    if admission.status == AdmissionStatus.ADMITTED and admission.admission_offer_letter_url:
        lines.append(f"Offer letter: {admission.admission_offer_letter_url}")
    if student is not None:
        lines.append(f"Student code: {student.student_code}")
    lines += ["", "Best regards,", f"{settings.SCHOOL_NAME} Admissions Office"]

    try:
        send_mail(
            subject=f"{settings.SCHOOL_NAME} - {subject_line}",
            message="\n".join(lines),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[admission.email],
            fail_silently=False,
        )
    except Exception:
        logger.exception(
            "Admission email failed",
            extra={"temporary_id": admission.temporary_id, "status": admission.status},
        )
        return False

    logger.info("Admission email sent", extra={"temporary_id": admission.temporary_id, "status": admission.status})
    return True
