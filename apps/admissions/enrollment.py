# apps/admissions/enrollment.py
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import EnrollmentError, ValidationError
from .models import Student, last_in_sequence

logger = logging.getLogger(__name__)


class EnrollmentConverter:
    """Turns an admitted applicant into a permanent ``Student``.

    Must run inside the caller's transaction: the student row and the
    admission's status change commit or roll back together.
    """

    def __init__(self, code_prefix=None):
        self.code_prefix = code_prefix or settings.ADMISSIONS_STUDENT_CODE_PREFIX

    def generate_student_code(self, admission_date):
        """Next free code for the admission year: STU-2024-0001, STU-2024-0002, ..."""
        prefix = f'{self.code_prefix}-{admission_date.year}-'
        last_student = last_in_sequence(
            Student.objects.filter(student_code__startswith=prefix), "student_code"
        )

        if last_student:
            try:
                last_num = int(last_student.student_code.rsplit('-', 1)[-1])
            except ValueError:
                raise EnrollmentError(
                    f'Cannot continue student code sequence after {last_student.student_code}'
                ) from None
            new_num = last_num + 1
        else:
            new_num = 1

        return f'{prefix}{new_num:04d}'

    def convert(self, admission, enrollment):
        """Create the student for ``admission`` and link it. Returns the new Student."""
        if admission.enrolled_student_id is not None:
            raise EnrollmentError(
                f'Admission {admission.temporary_id} already enrolled as student {admission.enrolled_student_id}'
            )

        now = timezone.now()
        admission_date = timezone.localdate(admission.admission_date) if admission.admission_date else timezone.localdate(now)
        student_code = self.generate_student_code(admission_date)

        student = Student(
            student_code=student_code,
            first_name_en=admission.first_name_en,
            middle_name_en=admission.middle_name_en,
            last_name_en=admission.last_name_en,
            first_name_np=admission.first_name_np,
            middle_name_np=admission.middle_name_np,
            last_name_np=admission.last_name_np,
            date_of_birth_bs=admission.date_of_birth_bs,
            date_of_birth_ad=admission.date_of_birth_ad,
            gender=admission.gender,
            address_en=admission.address_en,
            address_np=admission.address_np,
            phone=admission.phone,
            email=admission.email,
            father_name=admission.father_name,
            father_phone=admission.father_phone,
            mother_name=admission.mother_name,
            mother_phone=admission.mother_phone,
            local_guardian_name=admission.guardian_name,
            local_guardian_phone=admission.guardian_phone,
            local_guardian_relation=admission.guardian_relation,
            admission_date=admission_date,
            admission_class=admission.applying_for_class,
            current_class=enrollment.current_class,
            roll_number=enrollment.roll_number,
            previous_school=admission.previous_school,
            emergency_contact=admission.contact_phone,
            status='active',
        )

        try:
            with transaction.atomic():
                student.save()
        except IntegrityError as exc:
            if self._roll_number_taken(student):
                raise ValidationError(
                    {'rollNumber': [f'Roll number {student.roll_number} is already used in this class']}
                ) from exc
            raise EnrollmentError(f'Could not create student {student_code}: {exc}') from exc

        admission.enrolled_student = student
        admission.enrollment_date = now

        logger.info(
            "Student record created from admission",
            extra={"temporary_id": admission.temporary_id, "student_code": student.student_code},
        )
        return student

    @staticmethod
    def _roll_number_taken(student):
        if student.current_class_id is None:
            return False
        return Student.objects.filter(
            current_class_id=student.current_class_id, roll_number=student.roll_number
        ).exists()
