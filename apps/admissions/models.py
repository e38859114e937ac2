# apps/admissions/models.py
from django.db import models
from django.db.models import Q
from django.db.models.functions import Length
from django.utils import timezone
from django.core.validators import MinValueValidator, MaxValueValidator
from django.conf import settings

from .workflow import AdmissionStatus, is_terminal


GENDER_CHOICES = (
    ('male', 'Male'),
    ('female', 'Female'),
    ('other', 'Other'),
)


def last_in_sequence(queryset, field):
    """Row holding the highest zero-padded code in ``field``: longer codes sort after shorter ones."""
    return queryset.order_by(Length(field).desc(), f"-{field}").first()


class Student(models.Model):
    """Permanent student record, created once per enrolled admission"""

    STATUS_CHOICES = (
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('graduated', 'Graduated'),
        ('transferred', 'Transferred'),
    )

    # Unique student code: STU-2024-0001
    student_code = models.CharField(max_length=30, unique=True)

    # Basic Info
    first_name_en = models.CharField(max_length=50)
    middle_name_en = models.CharField(max_length=50, blank=True)
    last_name_en = models.CharField(max_length=50)
    first_name_np = models.CharField(max_length=50, blank=True)
    middle_name_np = models.CharField(max_length=50, blank=True)
    last_name_np = models.CharField(max_length=50, blank=True)
    date_of_birth_bs = models.CharField(max_length=10, blank=True)
    date_of_birth_ad = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)

    # Contact Info
    address_en = models.CharField(max_length=255, blank=True)
    address_np = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(max_length=100, blank=True)
    emergency_contact = models.CharField(max_length=20, blank=True)

    # Family
    father_name = models.CharField(max_length=100, blank=True)
    father_phone = models.CharField(max_length=20, blank=True)
    mother_name = models.CharField(max_length=100, blank=True)
    mother_phone = models.CharField(max_length=20, blank=True)
    local_guardian_name = models.CharField(max_length=100, blank=True)
    local_guardian_phone = models.CharField(max_length=20, blank=True)
    local_guardian_relation = models.CharField(max_length=50, blank=True)

    # Academic Info
    admission_date = models.DateField()
    admission_class = models.PositiveSmallIntegerField()
    current_class = models.ForeignKey(
        'academics.Class', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='students'
    )
    roll_number = models.PositiveIntegerField()
    previous_school = models.CharField(max_length=255, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['student_code']
        constraints = [
            models.UniqueConstraint(
                fields=['current_class', 'roll_number'],
                condition=Q(current_class__isnull=False),
                name='unique_roll_number_per_class',
            ),
        ]

    @property
    def full_name(self):
        return " ".join(filter(None, [self.first_name_en, self.middle_name_en, self.last_name_en]))

    def __str__(self):
        return f"{self.student_code} - {self.full_name}"


class Admission(models.Model):
    """One prospective student's way through the admission workflow.

    Status changes only go through ``AdmissionWorkflowService``; the stage
    columns below are filled by the transition that produces them and are
    never cleared afterwards.
    """

    INQUIRY_SOURCE_CHOICES = (
        ('walk-in', 'Walk-in'),
        ('phone', 'Phone'),
        ('online', 'Online'),
        ('referral', 'Referral'),
    )

    # Identity
    temporary_id = models.CharField(max_length=50, unique=True, editable=False)

    # Applicant Information
    first_name_en = models.CharField(max_length=50)
    middle_name_en = models.CharField(max_length=50, blank=True)
    last_name_en = models.CharField(max_length=50)
    first_name_np = models.CharField(max_length=50, blank=True)
    middle_name_np = models.CharField(max_length=50, blank=True)
    last_name_np = models.CharField(max_length=50, blank=True)
    date_of_birth_bs = models.CharField(max_length=10, blank=True)
    date_of_birth_ad = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)

    # Contact Information
    address_en = models.CharField(max_length=255, blank=True)
    address_np = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(max_length=100, blank=True)

    # Guardian Information
    father_name = models.CharField(max_length=100, blank=True)
    father_phone = models.CharField(max_length=20, blank=True)
    mother_name = models.CharField(max_length=100, blank=True)
    mother_phone = models.CharField(max_length=20, blank=True)
    guardian_name = models.CharField(max_length=100, blank=True)
    guardian_phone = models.CharField(max_length=20, blank=True)
    guardian_relation = models.CharField(max_length=50, blank=True)

    # Academic Information
    applying_for_class = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    previous_school = models.CharField(max_length=255, blank=True)
    previous_class = models.PositiveSmallIntegerField(null=True, blank=True)
    previous_gpa = models.DecimalField(max_digits=3, decimal_places=2, null=True, blank=True)
    academic_year = models.CharField(max_length=20, blank=True)

    # Workflow Status
    status = models.CharField(
        max_length=20, choices=AdmissionStatus.choices, default=AdmissionStatus.INQUIRY
    )

    # Inquiry Stage
    inquiry_date = models.DateTimeField(default=timezone.now)
    inquiry_source = models.CharField(max_length=20, choices=INQUIRY_SOURCE_CHOICES, blank=True)
    inquiry_notes = models.TextField(blank=True)

    # Application Stage
    application_date = models.DateTimeField(null=True, blank=True)
    application_fee = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    application_fee_paid = models.BooleanField(default=False)
    documents_verified = models.BooleanField(default=False)
    documents_notes = models.TextField(blank=True)

    # Test Stage
    admission_test_date = models.DateTimeField(null=True, blank=True)
    admission_test_score = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    admission_test_max_score = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    admission_test_remarks = models.TextField(blank=True)

    # Interview Stage
    interview_date = models.DateTimeField(null=True, blank=True)
    interviewer_name = models.CharField(max_length=100, blank=True)
    interview_feedback = models.TextField(blank=True)
    interview_score = models.PositiveSmallIntegerField(null=True, blank=True)

    # Admission Stage
    admission_date = models.DateTimeField(null=True, blank=True)
    admission_offer_letter_url = models.CharField(max_length=500, blank=True)

    # Enrollment (final stage)
    enrolled_student = models.OneToOneField(
        Student, on_delete=models.PROTECT, null=True, blank=True,
        related_name='admission'
    )
    enrollment_date = models.DateTimeField(null=True, blank=True)

    # Rejection
    rejection_reason = models.TextField(blank=True)
    rejection_date = models.DateTimeField(null=True, blank=True)

    # Metadata
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='processed_admissions'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status'], name='admission_status_idx'),
            models.Index(fields=['applying_for_class'], name='admission_class_idx'),
            models.Index(fields=['inquiry_date'], name='admission_inquiry_date_idx'),
            models.Index(fields=['academic_year'], name='admission_academic_year_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(status=AdmissionStatus.ENROLLED, enrolled_student__isnull=False)
                    | (~Q(status=AdmissionStatus.ENROLLED) & Q(enrolled_student__isnull=True))
                ),
                name='enrolled_student_iff_enrolled',
            ),
            models.CheckConstraint(
                condition=Q(applying_for_class__gte=1, applying_for_class__lte=12),
                name='applying_for_class_1_to_12',
            ),
        ]

    @property
    def full_name_en(self):
        return " ".join(filter(None, [self.first_name_en, self.middle_name_en, self.last_name_en]))

    @property
    def contact_phone(self):
        return self.guardian_phone or self.father_phone or self.mother_phone

    @property
    def is_terminal(self):
        return is_terminal(self.status)

    def __str__(self):
        return f"{self.temporary_id} - {self.full_name_en}"
