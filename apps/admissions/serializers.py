# apps/admissions/serializers.py
from django.conf import settings
from django.core.validators import RegexValidator
from rest_framework import serializers

from apps.academics.models import Class
from .models import Admission, Student, GENDER_CHOICES
from .workflow import AdmissionStatus


phone_validator = RegexValidator(
    regex=r'^(\+977[-\s]?)?[0-9]{7,10}$',
    message='Please provide a valid phone number',
)
bs_date_validator = RegexValidator(
    regex=r'^\d{4}-\d{2}-\d{2}$',
    message='Date must be in YYYY-MM-DD format',
)


def _camel(name):
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _optional_text(source, max_length, **kwargs):
    return serializers.CharField(
        source=source, max_length=max_length, required=False, allow_blank=True, **kwargs
    )


# ---------------------------------------------------------------------------
# Request payloads, one per workflow operation
# ---------------------------------------------------------------------------

class InquirySerializer(serializers.Serializer):
    """New inquiry: only the names and the requested class are required"""
    firstNameEn = serializers.CharField(source='first_name_en', max_length=50)
    middleNameEn = _optional_text('middle_name_en', 50)
    lastNameEn = serializers.CharField(source='last_name_en', max_length=50)
    applyingForClass = serializers.IntegerField(
        source='applying_for_class', min_value=1, max_value=12,
        error_messages={
            'min_value': 'Class must be between 1 and 12',
            'max_value': 'Class must be between 1 and 12',
        },
    )
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, validators=[phone_validator])
    email = serializers.EmailField(max_length=100, required=False, allow_blank=True)
    guardianName = _optional_text('guardian_name', 100)
    guardianPhone = _optional_text('guardian_phone', 20, validators=[phone_validator])
    inquirySource = serializers.ChoiceField(
        source='inquiry_source', choices=Admission.INQUIRY_SOURCE_CHOICES, required=False
    )
    inquiryNotes = _optional_text('inquiry_notes', 1000)
    academicYear = _optional_text('academic_year', 20)


class ApplicationSerializer(serializers.Serializer):
    firstNameNp = _optional_text('first_name_np', 50)
    middleNameNp = _optional_text('middle_name_np', 50)
    lastNameNp = _optional_text('last_name_np', 50)
    dateOfBirthBs = serializers.CharField(
        source='date_of_birth_bs', required=False, validators=[bs_date_validator]
    )
    dateOfBirthAd = serializers.DateField(source='date_of_birth_ad', required=False)
    gender = serializers.ChoiceField(choices=GENDER_CHOICES, required=False)
    addressEn = _optional_text('address_en', 255)
    addressNp = _optional_text('address_np', 255)
    fatherName = _optional_text('father_name', 100)
    fatherPhone = _optional_text('father_phone', 20, validators=[phone_validator])
    motherName = _optional_text('mother_name', 100)
    motherPhone = _optional_text('mother_phone', 20, validators=[phone_validator])
    guardianRelation = _optional_text('guardian_relation', 50)
    previousSchool = _optional_text('previous_school', 255)
    previousClass = serializers.IntegerField(
        source='previous_class', min_value=1, max_value=12, required=False
    )
    previousGpa = serializers.DecimalField(
        source='previous_gpa', max_digits=3, decimal_places=2,
        min_value=0, max_value=4, required=False
    )
    applicationFee = serializers.DecimalField(
        source='application_fee', max_digits=10, decimal_places=2, min_value=0, required=False,
        error_messages={'min_value': 'Application fee must be non-negative'},
    )
    applicationFeePaid = serializers.BooleanField(source='application_fee_paid', required=False)
    documentsVerified = serializers.BooleanField(source='documents_verified', required=False)
    documentsNotes = _optional_text('documents_notes', 1000)


class ScheduleTestSerializer(serializers.Serializer):
    # Past dates are accepted so that earlier tests can be backfilled.
    testDate = serializers.DateTimeField(source='admission_test_date')


class RecordTestScoreSerializer(serializers.Serializer):
    score = serializers.DecimalField(
        source='admission_test_score', max_digits=5, decimal_places=2, min_value=0,
        error_messages={'min_value': 'Score must be non-negative'},
    )
    maxScore = serializers.DecimalField(
        source='admission_test_max_score', max_digits=5, decimal_places=2, min_value=0,
        error_messages={'min_value': 'Max score must be non-negative'},
    )
    remarks = _optional_text('admission_test_remarks', 500)

    def validate(self, data):
        if data['admission_test_score'] > data['admission_test_max_score']:
            raise serializers.ValidationError({'score': 'Score cannot exceed max score'})
        return data


class ScheduleInterviewSerializer(serializers.Serializer):
    interviewDate = serializers.DateTimeField(source='interview_date')
    interviewerName = _optional_text('interviewer_name', 100)


class InterviewSerializer(serializers.Serializer):
    feedback = serializers.CharField(
        source='interview_feedback', max_length=1000,
        error_messages={'blank': 'Feedback is required'},
    )
    score = serializers.IntegerField(
        source='interview_score', min_value=0, max_value=100, required=False, allow_null=True,
        error_messages={
            'min_value': 'Score must be between 0 and 100',
            'max_value': 'Score must be between 0 and 100',
        },
    )


class AdmitSerializer(serializers.Serializer):
    """Admitting takes no payload; the offer letter is generated server side"""


class EnrollSerializer(serializers.Serializer):
    rollNumber = serializers.IntegerField(
        source='roll_number', min_value=1,
        error_messages={'min_value': 'Roll number must be positive'},
    )
    currentClassId = serializers.PrimaryKeyRelatedField(
        source='current_class', queryset=Class.objects.filter(is_active=True),
        required=False, allow_null=True,
    )


class RejectSerializer(serializers.Serializer):
    reason = serializers.CharField(
        source='rejection_reason', max_length=500,
        error_messages={'blank': 'Rejection reason is required'},
    )


class AdmissionListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=AdmissionStatus.choices, required=False)
    applyingForClass = serializers.IntegerField(min_value=1, max_value=12, required=False)
    academicYear = serializers.CharField(max_length=20, required=False)
    search = serializers.CharField(max_length=100, required=False, allow_blank=True)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)

    def validate(self, data):
        data.setdefault('limit', settings.ADMISSIONS_PAGE_SIZE)
        return data


class StatisticsQuerySerializer(serializers.Serializer):
    academicYear = serializers.CharField(max_length=20, required=False)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class CamelCaseModelSerializer(serializers.ModelSerializer):
    """Model serializer that renders snake_case model fields as camelCase keys"""

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {_camel(key): value for key, value in data.items()}


class StudentSerializer(CamelCaseModelSerializer):
    current_class_id = serializers.IntegerField(read_only=True)
    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Student
        exclude = ['current_class']


class AdmissionSerializer(CamelCaseModelSerializer):
    enrolled_student_id = serializers.IntegerField(read_only=True)
    processed_by_id = serializers.IntegerField(read_only=True)
    full_name_en = serializers.CharField(read_only=True)

    class Meta:
        model = Admission
        exclude = ['enrolled_student', 'processed_by']
