from decimal import Decimal

from django.test import TestCase

from apps.academics.models import Class
from apps.admissions.exceptions import ValidationError
from apps.admissions.stages import (
    AdmissionOffer,
    AdmissionTestResult,
    ApplicationDetails,
    Enrollment,
    InterviewResult,
    Rejection,
)
from apps.admissions.validators import validate_inquiry, validate_stage
from apps.admissions.workflow import AdmissionStatus

from .utils import INQUIRY_PAYLOAD


class InquiryValidationTests(TestCase):
    def test_valid_inquiry_maps_to_model_fields(self):
        data = validate_inquiry(INQUIRY_PAYLOAD)
        self.assertEqual(data["first_name_en"], "Ram")
        self.assertEqual(data["applying_for_class"], 5)
        self.assertEqual(data["inquiry_source"], "walk-in")

    def test_missing_names_and_class(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_inquiry({"firstNameEn": "Ram"})
        self.assertEqual(ctx.exception.fields, ["applyingForClass", "lastNameEn"])

    def test_class_out_of_range(self):
        for grade in (0, 13):
            with self.subTest(grade=grade), self.assertRaises(ValidationError) as ctx:
                validate_inquiry({**INQUIRY_PAYLOAD, "applyingForClass": grade})
            self.assertEqual(ctx.exception.errors["applyingForClass"], ["Class must be between 1 and 12"])

    def test_phone_format(self):
        data = validate_inquiry({**INQUIRY_PAYLOAD, "phone": "+977 9812345678"})
        self.assertEqual(data["phone"], "+977 9812345678")
        validate_inquiry({**INQUIRY_PAYLOAD, "guardianPhone": "+977-9841234567"})
        validate_inquiry({**INQUIRY_PAYLOAD, "guardianPhone": ""})
        with self.assertRaises(ValidationError) as ctx:
            validate_inquiry({**INQUIRY_PAYLOAD, "guardianPhone": "98-12"})
        self.assertIn("guardianPhone", ctx.exception.errors)
        with self.assertRaises(ValidationError) as ctx:
            validate_inquiry({**INQUIRY_PAYLOAD, "phone": "call me"})
        self.assertEqual(ctx.exception.fields, ["phone"])


class StageValidationTests(TestCase):
    def test_application_details(self):
        stage = validate_stage(AdmissionStatus.APPLIED, {"applicationFee": "500", "dateOfBirthBs": "2070-01-15"})
        self.assertIsInstance(stage, ApplicationDetails)
        self.assertEqual(stage.application_fee, Decimal("500"))
        self.assertEqual(stage.date_of_birth_bs, "2070-01-15")
        self.assertIsNone(stage.father_name)

    def test_negative_application_fee(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.APPLIED, {"applicationFee": "-1"})
        self.assertEqual(ctx.exception.fields, ["applicationFee"])

    def test_bs_date_format(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.APPLIED, {"dateOfBirthBs": "15/01/2070"})
        self.assertEqual(ctx.exception.fields, ["dateOfBirthBs"])

    def test_schedule_test_requires_date(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.TEST_SCHEDULED, {})
        self.assertEqual(ctx.exception.fields, ["testDate"])

    def test_test_score(self):
        stage = validate_stage(AdmissionStatus.TESTED, {"score": 85, "maxScore": 100, "remarks": "Good"})
        self.assertIsInstance(stage, AdmissionTestResult)
        self.assertEqual(stage.admission_test_score, Decimal("85"))
        self.assertEqual(stage.admission_test_max_score, Decimal("100"))

    def test_negative_test_score(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.TESTED, {"score": -5, "maxScore": 100})
        self.assertEqual(ctx.exception.errors["score"], ["Score must be non-negative"])

    def test_score_above_max(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.TESTED, {"score": 120, "maxScore": 100})
        self.assertEqual(ctx.exception.errors["score"], ["Score cannot exceed max score"])

    def test_interview_requires_feedback(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.INTERVIEWED, {"feedback": "", "score": 150})
        self.assertEqual(ctx.exception.fields, ["feedback", "score"])

    def test_interview_score_optional(self):
        stage = validate_stage(AdmissionStatus.INTERVIEWED, {"feedback": "Polite"})
        self.assertIsInstance(stage, InterviewResult)
        self.assertIsNone(stage.interview_score)

    def test_admit_takes_no_payload(self):
        self.assertIsInstance(validate_stage(AdmissionStatus.ADMITTED, None), AdmissionOffer)

    def test_enrollment_roll_number(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.ENROLLED, {"rollNumber": 0})
        self.assertEqual(ctx.exception.errors["rollNumber"], ["Roll number must be positive"])

    def test_enrollment_class_must_be_active(self):
        active = Class.objects.create(name="Grade 5-A", grade_level=5, section="A", academic_year="2081")
        closed = Class.objects.create(name="Grade 5-B", grade_level=5, section="B", academic_year="2081", is_active=False)

        stage = validate_stage(AdmissionStatus.ENROLLED, {"rollNumber": 3, "currentClassId": active.pk})
        self.assertIsInstance(stage, Enrollment)
        self.assertEqual(stage.current_class, active)

        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.ENROLLED, {"rollNumber": 3, "currentClassId": closed.pk})
        self.assertEqual(ctx.exception.fields, ["currentClassId"])

    def test_rejection_reason(self):
        stage = validate_stage(AdmissionStatus.REJECTED, {"reason": "Below cutoff"})
        self.assertEqual(stage, Rejection(rejection_reason="Below cutoff"))

        with self.assertRaises(ValidationError) as ctx:
            validate_stage(AdmissionStatus.REJECTED, {"reason": "x" * 501})
        self.assertEqual(ctx.exception.fields, ["reason"])

    def test_inquiry_is_not_a_stage(self):
        with self.assertRaises(ValueError):
            validate_stage(AdmissionStatus.INQUIRY, {})
