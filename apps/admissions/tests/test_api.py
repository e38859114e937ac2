from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.core import mail
from django.test import TestCase
from rest_framework.test import APIClient

from apps.admissions.enrollment import EnrollmentConverter
from apps.admissions.exceptions import EnrollmentError
from apps.admissions.models import Admission, Student
from apps.admissions.services import AdmissionWorkflowService
from apps.admissions.workflow import AdmissionStatus

from .utils import INQUIRY_PAYLOAD, advance, create_inquiry


class AdmissionApiTests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="officer", password="p")
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)
        self.service = AdmissionWorkflowService()

    def test_create_inquiry(self):
        resp = self.client.post("/api/v1/admissions/inquiry", INQUIRY_PAYLOAD, format="json")

        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["status"], "inquiry")
        self.assertEqual(body["data"]["firstNameEn"], "Ram")
        self.assertEqual(body["data"]["applyingForClass"], 5)
        self.assertTrue(body["data"]["temporaryId"].startswith("SCH-INQ-"))
        self.assertEqual(body["data"]["processedById"], self.user.id)
        self.assertEqual(Admission.objects.count(), 1)

    def test_create_inquiry_validation_error(self):
        resp = self.client.post("/api/v1/admissions/inquiry", {"firstNameEn": "Ram"}, format="json")

        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"], "Validation failed")
        self.assertIn("lastNameEn", body["errors"])
        self.assertIn("applyingForClass", body["errors"])

    def test_full_workflow_over_http(self):
        admission_id = self.client.post(
            "/api/v1/admissions/inquiry", INQUIRY_PAYLOAD, format="json"
        ).json()["data"]["id"]
        base = f"/api/v1/admissions/{admission_id}"

        steps = [
            ("apply", {"applicationFee": 500}, "applied"),
            ("schedule-test", {"testDate": "2024-03-01T10:00:00Z"}, "test_scheduled"),
            ("record-test-score", {"score": 85, "maxScore": 100}, "tested"),
            ("schedule-interview", {"interviewDate": "2024-03-05T11:00:00Z"}, "interview_scheduled"),
            ("record-interview", {"feedback": "Good"}, "interviewed"),
            ("admit", {}, "admitted"),
        ]
        for action, payload, expected in steps:
            resp = self.client.post(f"{base}/{action}", payload, format="json")
            self.assertEqual(resp.status_code, 200, resp.content)
            self.assertEqual(resp.json()["data"]["status"], expected)

        resp = self.client.post(f"{base}/enroll", {"rollNumber": 12}, format="json")
        self.assertEqual(resp.status_code, 201)
        data = resp.json()["data"]
        self.assertEqual(data["admission"]["status"], "enrolled")
        self.assertEqual(data["student"]["rollNumber"], 12)
        self.assertTrue(data["student"]["studentCode"].startswith("STU-"))
        self.assertEqual(data["admission"]["enrolledStudentId"], data["student"]["id"])
        self.assertEqual(Student.objects.count(), 1)

    def test_invalid_transition_conflict(self):
        admission = advance(self.service, create_inquiry(self.service), AdmissionStatus.TESTED)

        resp = self.client.post(
            f"/api/v1/admissions/{admission.pk}/schedule-test",
            {"testDate": "2024-04-01T10:00:00Z"},
            format="json",
        )

        self.assertEqual(resp.status_code, 409)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["currentStatus"], "tested")
        self.assertEqual(body["attemptedStatus"], "test_scheduled")

    def test_score_above_max_is_bad_request(self):
        admission = advance(self.service, create_inquiry(self.service), AdmissionStatus.TEST_SCHEDULED)

        resp = self.client.post(
            f"/api/v1/admissions/{admission.pk}/record-test-score",
            {"score": 120, "maxScore": 100},
            format="json",
        )

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errors"], {"score": ["Score cannot exceed max score"]})

    def test_enrollment_failure_is_server_error(self):
        admission = advance(self.service, create_inquiry(self.service), AdmissionStatus.ADMITTED)

        with patch.object(
            EnrollmentConverter, "generate_student_code", side_effect=EnrollmentError("sequence broken")
        ), self.assertLogs("apps.admissions", level="ERROR"):
            resp = self.client.post(f"/api/v1/admissions/{admission.pk}/enroll", {"rollNumber": 1}, format="json")

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"success": False, "error": "Enrollment failed"})
        admission.refresh_from_db()
        self.assertEqual(admission.status, AdmissionStatus.ADMITTED)

    def test_unknown_admission(self):
        resp = self.client.get("/api/v1/admissions/999999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"success": False, "error": "Admission 999999 not found"})

        resp = self.client.post("/api/v1/admissions/999999/reject", {"reason": "x"}, format="json")
        self.assertEqual(resp.status_code, 404)

    def test_get_admission(self):
        admission = create_inquiry(self.service)
        resp = self.client.get(f"/api/v1/admissions/{admission.pk}")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["temporaryId"], admission.temporary_id)
        self.assertEqual(resp.json()["data"]["fullNameEn"], "Ram Sharma")

    def test_reject(self):
        admission = create_inquiry(self.service)
        resp = self.client.post(
            f"/api/v1/admissions/{admission.pk}/reject", {"reason": "Below cutoff"}, format="json"
        )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["status"], "rejected")
        self.assertEqual(resp.json()["data"]["rejectionReason"], "Below cutoff")

    def test_list_with_meta(self):
        for name in ("Ram", "Sita", "Hari"):
            create_inquiry(self.service, firstNameEn=name)

        resp = self.client.get("/api/v1/admissions", {"page": 2, "limit": 2})

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(len(body["data"]), 1)
        self.assertEqual(body["meta"], {"total": 3, "page": 2, "limit": 2, "totalPages": 2})

    def test_list_filters(self):
        create_inquiry(self.service)
        create_inquiry(self.service, firstNameEn="Sita", applyingForClass=7)

        resp = self.client.get("/api/v1/admissions", {"applyingForClass": 7, "status": "inquiry"})
        self.assertEqual([row["firstNameEn"] for row in resp.json()["data"]], ["Sita"])

        resp = self.client.get("/api/v1/admissions", {"search": "ram"})
        self.assertEqual(resp.json()["meta"]["total"], 1)

    def test_list_rejects_bad_query(self):
        resp = self.client.get("/api/v1/admissions", {"limit": 500, "status": "pending"})

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(set(resp.json()["errors"]), {"limit", "status"})

    def test_reports(self):
        create_inquiry(self.service)
        resp = self.client.get("/api/v1/admissions/reports")

        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["total"], 1)
        self.assertEqual(data["byStatus"]["inquiry"], 1)
        self.assertEqual(data["byClass"], {"5": 1})

    def test_authentication_required(self):
        anonymous = APIClient()

        resp = anonymous.post("/api/v1/admissions/inquiry", INQUIRY_PAYLOAD, format="json")

        self.assertEqual(resp.status_code, 401)
        self.assertFalse(resp.json()["success"])
        self.assertFalse(Admission.objects.exists())

    def test_token_login(self):
        resp = APIClient().post(
            "/api/v1/auth/token", {"username": "officer", "password": "p"}, format="json"
        )
        self.assertEqual(resp.status_code, 200)

        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.json()['access']}")
        self.assertEqual(client.get("/api/v1/admissions").status_code, 200)


class NotificationApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=get_user_model().objects.create_user(username="u", password="p"))

    def test_inquiry_with_email_sends_acknowledgement(self):
        self.client.post(
            "/api/v1/admissions/inquiry", {**INQUIRY_PAYLOAD, "email": "parent@example.com"}, format="json"
        )

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["parent@example.com"])
        self.assertIn("Inquiry received", mail.outbox[0].subject)

    def test_failed_transition_sends_nothing(self):
        admission = create_inquiry(AdmissionWorkflowService(), email="parent@example.com")
        self.client.post(f"/api/v1/admissions/{admission.pk}/admit", {}, format="json")
        self.assertEqual(mail.outbox, [])
