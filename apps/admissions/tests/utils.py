from apps.admissions.workflow import AdmissionStatus

INQUIRY_PAYLOAD = {
    "firstNameEn": "Ram",
    "lastNameEn": "Sharma",
    "applyingForClass": 5,
    "guardianName": "Hari Sharma",
    "guardianPhone": "9841234567",
    "inquirySource": "walk-in",
    "academicYear": "2081",
}

# Payload that moves an admission into each status from its predecessor.
STEP_PAYLOADS = {
    AdmissionStatus.APPLIED: {"applicationFee": "500.00", "fatherName": "Hari Sharma"},
    AdmissionStatus.TEST_SCHEDULED: {"testDate": "2024-03-01T10:00:00Z"},
    AdmissionStatus.TESTED: {"score": 85, "maxScore": 100},
    AdmissionStatus.INTERVIEW_SCHEDULED: {"interviewDate": "2024-03-05T11:00:00Z", "interviewerName": "Principal"},
    AdmissionStatus.INTERVIEWED: {"feedback": "Confident and curious", "score": 90},
    AdmissionStatus.ADMITTED: {},
}

STEP_OPERATIONS = {
    AdmissionStatus.APPLIED: "convert_to_application",
    AdmissionStatus.TEST_SCHEDULED: "schedule_test",
    AdmissionStatus.TESTED: "record_test_score",
    AdmissionStatus.INTERVIEW_SCHEDULED: "schedule_interview",
    AdmissionStatus.INTERVIEWED: "record_interview",
    AdmissionStatus.ADMITTED: "admit",
}


def create_inquiry(service, **overrides):
    return service.create_inquiry({**INQUIRY_PAYLOAD, **overrides})


def advance(service, admission, status):
    """Walk ``admission`` forward one step at a time until it reaches ``status``."""
    for step, operation in STEP_OPERATIONS.items():
        admission = getattr(service, operation)(admission.pk, STEP_PAYLOADS[step])
        if step == status:
            break
    return admission


# Every transition operation with a payload that would pass validation.
ALL_OPERATIONS = [
    *((operation, STEP_PAYLOADS[step]) for step, operation in STEP_OPERATIONS.items()),
    ("enroll", {"rollNumber": 1}),
    ("reject", {"reason": "Late application"}),
]
