# apps/admissions/views.py
import math

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from .exceptions import ValidationError
from .notifications import send_admission_status_email
from .serializers import (
    AdmissionListQuerySerializer,
    AdmissionSerializer,
    StatisticsQuerySerializer,
    StudentSerializer,
)
from .services import AdmissionWorkflowService

workflow = AdmissionWorkflowService()


def _success(data, message=None, status_code=status.HTTP_200_OK, meta=None):
    body = {'success': True, 'data': data}
    if message:
        body['message'] = message
    if meta is not None:
        body['meta'] = meta
    return Response(body, status=status_code)


def _query(serializer_class, request):
    serializer = serializer_class(data=request.query_params)
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return serializer.validated_data


def _transition_response(admission, message):
    send_admission_status_email(admission)
    return _success(AdmissionSerializer(admission).data, message)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_inquiry(request):
    admission = workflow.create_inquiry(request.data, request.user.id)
    send_admission_status_email(admission)
    return _success(
        AdmissionSerializer(admission).data,
        'Inquiry created successfully',
        status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def convert_to_application(request, admission_id):
    admission = workflow.convert_to_application(admission_id, request.data, request.user.id)
    return _transition_response(admission, 'Application submitted successfully')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def schedule_test(request, admission_id):
    admission = workflow.schedule_test(admission_id, request.data, request.user.id)
    return _transition_response(admission, 'Admission test scheduled successfully')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def record_test_score(request, admission_id):
    admission = workflow.record_test_score(admission_id, request.data, request.user.id)
    return _transition_response(admission, 'Test score recorded successfully')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def schedule_interview(request, admission_id):
    admission = workflow.schedule_interview(admission_id, request.data, request.user.id)
    return _transition_response(admission, 'Interview scheduled successfully')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def record_interview(request, admission_id):
    admission = workflow.record_interview(admission_id, request.data, request.user.id)
    return _transition_response(admission, 'Interview feedback recorded successfully')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def admit(request, admission_id):
    admission = workflow.admit(admission_id, request.data, request.user.id)
    return _transition_response(admission, 'Applicant admitted successfully')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def enroll(request, admission_id):
    """Enroll an admitted applicant and return both the admission and the new student"""
    result = workflow.enroll(admission_id, request.data, request.user.id)
    send_admission_status_email(result.admission, student=result.student)
    return _success(
        {
            'admission': AdmissionSerializer(result.admission).data,
            'student': StudentSerializer(result.student).data,
        },
        'Applicant enrolled as student successfully',
        status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def reject(request, admission_id):
    admission = workflow.reject(admission_id, request.data, request.user.id)
    return _transition_response(admission, 'Applicant rejected')


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_admission(request, admission_id):
    admission = workflow.get(admission_id)
    return _success(AdmissionSerializer(admission).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_admissions(request):
    """Filtered, paginated admissions list"""
    params = _query(AdmissionListQuerySerializer, request)
    page, limit = params['page'], params['limit']

    admissions, total = workflow.list_admissions(
        status=params.get('status'),
        applying_for_class=params.get('applyingForClass'),
        academic_year=params.get('academicYear'),
        search=params.get('search'),
        page=page,
        limit=limit,
    )

    return _success(
        AdmissionSerializer(admissions, many=True).data,
        meta={
            'total': total,
            'page': page,
            'limit': limit,
            'totalPages': math.ceil(total / limit) if total else 0,
        },
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def admission_reports(request):
    params = _query(StatisticsQuerySerializer, request)
    return _success(workflow.get_statistics(academic_year=params.get('academicYear')))
