# apps/admissions/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('admissions', views.list_admissions, name='admission-list'),
    path('admissions/inquiry', views.create_inquiry, name='admission-inquiry'),
    path('admissions/reports', views.admission_reports, name='admission-reports'),
    path('admissions/<int:admission_id>', views.get_admission, name='admission-detail'),
    path('admissions/<int:admission_id>/apply', views.convert_to_application, name='admission-apply'),
    path('admissions/<int:admission_id>/schedule-test', views.schedule_test, name='admission-schedule-test'),
    path('admissions/<int:admission_id>/record-test-score', views.record_test_score, name='admission-record-test-score'),
    path('admissions/<int:admission_id>/schedule-interview', views.schedule_interview, name='admission-schedule-interview'),
    path('admissions/<int:admission_id>/record-interview', views.record_interview, name='admission-record-interview'),
    path('admissions/<int:admission_id>/admit', views.admit, name='admission-admit'),
    path('admissions/<int:admission_id>/enroll', views.enroll, name='admission-enroll'),
    path('admissions/<int:admission_id>/reject', views.reject, name='admission-reject'),
]
