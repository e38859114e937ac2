# apps/admissions/admin.py
from django.contrib import admin
from .models import Admission, Student

WORKFLOW_FIELDS = (
    'temporary_id', 'status', 'inquiry_date', 'application_date',
    'admission_test_date', 'admission_test_score', 'admission_test_max_score', 'admission_test_remarks',
    'interview_date', 'interviewer_name', 'interview_feedback', 'interview_score',
    'admission_date', 'admission_offer_letter_url',
    'enrolled_student', 'enrollment_date', 'rejection_reason', 'rejection_date',
    'processed_by', 'created_at', 'updated_at',
)


@admin.register(Admission)
class AdmissionAdmin(admin.ModelAdmin):
    """Applicant details are editable; workflow columns only change through the API"""
    list_display = ['temporary_id', 'first_name_en', 'last_name_en', 'applying_for_class', 'status', 'inquiry_date']
    list_filter = ['status', 'applying_for_class', 'academic_year', 'inquiry_source']
    search_fields = ['temporary_id', 'first_name_en', 'last_name_en', 'guardian_phone']
    readonly_fields = WORKFLOW_FIELDS

    fieldsets = (
        ('Workflow', {
            'fields': ('temporary_id', 'status', 'processed_by', 'created_at', 'updated_at')
        }),
        ('Applicant', {
            'fields': ('first_name_en', 'middle_name_en', 'last_name_en',
                       'first_name_np', 'middle_name_np', 'last_name_np',
                       'date_of_birth_bs', 'date_of_birth_ad', 'gender')
        }),
        ('Contact & Guardians', {
            'fields': ('address_en', 'address_np', 'phone', 'email',
                       'father_name', 'father_phone', 'mother_name', 'mother_phone',
                       'guardian_name', 'guardian_phone', 'guardian_relation')
        }),
        ('Academic', {
            'fields': ('applying_for_class', 'academic_year', 'previous_school', 'previous_class', 'previous_gpa')
        }),
        ('Inquiry & Application', {
            'fields': ('inquiry_date', 'inquiry_source', 'inquiry_notes', 'application_date',
                       'application_fee', 'application_fee_paid', 'documents_verified', 'documents_notes')
        }),
        ('Test & Interview', {
            'fields': ('admission_test_date', 'admission_test_score', 'admission_test_max_score',
                       'admission_test_remarks', 'interview_date', 'interviewer_name',
                       'interview_feedback', 'interview_score')
        }),
        ('Outcome', {
            'fields': ('admission_date', 'admission_offer_letter_url', 'enrolled_student',
                       'enrollment_date', 'rejection_reason', 'rejection_date')
        }),
    )

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ['student_code', 'first_name_en', 'last_name_en', 'admission_class', 'current_class', 'roll_number', 'status']
    list_filter = ['status', 'admission_class', 'current_class']
    search_fields = ['student_code', 'first_name_en', 'last_name_en']
    readonly_fields = ['student_code', 'created_at', 'updated_at']
