from django.contrib import admin
from .models import Class


@admin.register(Class)
class ClassAdmin(admin.ModelAdmin):
    list_display = ['name', 'grade_level', 'section', 'capacity', 'enrolled_count', 'academic_year', 'is_active']
    list_filter = ['grade_level', 'academic_year', 'is_active']
    search_fields = ['name']
