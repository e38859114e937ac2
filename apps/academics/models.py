# apps/academics/models.py
from django.db import models


class Class(models.Model):
    """School class section a new student can be placed into"""
    name = models.CharField(max_length=50)  # e.g., "Grade 6-A"
    grade_level = models.PositiveSmallIntegerField()  # 1-12
    section = models.CharField(max_length=10, blank=True)  # e.g., "A"
    capacity = models.IntegerField(default=50)
    academic_year = models.CharField(max_length=20)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Classes"
        ordering = ['grade_level', 'section']

    def __str__(self):
        return f"{self.name} ({self.academic_year})"

    @property
    def enrolled_count(self):
        """Number of active students placed in this class"""
        return self.students.filter(status='active').count()
