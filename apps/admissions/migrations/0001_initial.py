import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


GENDER_CHOICES = [("male", "Male"), ("female", "Female"), ("other", "Other")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("academics", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Student",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("student_code", models.CharField(max_length=30, unique=True)),
                ("first_name_en", models.CharField(max_length=50)),
                ("middle_name_en", models.CharField(blank=True, max_length=50)),
                ("last_name_en", models.CharField(max_length=50)),
                ("first_name_np", models.CharField(blank=True, max_length=50)),
                ("middle_name_np", models.CharField(blank=True, max_length=50)),
                ("last_name_np", models.CharField(blank=True, max_length=50)),
                ("date_of_birth_bs", models.CharField(blank=True, max_length=10)),
                ("date_of_birth_ad", models.DateField(blank=True, null=True)),
                ("gender", models.CharField(blank=True, choices=GENDER_CHOICES, max_length=10)),
                ("address_en", models.CharField(blank=True, max_length=255)),
                ("address_np", models.CharField(blank=True, max_length=255)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("email", models.EmailField(blank=True, max_length=100)),
                ("emergency_contact", models.CharField(blank=True, max_length=20)),
                ("father_name", models.CharField(blank=True, max_length=100)),
                ("father_phone", models.CharField(blank=True, max_length=20)),
                ("mother_name", models.CharField(blank=True, max_length=100)),
                ("mother_phone", models.CharField(blank=True, max_length=20)),
                ("local_guardian_name", models.CharField(blank=True, max_length=100)),
                ("local_guardian_phone", models.CharField(blank=True, max_length=20)),
                ("local_guardian_relation", models.CharField(blank=True, max_length=50)),
                ("admission_date", models.DateField()),
                ("admission_class", models.PositiveSmallIntegerField()),
                ("roll_number", models.PositiveIntegerField()),
                ("previous_school", models.CharField(blank=True, max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("inactive", "Inactive"),
                            ("graduated", "Graduated"),
                            ("transferred", "Transferred"),
                        ],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "current_class",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="students",
                        to="academics.class",
                    ),
                ),
            ],
            options={
                "ordering": ["student_code"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("current_class__isnull", False)),
                        fields=("current_class", "roll_number"),
                        name="unique_roll_number_per_class",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Admission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("temporary_id", models.CharField(editable=False, max_length=50, unique=True)),
                ("first_name_en", models.CharField(max_length=50)),
                ("middle_name_en", models.CharField(blank=True, max_length=50)),
                ("last_name_en", models.CharField(max_length=50)),
                ("first_name_np", models.CharField(blank=True, max_length=50)),
                ("middle_name_np", models.CharField(blank=True, max_length=50)),
                ("last_name_np", models.CharField(blank=True, max_length=50)),
                ("date_of_birth_bs", models.CharField(blank=True, max_length=10)),
                ("date_of_birth_ad", models.DateField(blank=True, null=True)),
                ("gender", models.CharField(blank=True, choices=GENDER_CHOICES, max_length=10)),
                ("address_en", models.CharField(blank=True, max_length=255)),
                ("address_np", models.CharField(blank=True, max_length=255)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("email", models.EmailField(blank=True, max_length=100)),
                ("father_name", models.CharField(blank=True, max_length=100)),
                ("father_phone", models.CharField(blank=True, max_length=20)),
                ("mother_name", models.CharField(blank=True, max_length=100)),
                ("mother_phone", models.CharField(blank=True, max_length=20)),
                ("guardian_name", models.CharField(blank=True, max_length=100)),
                ("guardian_phone", models.CharField(blank=True, max_length=20)),
                ("guardian_relation", models.CharField(blank=True, max_length=50)),
                (
                    "applying_for_class",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                ("previous_school", models.CharField(blank=True, max_length=255)),
                ("previous_class", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("previous_gpa", models.DecimalField(blank=True, decimal_places=2, max_digits=3, null=True)),
                ("academic_year", models.CharField(blank=True, max_length=20)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("inquiry", "Inquiry"),
                            ("applied", "Applied"),
                            ("test_scheduled", "Test Scheduled"),
                            ("tested", "Tested"),
                            ("interview_scheduled", "Interview Scheduled"),
                            ("interviewed", "Interviewed"),
                            ("admitted", "Admitted"),
                            ("enrolled", "Enrolled"),
                            ("rejected", "Rejected"),
                            ("withdrawn", "Withdrawn"),
                        ],
                        default="inquiry",
                        max_length=20,
                    ),
                ),
                ("inquiry_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "inquiry_source",
                    models.CharField(
                        blank=True,
                        choices=[("walk-in", "Walk-in"), ("phone", "Phone"), ("online", "Online"), ("referral", "Referral")],
                        max_length=20,
                    ),
                ),
                ("inquiry_notes", models.TextField(blank=True)),
                ("application_date", models.DateTimeField(blank=True, null=True)),
                ("application_fee", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("application_fee_paid", models.BooleanField(default=False)),
                ("documents_verified", models.BooleanField(default=False)),
                ("documents_notes", models.TextField(blank=True)),
                ("admission_test_date", models.DateTimeField(blank=True, null=True)),
                ("admission_test_score", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("admission_test_max_score", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("admission_test_remarks", models.TextField(blank=True)),
                ("interview_date", models.DateTimeField(blank=True, null=True)),
                ("interviewer_name", models.CharField(blank=True, max_length=100)),
                ("interview_feedback", models.TextField(blank=True)),
                ("interview_score", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("admission_date", models.DateTimeField(blank=True, null=True)),
                ("admission_offer_letter_url", models.CharField(blank=True, max_length=500)),
                ("enrollment_date", models.DateTimeField(blank=True, null=True)),
                ("rejection_reason", models.TextField(blank=True)),
                ("rejection_date", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "enrolled_student",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="admission",
                        to="admissions.student",
                    ),
                ),
                (
                    "processed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="processed_admissions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status"], name="admission_status_idx"),
                    models.Index(fields=["applying_for_class"], name="admission_class_idx"),
                    models.Index(fields=["inquiry_date"], name="admission_inquiry_date_idx"),
                    models.Index(fields=["academic_year"], name="admission_academic_year_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("enrolled_student__isnull", False), ("status", "enrolled")),
                            models.Q(models.Q(("status", "enrolled"), _negated=True), ("enrolled_student__isnull", True)),
                            _connector="OR",
                        ),
                        name="enrolled_student_iff_enrolled",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("applying_for_class__gte", 1), ("applying_for_class__lte", 12)),
                        name="applying_for_class_1_to_12",
                    ),
                ],
            },
        ),
    ]
