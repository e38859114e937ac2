# apps/admissions/management/commands/admission_statistics.py
from django.core.management.base import BaseCommand

from apps.admissions.services import AdmissionWorkflowService
from apps.admissions.workflow import AdmissionStatus


class Command(BaseCommand):
    help = 'Print admission counts by status and by requested class'

    def add_arguments(self, parser):
        parser.add_argument('--academic-year', dest='academic_year', default=None,
                            help='Only count admissions for this academic year')

    def handle(self, *args, **options):
        stats = AdmissionWorkflowService().get_statistics(academic_year=options['academic_year'])

        self.stdout.write('Admission statistics')
        self.stdout.write('=' * 40)
        self.stdout.write(f"Total admissions: {stats['total']}")

        self.stdout.write('\nBy status:')
        for status in AdmissionStatus:
            self.stdout.write(f"  {status.label:<22}{stats['byStatus'][status.value]:>6}")

        self.stdout.write('\nBy class:')
        if not stats['byClass']:
            self.stdout.write('  (none)')
        for grade, count in stats['byClass'].items():
            self.stdout.write(f"  Class {grade:<16}{count:>6}")

        self.stdout.write('=' * 40)
        self.stdout.write(self.style.SUCCESS('Done'))
