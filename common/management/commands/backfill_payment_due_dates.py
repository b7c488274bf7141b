"""
Management command to fill in due dates on payments recorded without one.

The due day comes from the payment's occupancy join date; payments whose
occupancy is gone fall back to the 5th of the month.

Usage:
    python manage.py backfill_payment_due_dates --dry-run
"""
from django.core.management.base import BaseCommand

from payments.services import DueDateBackfillService


class Command(BaseCommand):
    help = 'Backfill due_date on payments that are missing it'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Count what would be updated without saving',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN MODE - No records will be updated\n"))

        summary = DueDateBackfillService().backfill_due_dates(dry_run=dry_run)

        self.stdout.write(f"  Payments without due date: {summary.total}")
        if dry_run:
            self.stdout.write(self.style.WARNING(f"  Would update: {summary.updated}"))
        else:
            self.stdout.write(self.style.SUCCESS(f"  Updated: {summary.updated}"))
        if summary.failed:
            self.stdout.write(self.style.ERROR(f"  Failed: {summary.failed}"))
