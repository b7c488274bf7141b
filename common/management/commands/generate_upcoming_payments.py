"""
Management command to create upcoming PENDING payments for all active occupancies.
Runs the same scan as the daily scheduled job.

Usage:
    python manage.py generate_upcoming_payments
    python manage.py generate_upcoming_payments --lead-days 7 --dry-run
    python manage.py generate_upcoming_payments --date 2025-03-01

Can be added to crontab when the background scheduler is disabled:
    0 2 * * * cd /path/to/project && python manage.py generate_upcoming_payments
"""
from datetime import date

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.constants import DefaultLimits
from payments.services import PaymentGenerator


class Command(BaseCommand):
    help = 'Create upcoming payments whose due date falls within the lead window'

    def add_arguments(self, parser):
        parser.add_argument(
            '--lead-days',
            type=int,
            default=getattr(settings, 'PAYMENT_LEAD_DAYS', DefaultLimits.PAYMENT_LEAD_DAYS),
            help='Create payments due within this many days (default: PAYMENT_LEAD_DAYS)',
        )
        parser.add_argument(
            '--date',
            help='Run as if today were this date (YYYY-MM-DD)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be created without actually creating records',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        lead_days = options['lead_days']
        if lead_days < 0:
            raise CommandError("--lead-days cannot be negative")

        today = None
        if options['date']:
            try:
                today = date.fromisoformat(options['date'])
            except ValueError:
                raise CommandError(f"Invalid --date '{options['date']}', expected YYYY-MM-DD")

        generator = PaymentGenerator()
        run_date = today or generator.clock()

        self.stdout.write(f"\n{'='*60}")
        self.stdout.write(f"  UPCOMING PAYMENT GENERATION - {run_date.isoformat()} (lead {lead_days} days)")
        self.stdout.write(f"{'='*60}\n")

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN MODE - No records will be created\n"))

        summary = generator.scan_and_generate_upcoming(lead_days=lead_days, today=run_date, dry_run=dry_run)

        # Summary
        self.stdout.write(f"\n{'='*60}")
        self.stdout.write("  SUMMARY")
        self.stdout.write(f"{'='*60}")
        self.stdout.write(f"  Active occupancies: {summary.total}")
        self.stdout.write(f"  Already had records: {summary.already_exists}")
        self.stdout.write(f"  No base payment: {summary.no_base_payment}")
        self.stdout.write(f"  Not yet due: {summary.not_due}")
        if summary.failed:
            self.stdout.write(self.style.ERROR(f"  Failed: {summary.failed}"))

        if dry_run:
            self.stdout.write(self.style.WARNING(f"  Would create: {summary.created}"))
        else:
            self.stdout.write(self.style.SUCCESS(f"  Created: {summary.created}"))

        self.stdout.write(f"{'='*60}\n")
