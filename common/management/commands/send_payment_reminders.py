"""
Management command to mark payments due soon as reminded.

Usage:
    python manage.py send_payment_reminders --days 3
"""
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.constants import DefaultLimits
from payments.services import PaymentReminderService


class Command(BaseCommand):
    help = 'Send reminders for outstanding payments due within the next few days'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=getattr(settings, 'PAYMENT_REMINDER_DAYS', DefaultLimits.PAYMENT_REMINDER_DAYS),
            help='Remind payments due within this many days (default: PAYMENT_REMINDER_DAYS)',
        )

    def handle(self, *args, **options):
        days = options['days']
        if days < 0:
            raise CommandError("--days cannot be negative")

        count = PaymentReminderService().send_payment_reminders(days_ahead=days)
        self.stdout.write(self.style.SUCCESS(f"Sent {count} payment reminder(s) for the next {days} day(s)"))
