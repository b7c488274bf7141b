"""
Background scheduler for payment generation and reminders.
Uses APScheduler to run tasks in the background without requiring external services.

PaymentJobScheduler is an explicit handle: whoever creates it owns its
start/stop. The jobs themselves only call into the payment services.
"""
import logging
import threading
from datetime import datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from django.conf import settings
from django.db import close_old_connections
from django.utils import timezone

from core.constants import DefaultLimits
from .logging_config import request_id_context

logger = logging.getLogger(__name__)

GENERATION_JOB_ID = 'generate_upcoming_payments'
REMINDER_JOB_ID = 'send_payment_reminders'
STARTUP_JOB_ID = 'generate_upcoming_payments_startup'


def _setting(name, default):
    return getattr(settings, name, default)


class PaymentJobScheduler:
    """
    Owns the daily generation trigger, the daily reminder trigger and the
    startup generation run.

    The generation lock is non-blocking: a run that finds it held is
    skipped, so two ticks never interleave.
    """

    def __init__(self, scheduler_factory=BackgroundScheduler, generator_factory=None, reminder_factory=None):
        self.scheduler_factory = scheduler_factory
        self.generator_factory = generator_factory
        self.reminder_factory = reminder_factory
        self.scheduler = None
        self._generation_lock = threading.Lock()

    @staticmethod
    def _as_job(func):
        """Wrap a job so it runs on fresh database connections in the scheduler thread"""
        def job():
            close_old_connections()
            try:
                return func()
            finally:
                close_old_connections()
        job.__name__ = func.__name__
        return job

    @property
    def running(self):
        return self.scheduler is not None and self.scheduler.running

    def _generator(self):
        if self.generator_factory is not None:
            return self.generator_factory()
        from payments.services import PaymentGenerator
        return PaymentGenerator()

    def _reminder_service(self):
        if self.reminder_factory is not None:
            return self.reminder_factory()
        from payments.services import PaymentReminderService
        return PaymentReminderService()

    def run_generation(self):
        """
        Scheduled job: create upcoming payments for all active occupancies.
        Returns the scan summary, or None when skipped or failed.
        """
        if not self._generation_lock.acquire(blocking=False):
            logger.warning("Payment generation already running, skipping this run")
            return None
        try:
            with request_id_context(f'job:{GENERATION_JOB_ID}'):
                lead_days = _setting('PAYMENT_LEAD_DAYS', DefaultLimits.PAYMENT_LEAD_DAYS)
                logger.info(f"Starting scheduled payment generation (lead days: {lead_days})")
                try:
                    summary = self._generator().scan_and_generate_upcoming(lead_days=lead_days)
                except Exception as e:
                    logger.error(f"Error in scheduled payment generation: {str(e)}", exc_info=True)
                    return None
                logger.info(f"Scheduled payment generation completed: {summary.created} created, "
                            f"{summary.failed} failed")
                return summary
        finally:
            self._generation_lock.release()

    def run_generation_now(self):
        """Manual trigger for the generation job, used at startup and by admins"""
        logger.info("Running payment generation now")
        return self.run_generation()

    def run_reminders(self):
        """Scheduled job: remind tenants of payments due soon"""
        with request_id_context(f'job:{REMINDER_JOB_ID}'):
            days = _setting('PAYMENT_REMINDER_DAYS', DefaultLimits.PAYMENT_REMINDER_DAYS)
            try:
                count = self._reminder_service().send_payment_reminders(days_ahead=days)
            except Exception as e:
                logger.error(f"Error in scheduled payment reminders: {str(e)}", exc_info=True)
                return None
            logger.info(f"Scheduled payment reminders completed: {count} sent")
            return count

    def start(self, run_at_startup=True):
        """
        Create and start the background scheduler.
        Calling start on a running handle is a no-op.
        """
        if self.running:
            logger.warning("Scheduler is already running")
            return self.scheduler

        tz = timezone.get_current_timezone()
        scheduler = self.scheduler_factory(timezone=tz)

        generation_hour = _setting('PAYMENT_GENERATION_HOUR', 2)
        generation_minute = _setting('PAYMENT_GENERATION_MINUTE', 0)
        reminder_hour = _setting('PAYMENT_REMINDER_HOUR', 9)
        reminder_minute = _setting('PAYMENT_REMINDER_MINUTE', 0)

        scheduler.add_job(
            self._as_job(self.run_generation),
            trigger=CronTrigger(hour=generation_hour, minute=generation_minute, timezone=tz),
            id=GENERATION_JOB_ID,
            name='Generate Upcoming Payments',
            replace_existing=True,
            max_instances=1,  # Prevent overlapping runs
            coalesce=True  # Combine multiple pending executions into one
        )
        scheduler.add_job(
            self._as_job(self.run_reminders),
            trigger=CronTrigger(hour=reminder_hour, minute=reminder_minute, timezone=tz),
            id=REMINDER_JOB_ID,
            name='Send Payment Reminders',
            replace_existing=True,
            max_instances=1,
            coalesce=True
        )
        if run_at_startup:
            # One-off run shortly after start, off the startup thread
            scheduler.add_job(
                self._as_job(self.run_generation_now),
                trigger='date',
                run_date=datetime.now(tz) + timedelta(seconds=5),
                id=STARTUP_JOB_ID,
                name='Generate Upcoming Payments (startup)',
                replace_existing=True,
            )

        scheduler.start()
        self.scheduler = scheduler
        logger.info("Background scheduler started successfully")
        logger.info(f"Payment generation scheduled daily at {generation_hour:02d}:{generation_minute:02d}, "
                    f"reminders at {reminder_hour:02d}:{reminder_minute:02d} ({tz})")
        return scheduler

    def stop(self, wait=True):
        """
        Stop the background scheduler.
        Should be called when Django shuts down.
        """
        if not self.running:
            return
        try:
            self.scheduler.shutdown(wait=wait)
            logger.info("Background scheduler stopped")
        except Exception as e:
            logger.error(f"Error stopping scheduler: {str(e)}", exc_info=True)
        finally:
            self.scheduler = None
