from django.apps import AppConfig
import atexit
import logging
import os
import sys

logger = logging.getLogger(__name__)


def serves_with_runserver(argv, environ):
    """
    True in the runserver process that handles requests.

    With the autoreloader that is the child (RUN_MAIN=true); the parent only
    watches files. With --noreload there is a single process.
    """
    if len(argv) < 2 or argv[1] != 'runserver':
        return False
    return environ.get('RUN_MAIN') == 'true' or '--noreload' in argv


class CommonConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'common'

    def ready(self):
        """
        Create the payment job scheduler.

        runserver starts it here; WSGI servers start it from hostel/wsgi.py.
        Management commands, tests and shells never start it.
        """
        from .scheduler import PaymentJobScheduler
        self.scheduler = PaymentJobScheduler()

        if serves_with_runserver(sys.argv, os.environ):
            self.start_scheduler()

    def start_scheduler(self):
        """Start the background jobs in this process unless disabled or already running"""
        from django.conf import settings
        if not getattr(settings, 'ENABLE_BACKGROUND_SCHEDULER', True):
            logger.info("Background scheduler disabled by settings")
            return False
        if self.scheduler.running:
            return True

        try:
            self.scheduler.start()
        except Exception as e:
            logger.error(f"Failed to initialize scheduler: {str(e)}", exc_info=True)
            return False
        atexit.register(self.scheduler.stop)
        logger.info(f"Background task scheduler initialized (pid {os.getpid()})")
        return True
