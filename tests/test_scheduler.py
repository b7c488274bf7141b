# tests/test_scheduler.py - PaymentJobScheduler lifecycle and job wrappers

import atexit
import importlib
import sys
import threading
from unittest.mock import MagicMock

import pytest
from django.apps import apps

from common.apps import serves_with_runserver
from common.logging_config import get_request_id
from common.scheduler import GENERATION_JOB_ID, REMINDER_JOB_ID, STARTUP_JOB_ID, PaymentJobScheduler
from core.dto import GenerationSummary


@pytest.fixture
def generator():
    generator = MagicMock()
    generator.scan_and_generate_upcoming.return_value = GenerationSummary(total=2, created=1)
    return generator


@pytest.fixture
def reminders():
    service = MagicMock()
    service.send_payment_reminders.return_value = 3
    return service


@pytest.fixture
def job_scheduler(generator, reminders):
    return PaymentJobScheduler(
        scheduler_factory=MagicMock(),
        generator_factory=lambda: generator,
        reminder_factory=lambda: reminders,
    )


class TestStartStop:
    def test_start_registers_jobs(self, job_scheduler):
        backend = job_scheduler.start()

        job_ids = [call.kwargs['id'] for call in backend.add_job.call_args_list]
        assert job_ids == [GENERATION_JOB_ID, REMINDER_JOB_ID, STARTUP_JOB_ID]
        backend.start.assert_called_once_with()
        assert job_scheduler.running

    def test_start_without_startup_run(self, job_scheduler):
        backend = job_scheduler.start(run_at_startup=False)

        job_ids = [call.kwargs['id'] for call in backend.add_job.call_args_list]
        assert STARTUP_JOB_ID not in job_ids

    def test_second_start_is_a_no_op(self, job_scheduler):
        first = job_scheduler.start()
        second = job_scheduler.start()

        assert first is second
        job_scheduler.scheduler_factory.assert_called_once()

    def test_stop_shuts_down(self, job_scheduler):
        backend = job_scheduler.start()

        job_scheduler.stop(wait=False)

        backend.shutdown.assert_called_once_with(wait=False)
        assert not job_scheduler.running

    def test_stop_when_not_started(self, job_scheduler):
        job_scheduler.stop()
        job_scheduler.scheduler_factory.assert_not_called()


class TestGenerationJob:
    def test_returns_summary(self, job_scheduler, generator, settings):
        settings.PAYMENT_LEAD_DAYS = 6

        summary = job_scheduler.run_generation()

        assert summary.created == 1
        generator.scan_and_generate_upcoming.assert_called_once_with(lead_days=6)

    def test_skipped_while_another_run_holds_the_lock(self, job_scheduler, generator):
        job_scheduler._generation_lock.acquire()
        try:
            assert job_scheduler.run_generation_now() is None
        finally:
            job_scheduler._generation_lock.release()

        generator.scan_and_generate_upcoming.assert_not_called()

    def test_concurrent_run_is_skipped(self, job_scheduler, generator):
        started = threading.Event()
        release = threading.Event()
        results = []

        def slow_scan(**kwargs):
            started.set()
            release.wait(5)
            return GenerationSummary(created=1)

        generator.scan_and_generate_upcoming.side_effect = slow_scan
        worker = threading.Thread(target=lambda: results.append(job_scheduler.run_generation()))
        worker.start()
        started.wait(5)

        assert job_scheduler.run_generation() is None

        release.set()
        worker.join(5)
        assert results[0].created == 1
        assert generator.scan_and_generate_upcoming.call_count == 1

    def test_failure_is_logged_and_lock_released(self, job_scheduler, generator, caplog):
        generator.scan_and_generate_upcoming.side_effect = RuntimeError("database is locked")

        with caplog.at_level('ERROR'):
            assert job_scheduler.run_generation() is None

        assert "database is locked" in caplog.text
        assert job_scheduler._generation_lock.acquire(blocking=False)
        job_scheduler._generation_lock.release()

    def test_logs_are_tagged_with_job_name(self, job_scheduler, generator):
        seen = []
        def scan(**kwargs):
            seen.append(get_request_id())
            return GenerationSummary()

        generator.scan_and_generate_upcoming.side_effect = scan

        job_scheduler.run_generation()

        assert seen == [f'job:{GENERATION_JOB_ID}']
        assert get_request_id() is None


class TestReminderJob:
    def test_returns_count(self, job_scheduler, reminders, settings):
        settings.PAYMENT_REMINDER_DAYS = 2

        assert job_scheduler.run_reminders() == 3
        reminders.send_payment_reminders.assert_called_once_with(days_ahead=2)

    def test_failure_returns_none(self, job_scheduler, reminders):
        reminders.send_payment_reminders.side_effect = RuntimeError("boom")
        assert job_scheduler.run_reminders() is None


class TestJobWrapper:
    def test_wrapped_job_returns_result(self, monkeypatch):
        calls = []
        monkeypatch.setattr('common.scheduler.close_old_connections', lambda: calls.append('close'))

        def work():
            calls.append('work')
            return 7

        job = PaymentJobScheduler._as_job(work)

        assert job() == 7
        assert calls == ['close', 'work', 'close']
        assert job.__name__ == 'work'


class TestServesWithRunserver:
    def test_autoreloader_child(self):
        assert serves_with_runserver(['manage.py', 'runserver'], {'RUN_MAIN': 'true'})

    def test_autoreloader_parent(self):
        assert not serves_with_runserver(['manage.py', 'runserver'], {})

    def test_noreload(self):
        assert serves_with_runserver(['manage.py', 'runserver', '--noreload'], {})

    def test_other_commands_and_test_runners(self):
        assert not serves_with_runserver(['manage.py', 'migrate'], {'RUN_MAIN': 'true'})
        assert not serves_with_runserver(['manage.py'], {})
        assert not serves_with_runserver(['/usr/bin/pytest', 'tests'], {})


class TestStartScheduler:
    @pytest.fixture
    def common_config(self, monkeypatch):
        config = apps.get_app_config('common')
        handle = MagicMock()
        handle.running = False
        monkeypatch.setattr(config, 'scheduler', handle)
        monkeypatch.setattr('common.apps.atexit.register', MagicMock())
        return config

    def test_starts_and_registers_shutdown(self, common_config, settings):
        settings.ENABLE_BACKGROUND_SCHEDULER = True

        assert common_config.start_scheduler() is True

        common_config.scheduler.start.assert_called_once_with()
        atexit.register.assert_called_once_with(common_config.scheduler.stop)

    def test_disabled_by_settings(self, common_config, settings):
        settings.ENABLE_BACKGROUND_SCHEDULER = False

        assert common_config.start_scheduler() is False

        common_config.scheduler.start.assert_not_called()

    def test_already_running(self, common_config, settings):
        settings.ENABLE_BACKGROUND_SCHEDULER = True
        common_config.scheduler.running = True

        assert common_config.start_scheduler() is True

        common_config.scheduler.start.assert_not_called()

    def test_wsgi_entry_point_starts_jobs(self, monkeypatch):
        start = MagicMock()
        monkeypatch.setattr(apps.get_app_config('common'), 'start_scheduler', start)
        monkeypatch.delitem(sys.modules, 'hostel.wsgi', raising=False)

        importlib.import_module('hostel.wsgi')

        start.assert_called_once_with()
