"""
Health Check Endpoints for the hostel manager

- /health/        liveness, no dependencies touched
- /health/ready/  database and cache reachable
- /health/deep/   readiness plus payment-job state and the ledger backlog
"""

import time
import logging
from django.apps import apps
from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.urls import path
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)


def _timed(probe):
    """Run a probe, returning (ok, latency_ms, error)"""
    start = time.monotonic()
    try:
        ok = probe()
        error = None if ok else 'probe returned an unexpected value'
    except Exception as e:
        ok, error = False, str(e)
    return ok, round((time.monotonic() - start) * 1000, 2), error


def _database_probe():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
        return cursor.fetchone() == (1,)


def _cache_probe():
    key = 'health_check_probe'
    cache.set(key, 'ok', 10)
    ok = cache.get(key) == 'ok'
    cache.delete(key)
    return ok


def _dependency_checks():
    checks, errors = {}, []
    for name, probe in (('database', _database_probe), ('cache', _cache_probe)):
        ok, latency, error = _timed(probe)
        checks[name] = {'status': ok, 'latency_ms': latency}
        if error:
            errors.append(f'{name}: {error}')
            logger.error(f'Health check - {name} error: {error}')
    return checks, errors


@csrf_exempt
@require_GET
def health_check(request):
    """Liveness for load balancers: the process answers"""
    return JsonResponse({'status': 'healthy', 'timestamp': time.time()})


@csrf_exempt
@require_GET
def readiness_check(request):
    """503 until the database and cache both answer"""
    checks, errors = _dependency_checks()
    ready = all(check['status'] for check in checks.values())
    return JsonResponse({
        'status': 'ready' if ready else 'not_ready',
        'timestamp': time.time(),
        'checks': {name: check['status'] for name, check in checks.items()},
        'errors': errors or None,
    }, status=200 if ready else 503)


@csrf_exempt
@require_GET
def deep_health_check(request):
    """
    Readiness plus the payment pipeline: whether the background scheduler
    runs in this process and how many payments are outstanding or overdue.
    Hits the payments table, so keep it off tight polling loops.
    """
    from core.constants import PaymentStatus
    from payments.models import Payment

    checks, errors = _dependency_checks()

    job_scheduler = getattr(apps.get_app_config('common'), 'scheduler', None)
    checks['scheduler'] = {'running': bool(job_scheduler and job_scheduler.running)}

    try:
        outstanding = Payment.objects.filter(status__in=PaymentStatus.OUTSTANDING)
        checks['payments'] = {
            'outstanding': outstanding.count(),
            'overdue': outstanding.filter(due_date__lt=timezone.localdate()).count(),
            'missing_due_date': Payment.objects.filter(due_date__isnull=True).count(),
        }
    except Exception as e:
        errors.append(f'payments: {e}')
        logger.error(f'Deep health check - payments error: {e}')

    healthy = checks['database']['status'] and checks['cache']['status']
    return JsonResponse({
        'status': 'healthy' if healthy else 'unhealthy',
        'timestamp': time.time(),
        'checks': checks,
        'errors': errors or None,
    }, status=200 if healthy else 503)


def get_health_urls():
    """URL patterns for the health endpoints, appended to the root urlconf"""
    return [
        path('health/', health_check, name='health_check'),
        path('health/ready/', readiness_check, name='readiness_check'),
        path('health/deep/', deep_health_check, name='deep_health_check'),
    ]
