"""
Logging configuration with request ID support

Every log record carries a `request_id`: the 8-character id of the HTTP
request being served, the `job:<name>` tag of a scheduled job, or 'N/A'.
"""
import logging
import threading
import uuid
from contextlib import contextmanager

_context = threading.local()


def get_request_id():
    return getattr(_context, 'request_id', None)


@contextmanager
def request_id_context(request_id):
    """Tag log records emitted on this thread with `request_id` for the duration"""
    previous = get_request_id()
    _context.request_id = request_id
    try:
        yield request_id
    finally:
        if previous is None:
            try:
                del _context.request_id
            except AttributeError:
                pass
        else:
            _context.request_id = previous


class RequestIDFilter(logging.Filter):
    """
    Logging filter to add request ID to log records
    """
    def filter(self, record):
        request_id = getattr(record, 'request_id', None) or get_request_id()
        record.request_id = request_id or 'N/A'
        return True


class RequestIDMiddleware:
    """
    Middleware to generate and attach unique request ID to each request.
    Request ID is available in request.request_id and in all log messages.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = str(uuid.uuid4())[:8]  # Short 8-character ID
        request.request_id = request_id

        with request_id_context(request_id):
            response = self.get_response(request)

        # Add to response headers for debugging
        response['X-Request-ID'] = request_id
        return response

    def process_exception(self, request, exception):
        """Log exceptions with request ID"""
        request_id = getattr(request, 'request_id', 'N/A')
        logger = logging.getLogger('django.request')
        logger.error(
            f"[{request_id}] Exception: {type(exception).__name__}: {str(exception)}",
            exc_info=True,
            extra={'request_id': request_id}
        )
