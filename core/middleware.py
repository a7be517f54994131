# core/middleware.py

import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Logs every request with its response status and duration. JSON bodies of
    POST requests are logged at DEBUG level.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        if request.method == 'POST' and request.content_type == 'application/json' and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Request body: %s", request.body.decode('utf-8', errors='replace'))

        response = self.get_response(request)

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.path, response.status_code, elapsed_ms)
        return response
