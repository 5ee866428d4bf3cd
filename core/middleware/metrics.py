"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""

import re
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import errors_total, http_request_duration_seconds, http_requests_total

UUID_SEGMENT = re.compile(r"/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")
NUMERIC_SEGMENT = re.compile(r"/\d+")


def endpoint_label(request: HttpRequest) -> str:
    """
    Label for a request path.

    Uses the matched URL route when resolution happened, the path with
    ids collapsed otherwise, so label cardinality stays bounded.
    """
    match = getattr(request, "resolver_match", None)
    if match is not None and match.route:
        return "/" + match.route.lstrip("/")
    endpoint = UUID_SEGMENT.sub("/{id}", request.path)
    return NUMERIC_SEGMENT.sub("/{id}", endpoint)


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram
    - Unhandled exceptions by type
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        start_time = time.time()
        try:
            response = self.get_response(request)
        except Exception as e:
            endpoint = endpoint_label(request)
            errors_total.labels(error_type=type(e).__name__, endpoint=endpoint).inc()
            self._record(request, endpoint, 500, time.time() - start_time)
            raise

        self._record(request, endpoint_label(request), response.status_code, time.time() - start_time)
        return response

    def _record(self, request: HttpRequest, endpoint: str, status_code: int, duration: float):
        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=status_code,
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)
