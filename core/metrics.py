"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_issued_total = Counter(
    "licenses_issued_total",
    "Total licenses issued",
    ["source"],
)

license_activations_total = Counter(
    "license_activations_total",
    "Activation attempts by outcome",
    ["reason"],
)

license_device_resets_total = Counter(
    "license_device_resets_total",
    "Total administrative device resets",
)

# Payment metrics
payment_webhooks_total = Counter(
    "payment_webhooks_total",
    "Payment webhook deliveries by event type and outcome",
    ["event_type", "outcome"],
)

# Notification metrics
notifications_sent_total = Counter(
    "notifications_sent_total",
    "Notification sends by template and outcome",
    ["template", "outcome"],
)

deadline_reminders_sent_total = Counter(
    "deadline_reminders_sent_total",
    "Total regulation deadline reminders sent",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
