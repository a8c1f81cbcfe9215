"""
Defines Prometheus metrics for monitoring the pump decoder daemon.

This module centralizes the definition of all Counter and Histogram metrics
used to track response decoding, pump model updates and HTTP requests.
"""

from prometheus_client import Counter, Histogram

RESPONSES_DECODED = Counter(
    "pump_daemon_responses_decoded_total", "Total pump responses decoded", ["command"]
)
DECODE_ERRORS = Counter("pump_daemon_decode_errors_total", "Total decode errors")
UNSUPPORTED_COMMANDS = Counter(
    "pump_daemon_unsupported_commands_total", "Total responses for unsupported commands"
)
PUMP_MODEL_UPDATES = Counter(
    "pump_daemon_pump_model_updates_total", "Total times the session pump model was set"
)
DECODE_LATENCY = Histogram(
    "pump_daemon_decode_latency_seconds", "Time spent decoding a pump response"
)
HTTP_REQUESTS = Counter(
    "pump_daemon_http_requests_total", "Total HTTP requests", ["method", "endpoint", "status_code"]
)
HTTP_LATENCY = Histogram(
    "pump_daemon_http_request_latency_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
)
