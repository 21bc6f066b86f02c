"""Prometheus metrics definitions for recipebox."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "recipebox_http_requests_total",
    "Total number of HTTP requests processed by the recipebox server",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "recipebox_http_request_duration_seconds",
    "Latency of HTTP requests processed by the recipebox server",
    ["method", "path"],
)

UPSTREAM_REQUESTS = Counter(
    "recipebox_upstream_requests_total",
    "Requests forwarded to the upstream recipe provider by endpoint and status",
    ["endpoint", "status"],
)

CONTACT_SUBMISSIONS = Counter(
    "recipebox_contact_submissions_total",
    "Contact form submissions by result",
    ["result"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "UPSTREAM_REQUESTS",
    "CONTACT_SUBMISSIONS",
]
