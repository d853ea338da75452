"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "docvault_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "docvault_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

documents_ingested_total = Counter(
    "docvault_documents_ingested_total",
    "Documents written to blob and metadata storage",
    ["source"],
)

classification_outcomes_total = Counter(
    "docvault_classification_outcomes_total",
    "Per-document outcomes of classification passes",
    ["outcome"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)
