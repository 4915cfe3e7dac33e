"""Prometheus metrics for the CreditWise service.

Metrics are organized into two categories:

Business Metrics (for Product/Risk):
- creditwise_reports_generated_total: Reports by grade
- creditwise_credit_score: Distribution of generated scores
- creditwise_avg_credit_score: Running average of generated scores
- creditwise_transactions_ingested_total: Transactions saved by source

Technical Metrics (for Engineering/SRE):
- creditwise_report_generation_latency_seconds: Report generation latency
- creditwise_pdf_render_latency_seconds: PDF rendering latency
- creditwise_text_generation_latency_seconds: Text generation latency
- creditwise_text_generation_total: Text generation calls by outcome
- creditwise_text_generation_failures_total: Text generation failures
- creditwise_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Risk dashboards)
# =============================================================================

reports_generated_total = Counter(
    "creditwise_reports_generated_total",
    "Total number of credit reports generated",
    ["grade"],  # A, B+, B, C, D
)

credit_score_histogram = Histogram(
    "creditwise_credit_score",
    "Distribution of generated credit scores",
    buckets=[300, 400, 500, 600, 700, 800, 900, 1000],
)

avg_credit_score_gauge = Gauge(
    "creditwise_avg_credit_score",
    "Average credit score across generated reports",
)

transactions_ingested_total = Counter(
    "creditwise_transactions_ingested_total",
    "Total number of transactions saved",
    ["source"],  # manual, document
)

# Track totals for computing the average
_report_count = 0
_score_sum = 0


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

report_generation_latency = Histogram(
    "creditwise_report_generation_latency_seconds",
    "Report generation latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

pdf_render_latency = Histogram(
    "creditwise_pdf_render_latency_seconds",
    "PDF report rendering latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

text_generation_latency = Histogram(
    "creditwise_text_generation_latency_seconds",
    "Text generation service latency in seconds",
    ["operation"],  # narrative, extraction
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

text_generation_total = Counter(
    "creditwise_text_generation_total",
    "Total number of text generation requests",
    ["operation", "status"],  # success, failure
)

text_generation_failures = Counter(
    "creditwise_text_generation_failures_total",
    "Total number of text generation failures",
    ["operation", "error_type"],  # timeout, error, invalid
)

http_requests_total = Counter(
    "creditwise_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "creditwise_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_report(risk_grade: str, credit_score: int) -> None:
    """Record a generated report in metrics."""
    global _report_count, _score_sum

    reports_generated_total.labels(grade=risk_grade).inc()
    credit_score_histogram.observe(credit_score)

    _report_count += 1
    _score_sum += credit_score
    avg_credit_score_gauge.set(_score_sum / _report_count)


def record_transactions_ingested(source: str, count: int) -> None:
    """Record saved transactions by source."""
    if count > 0:
        transactions_ingested_total.labels(source=source).inc(count)


@contextmanager
def track_report_generation_latency() -> Generator[None, None, None]:
    """Context manager to track report generation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        report_generation_latency.observe(duration)


@contextmanager
def track_pdf_render_latency() -> Generator[None, None, None]:
    """Context manager to track PDF rendering latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        pdf_render_latency.observe(duration)


@contextmanager
def track_text_generation_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track text generation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        text_generation_latency.labels(operation=operation).observe(duration)


def record_text_generation_success(operation: str) -> None:
    """Record a successful text generation request."""
    text_generation_total.labels(operation=operation, status="success").inc()


def record_text_generation_failure(operation: str, error_type: str) -> None:
    """Record a text generation failure."""
    text_generation_total.labels(operation=operation, status="failure").inc()
    text_generation_failures.labels(operation=operation, error_type=error_type).inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
