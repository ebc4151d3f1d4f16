"""Prometheus metrics for monitoring health levels, validation failures and request latency"""

from prometheus_client import Counter, Histogram

from finhealth.domain.models import AnalysisResult

# Analysis metrics
analysis_counter = Counter(
    "finhealth_analysis_total",
    "Total financial health analyses completed",
    ["health_level", "mode"],  # excellent | good | fair | limited | critical
)

validation_failure_counter = Counter(
    "finhealth_validation_failures_total",
    "Analyses rejected by input validation",
)

recommendations_histogram = Histogram(
    "finhealth_recommendations_emitted",
    "Recommendations returned per analysis",
    buckets=[0, 1, 2, 4, 6, 8, 10],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(result: AnalysisResult) -> None:
    """Record outcome metrics for one completed analysis"""
    analysis_counter.labels(health_level=result.health_level, mode=result.analysis_mode.value).inc()
    recommendations_histogram.observe(len(result.prioritized_recommendations))
