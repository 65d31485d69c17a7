"""Prometheus metrics for completion calls."""

from prometheus_client import Counter, Histogram

completion_latency_ms = Histogram(
    "completion_latency_ms",
    "Completion attempt latency in milliseconds",
    ["operation", "outcome"],
    buckets=[100, 250, 500, 1000, 2000, 4000, 8000, 16000, 32000],
)

completion_errors_total = Counter(
    "completion_errors_total",
    "Total failed completion attempts",
    ["operation", "reason"],
)


class PrometheusCompletionMetrics:
    """Prometheus-based completion metrics implementation."""

    def record_latency(self, operation: str, outcome: str, latency_ms: float) -> None:
        """Record completion attempt latency."""
        completion_latency_ms.labels(operation=operation, outcome=outcome).observe(latency_ms)

    def inc_error(self, operation: str, reason: str) -> None:
        """Increment error counter."""
        completion_errors_total.labels(operation=operation, reason=reason).inc()
