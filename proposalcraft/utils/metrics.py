"""Prometheus metrics for conversation turns and document registration."""

from prometheus_client import Counter, Histogram

chat_turn_latency_ms = Histogram(
    "chat_turn_latency_ms",
    "Conversational turn latency in milliseconds",
    ["message_type", "outcome"],
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, 2500],
)

chat_turn_errors_total = Counter(
    "chat_turn_errors_total",
    "Total failed conversational turns",
    ["reason"],
)

documents_registered_total = Counter(
    "documents_registered_total",
    "Total documents registered",
    ["file_type"],
)


class PrometheusTurnMetrics:
    """Prometheus-based metrics for the conversation and document paths."""

    def record_turn(self, message_type: str, outcome: str, latency_ms: float) -> None:
        """Record turn latency."""
        chat_turn_latency_ms.labels(message_type=message_type, outcome=outcome).observe(
            latency_ms
        )

    def inc_turn_error(self, reason: str) -> None:
        """Increment turn error counter."""
        chat_turn_errors_total.labels(reason=reason).inc()

    def inc_document_registered(self, file_type: str) -> None:
        """Increment registered document counter."""
        documents_registered_total.labels(file_type=file_type).inc()


metrics = PrometheusTurnMetrics()
