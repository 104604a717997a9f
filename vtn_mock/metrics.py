"""
Prometheus metrics for the mock VTN.
"""
from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry


class Metrics:
    """
    Centralized metrics, registered on a private registry per application.
    """

    def __init__(self, service_name: str = "mock-vtn", version: str = "0.1.0", registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        self.http_requests_active = Gauge(
            "http_requests_active",
            "Number of active HTTP requests",
            registry=self.registry,
        )

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        self.app_up = Gauge(
            "app_up",
            "Application up status (1=up, 0=down)",
            ["service", "version"],
            registry=self.registry,
        )
        self.app_up.labels(service=service_name, version=version).set(1)

        # VTN specific
        self.events_generated_total = Counter(
            "vtn_events_generated_total",
            "Events synthesized and stored",
            ["source"],
            registry=self.registry,
        )

        self.webhook_deliveries_total = Counter(
            "vtn_webhook_deliveries_total",
            "Outbound webhook delivery attempts by outcome",
            ["outcome"],
            registry=self.registry,
        )

        self.webhook_delivery_duration = Histogram(
            "vtn_webhook_delivery_duration_seconds",
            "Outbound webhook call duration in seconds",
            registry=self.registry,
        )

        self.subscriptions = Gauge(
            "vtn_subscriptions",
            "Number of registered subscriptions",
            registry=self.registry,
        )

    def record_event_generated(self, source: str):
        """Record a synthesized event; source is "polled" or "trigger"."""
        self.events_generated_total.labels(source=source).inc()

    def record_delivery(self, outcome: str, duration: float):
        """Record one webhook attempt; outcome is delivered, rejected or failed."""
        self.webhook_deliveries_total.labels(outcome=outcome).inc()
        self.webhook_delivery_duration.observe(duration)

    def set_subscriptions(self, count: int):
        self.subscriptions.set(count)
