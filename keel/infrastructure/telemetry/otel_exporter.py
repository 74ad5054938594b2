"""
OpenTelemetry Exporter for Keel

Architectural Intent:
- Turns rollback domain events into OTLP metrics
- Subscribed to the event bus by the composition root
- Buffers recorded metrics locally so they can be inspected without a backend

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC

from keel.domain.events.release_events import (
    ReleaseRollbackFailedEvent,
    ReleaseRolledBackEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "keel"
    environment: str = "development"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://."
                )


class OTELExporter:
    """
    Records rollback outcomes as OpenTelemetry counters.
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: list[dict[str, Any]] = []
        self._meter: Any = None
        self._provider: Any = None
        self._counters: dict[str, Any] = {}

    def initialize(self) -> None:
        """Initialize the OpenTelemetry SDK and OTLP metric exporter."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, telemetry disabled")
            return

        from opentelemetry import metrics
        from opentelemetry.sdk.metrics import MeterProvider
        from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
        from opentelemetry.sdk.resources import Resource, SERVICE_NAME
        from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
            OTLPMetricExporter,
        )

        resource = Resource(
            attributes={
                SERVICE_NAME: self.config.service_name,
                "environment": self.config.environment,
            }
        )
        reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(
                endpoint=self.config.endpoint, insecure=self.config.insecure
            )
        )
        self._provider = MeterProvider(resource=resource, metric_readers=[reader])
        metrics.set_meter_provider(self._provider)
        self._meter = metrics.get_meter(__name__)
        self._initialized = True
        logger.info("OTEL metrics exporting to %s", self.config.endpoint)

    def _get_counter(self, name: str) -> Any:
        if name not in self._counters and self._meter:
            self._counters[name] = self._meter.create_counter(name)
        return self._counters.get(name)

    def record_metric(
        self,
        name: str,
        value: float,
        attributes: Optional[dict[str, str]] = None,
    ) -> None:
        """Add ``value`` to the counter ``name``."""
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "attributes": attributes or {},
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )
        if self._initialized:
            counter = self._get_counter(name)
            if counter:
                counter.add(value, attributes=attributes or {})

    async def on_rolled_back(self, event: ReleaseRolledBackEvent) -> None:
        self.record_metric(
            "keel.rollback.succeeded",
            1.0,
            attributes={"release": event.aggregate_id, "version": str(event.version)},
        )

    async def on_rollback_failed(self, event: ReleaseRollbackFailedEvent) -> None:
        self.record_metric(
            "keel.rollback.failed",
            1.0,
            attributes={"release": event.aggregate_id, "version": str(event.version)},
        )

    def shutdown(self) -> None:
        """Export pending metrics and stop the SDK reader."""
        if not self._initialized:
            return
        self._provider.shutdown()
        logger.debug("Flushed %d recorded metrics", len(self._metrics_buffer))
        self._metrics_buffer.clear()
        self._initialized = False
