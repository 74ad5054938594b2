"""
Keel Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for rollback outcome metrics
"""

from keel.infrastructure.telemetry.otel_exporter import OTELExporter, OTELConfig

__all__ = [
    "OTELExporter",
    "OTELConfig",
]
