"""OpenTelemetry tracing for the account service.

TelemetryConfig owns the tracer provider. setup() installs it globally,
instrument() hooks FastAPI, the SQLAlchemy engine, the Redis client and
log records onto it, shutdown() flushes pending spans. Exporters: "otlp"
(gRPC collector, e.g. Jaeger on 4317), "console" (local development) or
"none" (spans are sampled but dropped).
"""

import logging
import threading
from collections.abc import Callable

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

# Probes are polled constantly and would drown the account spans.
UNTRACED_URLS = "/api/v1/health,/api/v1/health/ready"


def build_exporter(kind: str, endpoint: str | None = None) -> SpanExporter | None:
    """Span exporter for kind ("otlp", "console", "none"). OTLP without endpoint falls back to console."""
    if kind == "none":
        return None
    if kind == "otlp":
        if endpoint:
            return OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
        logger.warning("TELEMETRY_OTLP_ENDPOINT is not set; exporting spans to console")
    elif kind != "console":
        logger.warning("Unknown telemetry exporter %r; exporting spans to console", kind)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentations attached to it."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None
        self.instrumented: list[str] = []

    def setup(
        self,
        exporter: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Create and install the global tracer provider. Returns None when disabled."""
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        provider = TracerProvider(
            resource=Resource(
                attributes={
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }
            ),
            sampler=ParentBased(TraceIdRatioBased(sample_rate)),
        )
        span_exporter = build_exporter(exporter, otlp_endpoint)
        if span_exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(span_exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Tracing %s %s (exporter=%s, sample_rate=%s)",
            self.service_name,
            self.service_version,
            exporter,
            sample_rate,
        )
        return provider

    def instrument(
        self,
        app: FastAPI,
        engine: AsyncEngine | None = None,
        *,
        redis: bool = False,
    ) -> list[str]:
        """Attach instrumentations; one failing never blocks the others. Returns what was attached."""
        if self.tracer_provider is None:
            return []
        provider = self.tracer_provider
        steps: list[tuple[str, Callable[[], None]]] = [
            (
                "fastapi",
                lambda: FastAPIInstrumentor.instrument_app(
                    app, tracer_provider=provider, excluded_urls=UNTRACED_URLS
                ),
            ),
            ("logging", lambda: LoggingInstrumentor().instrument(tracer_provider=provider)),
        ]
        if engine is not None:
            steps.append(
                (
                    "sqlalchemy",
                    lambda: SQLAlchemyInstrumentor().instrument(
                        engine=engine.sync_engine, tracer_provider=provider
                    ),
                )
            )
        if redis:
            steps.append(
                ("redis", lambda: RedisInstrumentor().instrument(tracer_provider=provider))
            )
        for name, step in steps:
            try:
                step()
            except Exception:
                logger.exception("Failed to instrument %s", name)
                continue
            self.instrumented.append(name)
        return self.instrumented

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error during telemetry shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process-wide telemetry instance (set at startup)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear) the process-wide telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
