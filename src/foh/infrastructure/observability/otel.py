from __future__ import annotations

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from foh.config import Settings

_PROVIDER: TracerProvider | None = None
# health probes and metric scrapes are not traced
UNTRACED_URLS = "/health/live,/health/ready,/metrics"
logger = logging.getLogger(__name__)


def _provider(settings: Settings) -> TracerProvider:
    global _PROVIDER
    if _PROVIDER is not None:
        return _PROVIDER

    provider = TracerProvider(
        resource=Resource.create(
            {
                SERVICE_NAME: settings.otel_service_name,
                "deployment.environment": settings.app_env,
            }
        )
    )
    endpoint = settings.otel_exporter_otlp_endpoint
    if endpoint:
        try:
            exporter = OTLPSpanExporter(
                endpoint=endpoint,
                insecure=endpoint.startswith("http://"),
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))
        except Exception:
            logger.exception("otel_exporter_setup_failed")

    trace.set_tracer_provider(provider)
    set_global_textmap(TraceContextTextMapPropagator())
    _PROVIDER = provider
    return provider


def configure_otel(app: FastAPI, settings: Settings) -> None:
    # the provider is process wide; each app instance still gets instrumented
    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=_provider(settings),
        excluded_urls=UNTRACED_URLS,
    )
