"""
OpenTelemetry tracing for the financial service.

Spans cover incoming HTTP requests and the outgoing httpx calls the
Supabase client makes to PostgREST.
"""

import os
from typing import Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def configure_opentelemetry(
    service_name: str,
    service_version: str,
    otlp_endpoint: str,
    enable_tracing: bool = True,
) -> None:
    """
    Install a global tracer provider exporting over OTLP/gRPC.

    Args:
        service_name: Reported service name
        service_version: Reported service version
        otlp_endpoint: Collector address, host:port
        enable_tracing: When False nothing is installed
    """
    if not enable_tracing:
        return

    resource = Resource.create(
        {
            SERVICE_NAME: service_name,
            SERVICE_VERSION: service_version,
            "deployment.environment": os.getenv("ENVIRONMENT", "production"),
        }
    )

    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(tracer_provider)

    HTTPXClientInstrumentor().instrument()


def instrument_fastapi(app: FastAPI, excluded_urls: Optional[str] = None) -> None:
    """Attach request spans to a FastAPI app, skipping health and metrics by default."""
    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls=excluded_urls or "/health,/metrics",
        tracer_provider=trace.get_tracer_provider(),
    )
