# ==== OPENTELEMETRY TRACING CONFIGURATION ==== #

"""
OpenTelemetry tracing configuration for the logistics back-office utilities.

This module provides tracer access for the calculation engine and the
integration client, plus optional OTLP export with automatic httpx
instrumentation when an exporter endpoint is configured.
"""

from typing import Any, Dict

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from backoffice.settings import settings


# ==== TRACING INITIALIZATION ==== #


def init_tracing(service_name: str | None = None) -> bool:
    """
    Initialize OpenTelemetry tracing with an OTLP exporter.

    Tracing stays a no-op when ``OTEL_EXPORTER_OTLP_ENDPOINT`` is unset so
    local runs and tests need no collector.

    Args:
        service_name (str | None): Service name override for the resource

    Returns:
        bool: True when an exporter was installed
    """
    endpoint = settings.OTEL_EXPORTER_OTLP_ENDPOINT
    if not endpoint:
        return False

    resource_attrs: Dict[str, Any] = {
        "service.name": settings.OTEL_SERVICE_NAME or service_name or settings.SERVICE_NAME,
        "deployment.environment": settings.APP_ENV,
    }

    provider = TracerProvider(resource=Resource.create(resource_attrs))
    exporter = OTLPSpanExporter(
        endpoint=endpoint,
        headers=_parse_headers(settings.OTEL_EXPORTER_OTLP_HEADERS)
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    HTTPXClientInstrumentor().instrument()
    return True


def _parse_headers(headers_str: str | None) -> Dict[str, str]:
    """Parse OTLP headers from a comma-separated key=value string.

    Args:
        headers_str: Comma-separated key=value pairs

    Returns:
        Dictionary of headers
    """
    headers: Dict[str, str] = {}
    if not headers_str:
        return headers

    for part in headers_str.split(","):
        if "=" in part:
            key, value = part.split("=", 1)
            headers[key.strip()] = value.strip()

    return headers


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)
