from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional, Union

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


logger = logging.getLogger("text_summarizer.observability")

TRACER_NAME = "text_summarizer.tools"


def otel_enabled() -> bool:
    return os.getenv("TEXTSUM_OTEL_ENABLED", "0") == "1"


def init_otel(app) -> bool:
    """Instrument the Flask app with OTLP tracing when TEXTSUM_OTEL_ENABLED=1."""
    if not otel_enabled():
        return False

    service_name = os.getenv("TEXTSUM_SERVICE_NAME", "text-processing-server")
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    endpoint = os.getenv("TEXTSUM_OTEL_EXPORTER_OTLP_ENDPOINT", "http://127.0.0.1:4318/v1/traces")
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)

    FlaskInstrumentor().instrument_app(app)
    logger.info("OpenTelemetry enabled", extra={"extra": {"endpoint": endpoint, "service": service_name}})
    return True


@contextmanager
def tool_span(tool_name: str, request_id: Optional[str] = None) -> Iterator[trace.Span]:
    """Span around one tool call; a no-op span unless a provider is installed."""
    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(f"tool {tool_name}") as span:
        span.set_attribute("tool.name", tool_name)
        if request_id:
            span.set_attribute("request.id", request_id)
        yield span


def annotate_span(attributes: Mapping[str, Union[str, int, float, bool]]) -> None:
    span = trace.get_current_span()
    for key, value in attributes.items():
        span.set_attribute(key, value)


def get_current_trace_context() -> dict[str, str] | None:
    if not otel_enabled():
        return None

    ctx = trace.get_current_span().get_span_context()
    if not ctx or not ctx.is_valid:
        return None

    return {
        "trace_id": f"{ctx.trace_id:032x}",
        "span_id": f"{ctx.span_id:016x}",
    }
