"""OpenTelemetry tracing configuration.

Every engine operation that reads or reorders a table runs inside a
``table.<operation>`` span (see ``table_span``). Until ``setup_tracing``
is called the spans go to the global no-op provider.
"""

from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter


_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "tabular_engine",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Set up OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also export to console (for debugging)

    Returns:
        Configured tracer instance
    """
    global _tracer

    from tabular_engine import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("tabular_engine")
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Context manager for creating a trace span.

    Attributes with a None value are skipped; OpenTelemetry rejects them.

    Args:
        name: Name of the span, e.g. "table.sort"
        attributes: Optional attributes to add to the span

    Yields:
        The created span
    """
    with get_tracer().start_as_current_span(name) as span:
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)
        yield span


def table_span(
    operation: str,
    table_name: str,
    **attributes: Any,
) -> AbstractContextManager[trace.Span]:
    """
    Span for one table operation, named ``table.<operation>``.

    Keyword attributes are recorded under the ``table.`` namespace next to
    ``table.name``, so ``table_span("sort", "Products", column="Quantity")``
    carries ``table.name`` and ``table.column``.
    """
    span_attributes: dict[str, Any] = {"table.name": table_name}
    span_attributes.update({f"table.{key}": value for key, value in attributes.items()})
    return trace_span(f"table.{operation}", span_attributes)
