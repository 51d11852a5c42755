"""OpenTelemetry instrumentation helpers.

Provides:
- Tracer access for spans
- Function decorators for automatic span creation
"""

import inspect
from functools import wraps
from typing import Any, Callable

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor


# Global tracer provider (initialized once)
_tracer_provider: TracerProvider | None = None


def init_telemetry(service_name: str = "kg-dashboard", console: bool = False) -> None:
    """Initialize OpenTelemetry tracing.

    Call this once at application startup. Later calls are ignored.

    Args:
        service_name: Name of the service for traces (default: "kg-dashboard")
        console: Print finished spans to stdout (development only)

    Example:
        >>> from kg_dashboard_common import init_telemetry
        >>> init_telemetry(service_name="kg-dashboard-cli")
    """
    global _tracer_provider

    if _tracer_provider is not None:
        return  # Already initialized

    _tracer_provider = TracerProvider(
        resource=Resource.create({"service.name": service_name})
    )

    if console:
        _tracer_provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(_tracer_provider)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for creating spans.

    Args:
        name: Tracer name (typically module name like "kg_dashboard_search")

    Returns:
        Tracer instance

    Example:
        >>> tracer = get_tracer("kg_dashboard_search.orchestrator")
        >>> with tracer.start_as_current_span("search_session_start"):
        ...     pass
    """
    if _tracer_provider is None:
        init_telemetry()  # Auto-initialize if not done

    return trace.get_tracer(name)


def instrument_function(span_name: str | None = None) -> Callable:
    """Decorator to automatically create a span for a function.

    Args:
        span_name: Name for the span (default: function name)

    Returns:
        Decorator function

    Example:
        >>> @instrument_function("search_session_start")
        ... def start(self) -> None:
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        actual_span_name = span_name or func.__name__

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer(func.__module__).start_as_current_span(actual_span_name):
                return await func(*args, **kwargs)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer(func.__module__).start_as_current_span(actual_span_name):
                return func(*args, **kwargs)

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
