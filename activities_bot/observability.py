"""Structured JSON logging and OpenTelemetry tracing for the bot."""
import os
import logging
import json
import traceback
import uuid
from typing import Optional
from datetime import datetime, timezone
from functools import wraps

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor

# Spans from every module are reported under this one service
SERVICE_NAME = 'activities-bot'

_tracing = None


class StructuredLogger:
    """Writes one JSON object per log line, tagged with the component name."""

    def __init__(self, component: str):
        self.component = component
        self.logger = logging.getLogger(component)
        self.logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.logger.handlers = []
        self.logger.propagate = False

        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(message)s'))
        self.logger.addHandler(handler)

    def _log(self, level: int, message: str, correlation_id: Optional[str] = None, **fields):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "severity": logging.getLevelName(level),
            "service": SERVICE_NAME,
            "component": self.component,
            "message": message,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            entry["trace_id"] = format(span_context.trace_id, '032x')
            entry["span_id"] = format(span_context.span_id, '016x')

        if correlation_id:
            entry["correlation_id"] = correlation_id

        entry.update(fields)
        self.logger.log(level, json.dumps(entry, default=str))

    def info(self, message: str, **fields):
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, error: Optional[BaseException] = None, **fields):
        """Log at ERROR, with type, message and stacktrace of ``error`` when given."""
        if error is not None:
            fields["error"] = {
                "type": type(error).__name__,
                "message": str(error),
                "stacktrace": ''.join(traceback.format_exception(type(error), error, error.__traceback__))
            }
        self._log(logging.ERROR, message, **fields)


class Tracing:
    """Process-wide tracer provider, exported to Cloud Trace outside local dev."""

    def __init__(self, environment: str):
        self.provider = TracerProvider(resource=Resource.create({
            "service.name": SERVICE_NAME,
            "deployment.environment": environment,
        }))

        if not os.getenv("LOCAL_DEV"):
            try:
                exporter = CloudTraceSpanExporter(
                    project_id=os.getenv('GCP_PROJECT_ID', os.getenv('GOOGLE_CLOUD_PROJECT'))
                )
                self.provider.add_span_processor(BatchSpanProcessor(exporter))
            except Exception as e:
                logging.getLogger(__name__).warning("Could not setup Cloud Trace exporter: %s", e)

        trace.set_tracer_provider(self.provider)
        RequestsInstrumentor().instrument()

    def instrument_flask(self, app):
        FlaskInstrumentor().instrument_app(app)


def init_observability(component: str, app=None, environment: str = None):
    """Return a logger for ``component`` and the shared tracing setup.

    The tracer provider is installed by the first call only; OpenTelemetry
    does not allow replacing it.

    Returns:
        tuple: (logger, tracing)
    """
    global _tracing

    logger = StructuredLogger(component)

    if _tracing is None:
        environment = environment or os.getenv('ENVIRONMENT', 'production')
        _tracing = Tracing(environment)
        logger.info("Observability initialized", environment=environment)

    if app is not None:
        _tracing.instrument_flask(app)

    return logger, _tracing


def traced_function(operation_name: Optional[str] = None):
    """Decorator to run a function inside its own span.

    Usage:
        @traced_function("my_operation")
        def my_function():
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            tracer = trace.get_tracer(__name__)
            with tracer.start_as_current_span(operation_name or func.__name__) as span:
                span.set_attribute("function.name", func.__name__)
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    span.set_attribute("error.type", type(e).__name__)
                    span.record_exception(e)
                    raise
        return wrapper
    return decorator


def get_correlation_id(request) -> str:
    """Correlation ID from X-Correlation-ID or X-Request-ID, else a new UUID."""
    return (
        request.headers.get('X-Correlation-ID') or
        request.headers.get('X-Request-ID') or
        str(uuid.uuid4())
    )
