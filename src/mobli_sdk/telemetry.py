"""Structured logging and tracing for the Mobli SDK.

Every log event carries the SDK name and version; components that know the
application bind its ``client_id`` as well. Spans are tagged the same way.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Generator, MutableMapping

    from .config import TelemetryConfig

SDK_NAME = "mobli-sdk"
SDK_VERSION = "0.1.0"

_tracer: trace.Tracer | None = None
_logger: structlog.BoundLogger | None = None


def get_tracer() -> trace.Tracer:
    """Get or create the SDK tracer."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SDK_NAME, SDK_VERSION)
    return _tracer


def get_logger(**context: Any) -> structlog.BoundLogger:
    """Get the SDK logger, bound to ``context`` when any is given.

    Example:
        >>> log = get_logger(client_id="abc")
        >>> log.info("Login succeeded")  # event carries client_id="abc"
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(SDK_NAME)
    if context:
        return _logger.bind(**context)
    return _logger


def _add_sdk_info(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict.setdefault("sdk", f"{SDK_NAME}/{SDK_VERSION}")
    return event_dict


def configure_telemetry(config: TelemetryConfig) -> None:
    """Configure logging and tracing based on config.

    With ``enabled=False`` spans become no-ops and logging is left as the
    host application configured it.
    """
    global _tracer, _logger

    if not config.enabled:
        _tracer = trace.NoOpTracer()
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_sdk_info,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _log_level_to_int(config.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if config.trace_requests:
        _tracer = trace.get_tracer(config.service_name, SDK_VERSION)
    else:
        _tracer = trace.NoOpTracer()
    _logger = structlog.get_logger(config.service_name)


def _log_level_to_int(level: str) -> int:
    """Convert a level name to its number, defaulting to INFO."""
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


@contextmanager
def trace_operation(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Run the block inside a span named ``name``.

    Attributes whose value is None are not recorded. Exceptions mark the
    span as failed and propagate.
    """
    with get_tracer().start_as_current_span(name) as span:
        span.set_attribute("mobli.sdk.version", SDK_VERSION)
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
