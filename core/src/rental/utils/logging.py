"""Structured logging with request correlation.

A correlation ID lives in a ContextVar for the duration of a request (set by
the API middleware) and is stamped on every record, so all lines produced by
one reservation attempt can be grepped together:

    [3f1c...] 2026-02-13 10:00:01 WARNING rental.services.reservation: reserve | car_id=car-1 | result=conflict

Usage:
    from rental.utils.logging import get_logger, log_reservation_operation

    logger = get_logger(__name__)
    log_reservation_operation(logger, "reserve", car_id="car-1", result="success")
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

NO_CORRELATION_ID = "no-correlation-id"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation ID to the current context.

    Args:
        correlation_id: Incoming ID, or None to generate one

    Returns:
        The ID now in effect
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Stamps `correlation_id` on each record passing through a logger."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Prefixes each line with its correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        # Records from third-party loggers never went through the filter
        cid = getattr(record, "correlation_id", None) or get_correlation_id() or NO_CORRELATION_ID
        return f"[{cid}] {super().format(record)}"


def get_logger(name: str) -> logging.Logger:
    """Return the named logger with correlation stamping installed."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())
    return logger


def configure_logging(level: str = "INFO") -> None:
    """Route all logging through one stderr handler using StructuredFormatter."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


def log_reservation_operation(
    logger: logging.Logger,
    operation: str,
    *,
    car_id: str | None = None,
    booking_id: str | None = None,
    start: str | None = None,
    end: str | None = None,
    result: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log one reservation-related step as `operation | key=value | ...`.

    Empty fields are omitted. The level follows the outcome: ERROR when
    `error` is given, WARNING for `result="conflict"`, INFO otherwise. The
    same fields are attached to the record as attributes for log processors.

    Args:
        logger: Logger to write to
        operation: Step name, e.g. "reserve", "release", "confirm_booking"
        car_id: Car involved
        booking_id: Booking involved
        start: Interval start (ISO-8601)
        end: Interval end (ISO-8601)
        result: Outcome, e.g. "success" or "conflict"
        error: Error description when the step failed
        **extra: Further context fields
    """
    fields = {
        "car_id": car_id,
        "booking_id": booking_id,
        "start": start,
        "end": end,
        "result": result,
        "error": error,
        **extra,
    }
    context: dict[str, Any] = {k: v for k, v in fields.items() if v is not None and v != ""}
    message = " | ".join([operation, *(f"{k}={v}" for k, v in context.items())])

    if error:
        level = logging.ERROR
    elif result == "conflict":
        level = logging.WARNING
    else:
        level = logging.INFO
    logger.log(level, message, extra={"operation": operation, **context})
