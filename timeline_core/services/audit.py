from __future__ import annotations

import datetime as dt
from typing import Any, Mapping, Optional, Protocol

import structlog

from timeline_core.exceptions import AuditLoggingError


class AuditLogger(Protocol):
    def log(self, event_type: str, payload: Mapping[str, Any]) -> None:
        ...

    def log_error(self, event_type: str, error: BaseException, context: Mapping[str, Any]) -> None:
        ...


class StructlogAuditLogger:
    """Writes audit events as structured log lines."""

    def __init__(self, logger: Optional[Any] = None):
        self._log = logger if logger is not None else structlog.get_logger().bind(system="timeline.audit")

    def log(self, event_type: str, payload: Mapping[str, Any]) -> None:
        self._log.info(event_type, recorded_at=dt.datetime.now().isoformat(), **payload)

    def log_error(self, event_type: str, error: BaseException, context: Mapping[str, Any]) -> None:
        self._log.error(
            event_type,
            recorded_at=dt.datetime.now().isoformat(),
            error=str(error),
            error_type=type(error).__name__,
            **context,
        )


def record(audit: AuditLogger, event_type: str, payload: Mapping[str, Any]) -> None:
    """Emit an audit event; a logger failure surfaces as AuditLoggingError."""
    try:
        audit.log(event_type, payload)
    except Exception as exc:  # noqa: BLE001
        raise AuditLoggingError(event_type, exc) from exc
