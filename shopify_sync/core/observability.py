from __future__ import annotations

from contextlib import AbstractContextManager
from contextvars import ContextVar, Token
from datetime import datetime, timezone
import uuid
from typing import Any

_CORRELATION_ID: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_OPERATION_NAME: ContextVar[str | None] = ContextVar("operation_name", default=None)
_FAILED_OPERATION_ATTR = "_shopify_sync_operation"


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> str | None:
    return _CORRELATION_ID.get()


def set_correlation_id(correlation_id: str | None) -> Token[str | None]:
    return _CORRELATION_ID.set(correlation_id)


def reset_correlation_id(token: Token[str | None]) -> None:
    _CORRELATION_ID.reset(token)


def get_operation_name() -> str | None:
    return _OPERATION_NAME.get()


def failed_operation_name(exc: BaseException) -> str | None:
    """Operación en la que se lanzó ``exc``, o la activa si no salió de ninguna."""
    return getattr(exc, _FAILED_OPERATION_ATTR, None) or get_operation_name()


class OperationContext(AbstractContextManager["OperationContext"]):
    """Fija correlation_id y nombre de operación para todo lo registrado en el bloque.

    Los workers corren en otros hilos, así que cada tarea de fondo abre su
    propio contexto con el id generado al lanzar la operación.
    """

    def __init__(self, operation_name: str, correlation_id: str | None = None) -> None:
        self.operation_name = operation_name
        self.correlation_id = correlation_id or generate_correlation_id()
        self._correlation_token: Token[str | None] | None = None
        self._operation_token: Token[str | None] | None = None

    def __enter__(self) -> "OperationContext":
        self._correlation_token = set_correlation_id(self.correlation_id)
        self._operation_token = _OPERATION_NAME.set(self.operation_name)
        return self

    def __exit__(self, exc_type: object, exc: object, exc_tb: object) -> None:
        if self._correlation_token is not None:
            reset_correlation_id(self._correlation_token)
            self._correlation_token = None
        if self._operation_token is not None:
            _OPERATION_NAME.reset(self._operation_token)
            self._operation_token = None
        if isinstance(exc, BaseException) and not hasattr(exc, _FAILED_OPERATION_ATTR):
            # La operación más interna que vio pasar la excepción.
            setattr(exc, _FAILED_OPERATION_ATTR, self.operation_name)
        return None


def log_event(logger: Any, event_name: str, payload: dict[str, Any], correlation_id: str | None) -> dict[str, Any]:
    event = {
        "event": event_name,
        "correlation_id": correlation_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "payload": payload,
    }
    logger.info(
        event_name,
        extra={
            "correlation_id": correlation_id,
            "extra": event,
        },
    )
    return event
