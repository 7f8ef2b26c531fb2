from __future__ import annotations

import json
import logging
import traceback
import uuid
from dataclasses import asdict, dataclass
from types import TracebackType

from shopify_sync.bootstrap.logging import CRASH_LOG_NAME
from shopify_sync.bootstrap.settings import resolve_log_dir
from shopify_sync.core.observability import failed_operation_name, generate_correlation_id, get_correlation_id
from shopify_sync.core.redaction import redact_text

logger = logging.getLogger("shopify_sync.global_exception")


@dataclass(frozen=True)
class IncidentReport:
    """Registro de un fallo no controlado, ya sin secretos.

    ``operation`` es la operación de catálogo o exportación en la que saltó la
    excepción, si la hubo; ``shop_domain`` la tienda configurada en ese momento.
    """

    incident_id: str
    correlation_id: str
    operation: str | None
    shop_domain: str | None
    error_type: str
    error_message: str
    stacktrace: str

    def summary(self) -> dict[str, str | None]:
        return {
            "incident_id": self.incident_id,
            "operation": self.operation,
            "shop_domain": self.shop_domain,
            "error_type": self.error_type,
        }


def generate_incident_id() -> str:
    return f"INC-{uuid.uuid4().hex[:12].upper()}"


def build_incident_report(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
    *,
    shop_domain: str | None = None,
) -> IncidentReport:
    stacktrace = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    return IncidentReport(
        incident_id=generate_incident_id(),
        correlation_id=get_correlation_id() or generate_correlation_id(),
        operation=failed_operation_name(exc_value),
        shop_domain=shop_domain or None,
        error_type=exc_type.__name__,
        error_message=redact_text(str(exc_value)),
        stacktrace=redact_text(stacktrace),
    )


def _append_to_crash_log(report: IncidentReport) -> None:
    log_dir = resolve_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    with (log_dir / CRASH_LOG_NAME).open("a", encoding="utf-8") as handler:
        handler.write(json.dumps(asdict(report), ensure_ascii=False) + "\n")


def handle_global_exception(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
    *,
    shop_domain: str | None = None,
) -> str:
    """Registra el fallo como CRITICAL y devuelve el id de incidente.

    Si el logging operativo falla, el informe se escribe directamente en
    ``crash.log``.
    """
    report = build_incident_report(exc_type, exc_value, exc_traceback, shop_domain=shop_domain)
    try:
        logger.critical(
            "Excepción no controlada en %s. incident_id=%s",
            report.operation or "ui",
            report.incident_id,
            exc_info=(exc_type, exc_value, exc_traceback),
            extra={"correlation_id": report.correlation_id, "extra": report.summary()},
        )
    except Exception:  # noqa: BLE001
        _append_to_crash_log(report)
    return report.incident_id
