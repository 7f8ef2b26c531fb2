from __future__ import annotations

from dataclasses import dataclass

from shopify_sync.core.errors import AppError, BusinessError, ErrorKind
from shopify_sync.core.observability import get_correlation_id


@dataclass(frozen=True)
class UiErrorMessage:
    title: str
    probable_cause: str
    recommended_action: str
    severity: str

    incident_id: str | None = None

    def as_text(self) -> str:
        body = (
            f"{self.title}\n"
            f"Probable cause: {self.probable_cause}\n"
            f"Recommended action: {self.recommended_action}"
        )
        if self.incident_id:
            body = f"{body}\nIncident ID: {self.incident_id}"
        return body


# (causa probable, acción recomendada, severidad) por tipo de error.
_GUIDANCE: dict[ErrorKind, tuple[str, str, str]] = {
    ErrorKind.CONNECTION: (
        "The shop could not be reached over the network.",
        "Check your internet connection and the shop domain, then retry.",
        "blocking",
    ),
    ErrorKind.AUTHENTICATION: (
        "Shopify rejected the access token.",
        "Open Settings and paste a valid Admin API access token.",
        "blocking",
    ),
    ErrorKind.BILLING: (
        "The shop's plan does not allow this request.",
        "Review the billing status of the shop in Shopify admin.",
        "blocking",
    ),
    ErrorKind.PERMISSION: (
        "The access token lacks the required API scopes.",
        "Grant read_products access to the custom app and retry.",
        "blocking",
    ),
    ErrorKind.NOT_FOUND: (
        "The shop domain does not match an existing shop.",
        "Open Settings and check the shop domain.",
        "blocking",
    ),
    ErrorKind.UNEXPECTED_STATUS: (
        "Shopify answered with an unexpected HTTP status.",
        "Retry in a few minutes. If it persists, check the Shopify status page.",
        "blocking",
    ),
    ErrorKind.DECODE: (
        "The response did not match the expected catalog format.",
        "Retry. If it persists, check the configured API version.",
        "blocking",
    ),
    ErrorKind.NOT_CONNECTED: (
        "There is no active connection to Shopify.",
        "Press Connect and retry.",
        "warning",
    ),
    ErrorKind.PERSISTENCE: (
        "The settings file could not be written.",
        "The new settings stay active for this session. Check disk permissions.",
        "warning",
    ),
    ErrorKind.VALIDATION: (
        "A required value is missing or invalid.",
        "Fill in the highlighted fields and retry.",
        "warning",
    ),
    ErrorKind.EXPORT: (
        "The CSV file could not be written.",
        "Choose another location and retry.",
        "blocking",
    ),
}


def map_error_to_ui_message(error: Exception, *, incident_id: str | None = None) -> UiErrorMessage:
    resolved_incident_id = incident_id or get_correlation_id()
    if isinstance(error, AppError) and error.kind in _GUIDANCE:
        cause, action, severity = _GUIDANCE[error.kind]
        return UiErrorMessage(
            title=error.user_message,
            probable_cause=cause,
            recommended_action=action,
            severity=severity,
            incident_id=resolved_incident_id,
        )
    if isinstance(error, BusinessError):
        return UiErrorMessage(
            title=str(error).strip() or "The operation could not be completed",
            probable_cause="The data does not satisfy a business rule.",
            recommended_action="Fix the data and retry.",
            severity="warning",
            incident_id=resolved_incident_id,
        )
    return UiErrorMessage(
        title="An unexpected error occurred.",
        probable_cause="An unidentified technical failure happened.",
        recommended_action="Retry. If it persists, send the log files to support.",
        severity="blocking",
        incident_id=resolved_incident_id,
    )
