from __future__ import annotations

from shopify_sync.core.errors import (
    BusinessError,
    ErrorKind,
    ExternalServiceError,
    InfraError,
    PersistenceError,
)


class CatalogError(ExternalServiceError):
    """Fallo de una operación contra la Admin API de Shopify."""

    # Los errores con disconnects=True dejan la sesión como desconectada.
    disconnects = False


class ShopifyConnectionError(CatalogError):
    kind = ErrorKind.CONNECTION
    default_message = "Connection error"
    disconnects = True

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = f"Connection error: {detail}" if detail else self.default_message
        super().__init__(message)


class ShopifyAuthError(CatalogError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Authentication failed. Please check your access token."
    disconnects = True


class ShopifyBillingError(CatalogError):
    kind = ErrorKind.BILLING
    default_message = "Payment required. Please check your Shopify plan."
    disconnects = True


class ShopifyPermissionError(CatalogError):
    kind = ErrorKind.PERMISSION
    default_message = "Access forbidden. Please check your API permissions."
    disconnects = True


class ShopifyNotFoundError(CatalogError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Shop not found. Please check your shop domain."
    disconnects = True


class ShopifyUnexpectedStatusError(CatalogError):
    kind = ErrorKind.UNEXPECTED_STATUS

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Unexpected error (Status {status_code})")


class CatalogDecodeError(CatalogError):
    kind = ErrorKind.DECODE

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        location = path or "<root>"
        super().__init__(f"Failed to parse response at {location}: {detail}")


class UnexpectedSyncError(CatalogError):
    kind = ErrorKind.UNEXPECTED

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Unexpected error: {detail}")


class NotConnectedError(BusinessError):
    kind = ErrorKind.NOT_CONNECTED
    default_message = "Please connect to Shopify first"


class CredentialsPersistenceError(PersistenceError):
    default_message = "Failed to save settings"


class ExportError(InfraError):
    kind = ErrorKind.EXPORT
    default_message = "Failed to save CSV"


_STATUS_ERRORS: dict[int, type[CatalogError]] = {
    401: ShopifyAuthError,
    402: ShopifyBillingError,
    403: ShopifyPermissionError,
    404: ShopifyNotFoundError,
}


def classify_status(status_code: int) -> CatalogError | None:
    """Error tipado para un status HTTP, o None si es 2xx."""
    if 200 <= status_code < 300:
        return None
    error_type = _STATUS_ERRORS.get(status_code)
    if error_type is not None:
        return error_type()
    return ShopifyUnexpectedStatusError(status_code)
