from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    BILLING = "billing"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    UNEXPECTED_STATUS = "unexpected_status"
    DECODE = "decode"
    NOT_CONNECTED = "not_connected"
    PERSISTENCE = "persistence"
    VALIDATION = "validation"
    EXPORT = "export"
    UNEXPECTED = "unexpected"


class AppError(Exception):
    """Base de la jerarquía: cada error lleva un ``kind`` estable para la UI."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class BusinessError(AppError):
    pass


class ValidationError(BusinessError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid data"


class InfraError(AppError):
    pass


class PersistenceError(InfraError):
    kind = ErrorKind.PERSISTENCE
    default_message = "Could not save data"


class ExternalServiceError(InfraError):
    pass
