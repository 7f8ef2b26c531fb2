from __future__ import annotations

import logging
from dataclasses import dataclass

from shopify_sync.bootstrap.logging import log_operational_error
from shopify_sync.core.errors import ValidationError
from shopify_sync.core.redaction import redact_token
from shopify_sync.application.sync_orchestrator import SyncOrchestrator
from shopify_sync.domain.catalog_errors import CredentialsPersistenceError
from shopify_sync.domain.models import Credentials
from shopify_sync.domain.ports import CredentialsStorePort
from shopify_sync.domain.shop_domain import normalize_shop_domain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveSettingsResult:
    credentials: Credentials
    persisted: bool
    error: CredentialsPersistenceError | None = None


class SettingsService:
    """Guarda credenciales y las entrega al orquestador.

    Si la escritura en disco falla, las credenciales nuevas siguen en uso
    durante la sesión y el fallo se devuelve en el resultado.
    """

    def __init__(self, store: CredentialsStorePort, orchestrator: SyncOrchestrator) -> None:
        self._store = store
        self._orchestrator = orchestrator

    def current_credentials(self) -> Credentials | None:
        return self._orchestrator.credentials

    def build_credentials(self, shop_domain: str, access_token: str) -> Credentials:
        domain = normalize_shop_domain(shop_domain)
        token = access_token.strip()
        if not domain:
            raise ValidationError("Shop domain is required")
        if not token:
            raise ValidationError("Access token is required")
        return Credentials(shop_domain=domain, access_token=token)

    def save_settings(self, shop_domain: str, access_token: str) -> SaveSettingsResult:
        credentials = self.build_credentials(shop_domain, access_token)
        self._orchestrator.update_credentials(credentials)
        try:
            self._store.save(credentials)
        except CredentialsPersistenceError as exc:
            log_operational_error(
                logger,
                "No se pudieron guardar las credenciales",
                exc=exc,
                extra={"shop_domain": credentials.shop_domain},
            )
            return SaveSettingsResult(credentials=credentials, persisted=False, error=exc)
        logger.info(
            "Credenciales actualizadas para %s (token %s)",
            credentials.shop_domain,
            redact_token(credentials.access_token),
        )
        return SaveSettingsResult(credentials=credentials, persisted=True)
