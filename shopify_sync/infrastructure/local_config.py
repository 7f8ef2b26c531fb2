from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from shopify_sync.bootstrap.settings import APP_DIR_NAME
from shopify_sync.domain.catalog_errors import CredentialsPersistenceError
from shopify_sync.domain.models import Credentials

logger = logging.getLogger(__name__)

CREDENTIALS_FILE_NAME = "shopify_credentials.json"


def resolve_appdata_dir() -> Path:
    env_dir = os.environ.get("LOCALAPPDATA")
    if env_dir:
        base_dir = Path(env_dir)
    else:
        base_dir = Path.home() / ".local" / "share"
    return base_dir / APP_DIR_NAME


class CredentialsFileStore:
    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir or resolve_appdata_dir()
        self._credentials_path = self._base_dir / CREDENTIALS_FILE_NAME

    def load(self) -> Credentials | None:
        if not self._credentials_path.exists():
            return None
        try:
            payload = json.loads(self._credentials_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.exception("No se pudo leer %s: %s", CREDENTIALS_FILE_NAME, exc)
            return None
        if not isinstance(payload, dict):
            logger.error("Formato inesperado en %s", CREDENTIALS_FILE_NAME)
            return None
        shop_domain = payload.get("shop_domain")
        access_token = payload.get("access_token")
        if not isinstance(shop_domain, str) or not isinstance(access_token, str):
            logger.error("Faltan campos obligatorios en %s", CREDENTIALS_FILE_NAME)
            return None
        return Credentials(shop_domain=shop_domain, access_token=access_token)

    def save(self, credentials: Credentials) -> Credentials:
        payload = {
            "shop_domain": credentials.shop_domain,
            "access_token": credentials.access_token,
        }
        try:
            self._write_payload(payload)
        except OSError as exc:
            raise CredentialsPersistenceError(f"Failed to save settings: {exc.strerror or exc}") from exc
        logger.info("Credenciales guardadas en %s", self._credentials_path)
        return credentials

    def credentials_path(self) -> Path:
        return self._credentials_path

    def _write_payload(self, payload: dict[str, str]) -> None:
        self._credentials_path.parent.mkdir(parents=True, exist_ok=True)
        # Escritura atómica: primero a un temporal y luego reemplazo.
        tmp_path = self._credentials_path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self._credentials_path)
