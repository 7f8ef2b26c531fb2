from __future__ import annotations

import argparse
import faulthandler
import importlib.util
import logging
import sys
from pathlib import Path

from shopify_sync.bootstrap.logging import configure_logging, install_exception_hook
from shopify_sync.bootstrap.settings import AppSettings, resolve_log_dir
from shopify_sync.core.redaction import redact_token
from shopify_sync.infrastructure.local_config_store import LocalCredentialsStore


def _run_selfcheck(log_dir: Path) -> int:
    logger = logging.getLogger(__name__)
    errors = 0

    if importlib.util.find_spec("PySide6") is None:
        logger.error("PySide6 no está instalado; la interfaz no puede arrancar")
        errors += 1
    else:
        logger.info("PySide6 disponible")

    settings = AppSettings.from_env()
    logger.info("API version: %s, timeout: %ss", settings.api_version, settings.timeout_seconds)

    store = LocalCredentialsStore()
    credentials = store.load()
    if credentials is None:
        logger.warning("Sin credenciales en %s; configúralas desde Settings", store.credentials_path())
    else:
        logger.info(
            "Credenciales encontradas para %s (token %s)",
            credentials.shop_domain,
            redact_token(credentials.access_token),
        )

    if errors:
        crash_path = log_dir / "crash.log"
        logger.error("Selfcheck falló con %s error(es). crash.log=%s", errors, crash_path)
        return 1
    logger.info("Selfcheck OK.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Shopify Sync")
    parser.add_argument("--selfcheck", action="store_true", help="Valida el entorno sin abrir la UI")
    args = parser.parse_args(argv)

    log_dir = resolve_log_dir()
    configure_logging(log_dir)
    install_exception_hook(log_dir)
    faulthandler.enable()

    logger = logging.getLogger(__name__)
    logger.info("Log dir: %s", log_dir)
    logger.info("Python: %s", sys.version)
    logger.info("Executable: %s", sys.executable)
    logger.info("CWD: %s", Path.cwd())

    if args.selfcheck:
        return _run_selfcheck(log_dir)

    from shopify_sync.entrypoints.ui_main import run_ui

    return run_ui()
