from __future__ import annotations

import logging
import sys
from types import TracebackType

from shopify_sync.bootstrap.container import AppContainer, build_container
from shopify_sync.bootstrap.exception_handler import handle_global_exception

logger = logging.getLogger(__name__)


def active_shop_domain(container: AppContainer) -> str | None:
    credentials = container.orchestrator.credentials
    return credentials.shop_domain if credentials is not None else None


def build_ui_error_message(incident_id: str) -> str:
    return f"An unexpected error occurred.\nIncident ID: {incident_id}"


def handle_ui_exception(
    exc_type: type[BaseException],
    exc_value: BaseException,
    exc_traceback: TracebackType | None,
    shop_domain: str | None = None,
) -> str:
    from PySide6.QtWidgets import QApplication, QMessageBox

    incident_id = handle_global_exception(exc_type, exc_value, exc_traceback, shop_domain=shop_domain)
    app = QApplication.instance()
    if app is None:
        return incident_id
    try:
        QMessageBox.critical(None, "Unexpected error", build_ui_error_message(incident_id))
    except Exception:  # noqa: BLE001
        # Un segundo fallo al pintar el diálogo no debe tumbar el proceso.
        logger.warning("No se pudo mostrar el diálogo de error %s", incident_id)
    return incident_id


def run_ui() -> int:
    from PySide6.QtWidgets import QApplication

    from shopify_sync.ui.main_window import MainWindow
    from shopify_sync.ui.theme import build_stylesheet
    from shopify_sync.ui.workers.qt_task_runner import QtTaskRunner

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Shopify Sync")
    app.setStyleSheet(build_stylesheet())
    runner = QtTaskRunner()
    container = build_container(runner)

    def _excepthook(
        exc_type: type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None
    ) -> None:
        handle_ui_exception(exc_type, exc_value, exc_traceback, active_shop_domain(container))

    # Las excepciones que escapan de un slot llegan a sys.excepthook.
    sys.excepthook = _excepthook

    try:
        window = MainWindow(container.orchestrator, container.settings_service)
        window.show()
        exit_code = app.exec()
    except Exception:  # noqa: BLE001
        exc_type, exc_value, exc_traceback = sys.exc_info()
        if exc_type is not None and exc_value is not None:
            handle_ui_exception(exc_type, exc_value, exc_traceback, active_shop_domain(container))
        return 2
    finally:
        runner.shutdown()
        container.close()
    return exit_code
