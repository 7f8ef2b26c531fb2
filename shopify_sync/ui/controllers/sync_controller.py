from __future__ import annotations

import logging
from pathlib import Path

from shopify_sync.application.csv_export import (
    DEFAULT_COLLECTIONS_FILE_NAME,
    DEFAULT_PRODUCTS_FILE_NAME,
    export_collections_csv,
    export_products_csv,
    write_csv,
)
from shopify_sync.application.settings_service import SaveSettingsResult, SettingsService
from shopify_sync.application.sync_orchestrator import SyncOrchestrator
from shopify_sync.core.observability import OperationContext, log_event
from shopify_sync.domain.catalog_errors import NotConnectedError
from shopify_sync.domain.sync_state import SyncState
from shopify_sync.ui.controllers.toolbar_state_rules import (
    TAB_PRODUCTS,
    ToolbarDecision,
    ToolbarInput,
    decide_toolbar_state,
)

logger = logging.getLogger(__name__)


class SyncController:
    """Traduce los comandos de la ventana a llamadas del orquestador."""

    def __init__(self, orchestrator: SyncOrchestrator, settings_service: SettingsService) -> None:
        self._orchestrator = orchestrator
        self._settings_service = settings_service

    @property
    def state(self) -> SyncState:
        return self._orchestrator.state

    def on_connect(self) -> None:
        if self.state.is_connected:
            self._orchestrator.fetch_collections()
            return
        self._orchestrator.verify_connection()

    def on_refresh_collections(self) -> None:
        self._orchestrator.fetch_collections()

    def on_refresh_products(self) -> None:
        self._orchestrator.fetch_products()

    def on_select_collection(self, collection_id: int) -> None:
        self._orchestrator.select_collection(collection_id)

    def on_dismiss_error(self) -> None:
        self._orchestrator.dismiss_error()

    def on_settings_saved(self, result: SaveSettingsResult | None) -> None:
        if result is None:
            return
        logger.info("Ajustes aplicados; se requiere reconectar a %s", result.credentials.shop_domain)

    def default_export_name(self, active_tab: str) -> str:
        return DEFAULT_PRODUCTS_FILE_NAME if active_tab == TAB_PRODUCTS else DEFAULT_COLLECTIONS_FILE_NAME

    def export_to(self, active_tab: str, path: str | Path) -> Path:
        """Renderiza la pestaña activa a CSV y lo escribe en ``path``.

        Lanza ``NotConnectedError`` sin conexión y ``ExportError`` si falla
        la escritura.
        """
        state = self.state
        if not state.is_connected:
            raise NotConnectedError()
        with OperationContext("export_csv") as operation:
            if active_tab == TAB_PRODUCTS:
                text = export_products_csv(state.products)
                rows = len(state.products)
            else:
                text = export_collections_csv(state.collections)
                rows = len(state.collections)
            destination = write_csv(path, text)
            log_event(logger, "csv_exported", {"tab": active_tab, "rows": rows}, operation.correlation_id)
        return destination

    def decide_toolbar(self, state: SyncState, active_tab: str) -> ToolbarDecision:
        return decide_toolbar_state(ToolbarInput.from_state(state, active_tab))


def apply_button_decision(widget, decision) -> None:
    """Aplica una decisión de estado a un botón Qt sin acoplar reglas al controlador."""

    if widget is None:
        return
    widget.setEnabled(decision.enabled)
    if decision.text:
        widget.setText(decision.text)
    if decision.tooltip is not None:
        widget.setToolTip(decision.tooltip)
