from __future__ import annotations

import pytest

from shopify_sync.application.settings_service import SettingsService
from shopify_sync.application.sync_orchestrator import SyncOrchestrator
from shopify_sync.application.task_runner import DeferredTaskRunner
from shopify_sync.ui.main_window import MainWindow
from tests.factories import (
    CREDENTIALS,
    FakeCredentialsStore,
    FakeShopifyHttp,
    collect_payload,
    collection_payload,
    envelope,
    ok,
    product_payload,
)


@pytest.fixture
def ventana(qapp, monkeypatch):
    alertas: list[str] = []
    monkeypatch.setattr("PySide6.QtWidgets.QMessageBox.warning", lambda _p, _t, text: alertas.append(text))
    monkeypatch.setattr("PySide6.QtWidgets.QMessageBox.critical", lambda _p, _t, text: alertas.append(text))
    http = FakeShopifyHttp(
        {
            "shop": ok(b"{}"),
            "custom_collections": ok(envelope("custom_collections", [collection_payload(1), collection_payload(2)])),
            "products": ok(envelope("products", [product_payload(10)])),
            "collects": ok(envelope("collects", [collect_payload(1, 10)])),
        }
    )
    runner = DeferredTaskRunner()
    store = FakeCredentialsStore(current=CREDENTIALS)
    orchestrator = SyncOrchestrator(store, http, runner)
    window = MainWindow(orchestrator, SettingsService(store, orchestrator))
    yield window, orchestrator, runner, alertas
    qapp.processEvents()
    window.close()


def test_estado_inicial_desconectado(ventana) -> None:
    window, _orchestrator, _runner, _alertas = ventana

    assert window.connect_button.text() == "Connect"
    assert window.connect_button.isEnabled()
    assert not window.export_button.isEnabled()
    assert not window.refresh_products_button.isEnabled()
    assert window.status_connection_label.text() == "Not Connected"
    assert window.collections_stack.currentIndex() == 1


def test_conectar_carga_colecciones_en_lista_y_tabla(ventana) -> None:
    window, _orchestrator, runner, _alertas = ventana

    window.connect_button.click()
    assert window.status_connection_label.text() == "Connecting..."
    assert window.status_progress.isVisibleTo(window)
    runner.run_pending()

    assert window.collections_list.count() == 2
    assert window.collections_list.item(0).text() == "Colección 1\nID: 1"
    assert window.collections_model.rowCount() == 2
    assert window.collections_stack.currentIndex() == 2
    assert window.connect_button.text() == "Refresh"
    assert window.export_button.isEnabled()
    assert window.status_connection_label.text() == "Connected to Shopify"
    assert window.status_summary_label.text() == "2 collections"


def test_pestana_de_productos_cambia_export(ventana) -> None:
    window, _orchestrator, runner, _alertas = ventana
    window.connect_button.click()
    runner.run_pending()

    window.tabs.setCurrentIndex(1)

    assert window.export_button.text() == "Export Products"
    assert not window.export_button.isEnabled()

    window.refresh_products_button.click()
    runner.run_pending()

    assert window.products_model.rowCount() == 1
    assert window.products_stack.currentIndex() == 2
    assert window.export_button.isEnabled()


def test_abrir_coleccion_muestra_sus_productos(ventana) -> None:
    window, _orchestrator, runner, _alertas = ventana
    window.connect_button.click()
    runner.run_pending()

    window.open_collection(1)
    runner.run_pending()

    child = window._collection_windows[1]
    assert child.isVisible()
    assert child.products_model.rowCount() == 1
    assert child.stack.currentIndex() == 2


def test_operacion_sin_conexion_muestra_alerta(ventana, qapp) -> None:
    window, orchestrator, _runner, alertas = ventana

    orchestrator.fetch_products()
    qapp.processEvents()

    assert alertas and "Please connect to Shopify first" in alertas[0]
    assert orchestrator.state.last_error is None


def test_exportar_escribe_csv(ventana, tmp_path, monkeypatch) -> None:
    window, _orchestrator, runner, _alertas = ventana
    window.connect_button.click()
    runner.run_pending()
    destino = tmp_path / "colecciones.csv"
    monkeypatch.setattr(
        "PySide6.QtWidgets.QFileDialog.getSaveFileName",
        lambda *_args, **_kwargs: (str(destino), "CSV (*.csv)"),
    )

    window.export_button.click()

    assert destino.read_text(encoding="utf-8").startswith("ID,Title,Handle,Published Scope")
