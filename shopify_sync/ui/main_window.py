from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QSplitter,
    QStackedWidget,
    QStatusBar,
    QTabWidget,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from shopify_sync.application.settings_service import SettingsService
from shopify_sync.application.sync_orchestrator import SyncOrchestrator
from shopify_sync.core.errors import AppError
from shopify_sync.domain.sync_state import SyncState
from shopify_sync.ui.collection_products_window import CollectionProductsWindow
from shopify_sync.ui.components import EmptyStateWidget, LoadingStateWidget
from shopify_sync.ui.controllers.sync_controller import SyncController, apply_button_decision
from shopify_sync.ui.controllers.toolbar_state_rules import TAB_COLLECTIONS, TAB_PRODUCTS
from shopify_sync.ui.dialog_settings import SettingsDialog
from shopify_sync.ui.error_mapping import map_error_to_ui_message
from shopify_sync.ui.models_qt import CollectionsTableModel, ProductsTableModel
from shopify_sync.ui.patterns import SPACING_BASE, status_badge, status_dot
from shopify_sync.ui.theme import build_stylesheet, tone_color

logger = logging.getLogger(__name__)

COLLECTION_ID_ROLE = Qt.UserRole + 1

_PAGE_LOADING = 0
_PAGE_EMPTY = 1
_PAGE_TABLE = 2

_TABS = (TAB_COLLECTIONS, TAB_PRODUCTS)


class MainWindow(QMainWindow):
    def __init__(self, orchestrator: SyncOrchestrator, settings_service: SettingsService) -> None:
        super().__init__()
        app = QApplication.instance()
        if app:
            app.setStyleSheet(build_stylesheet())
        self._orchestrator = orchestrator
        self._settings_service = settings_service
        self._controller = SyncController(orchestrator, settings_service)
        self._collection_windows: dict[int, CollectionProductsWindow] = {}
        self._shown_error: AppError | None = None
        self._last_state = orchestrator.state
        self.setWindowTitle("Shopify Sync")
        self.setMinimumSize(900, 600)
        self._build_ui()
        self._build_menu()
        self._build_status_bar()
        self._unsubscribe = orchestrator.subscribe(self.render_state)
        self.render_state(orchestrator.state)

    @property
    def active_tab(self) -> str:
        return _TABS[self.tabs.currentIndex()]

    def _build_ui(self) -> None:
        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self._build_sidebar())
        splitter.addWidget(self._build_detail())
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([240, 760])
        self.setCentralWidget(splitter)

    def _build_sidebar(self) -> QWidget:
        sidebar = QWidget()
        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(SPACING_BASE, SPACING_BASE, 0, SPACING_BASE)
        header = QLabel("Collections")
        header.setProperty("role", "subtitle")
        layout.addWidget(header)
        self.collections_list = QListWidget()
        self.collections_list.itemActivated.connect(self._on_collection_activated)
        self.collections_list.itemClicked.connect(self._on_collection_activated)
        layout.addWidget(self.collections_list, 1)
        return sidebar

    def _build_detail(self) -> QWidget:
        detail = QWidget()
        layout = QVBoxLayout(detail)
        layout.setContentsMargins(SPACING_BASE, SPACING_BASE, SPACING_BASE, SPACING_BASE)
        layout.setSpacing(SPACING_BASE)

        toolbar = QHBoxLayout()
        toolbar.addStretch(1)
        self.connect_button = QPushButton("Connect")
        self.connect_button.setProperty("variant", "primary")
        self.connect_button.clicked.connect(self._controller.on_connect)
        self.refresh_products_button = QPushButton("Fetch Products")
        self.refresh_products_button.clicked.connect(self._controller.on_refresh_products)
        self.export_button = QPushButton("Export")
        self.export_button.clicked.connect(self._on_export)
        self.settings_button = QPushButton("Settings")
        self.settings_button.clicked.connect(self._on_open_settings)
        for button in (self.connect_button, self.refresh_products_button, self.export_button, self.settings_button):
            toolbar.addWidget(button)
        layout.addLayout(toolbar)

        self.tabs = QTabWidget()
        self.collections_model = CollectionsTableModel()
        self.collections_stack, self.collections_empty = self._build_table_page(
            self.collections_model,
            loading_text="Loading collections...",
            empty_title="No Collections",
            empty_text="Connect to Shopify to view your collections",
            action_text="Connect to Shopify",
            on_action=self._controller.on_connect,
        )
        self.collections_table = self.collections_stack.widget(_PAGE_TABLE)
        self.collections_table.doubleClicked.connect(self._on_collection_row_activated)
        self.tabs.addTab(self.collections_stack, "Collections")

        self.products_model = ProductsTableModel()
        self.products_stack, self.products_empty = self._build_table_page(
            self.products_model,
            loading_text="Loading products...",
            empty_title="No Products",
            empty_text="Connect to Shopify to view your products",
            action_text="Fetch Products",
            on_action=self._controller.on_refresh_products,
        )
        self.tabs.addTab(self.products_stack, "Products")
        self.tabs.currentChanged.connect(lambda _index: self.render_state(self._last_state))
        layout.addWidget(self.tabs, 1)
        return detail

    def _build_table_page(
        self,
        model,
        *,
        loading_text: str,
        empty_title: str,
        empty_text: str,
        action_text: str,
        on_action,
    ) -> tuple[QStackedWidget, EmptyStateWidget]:
        stack = QStackedWidget()
        stack.addWidget(LoadingStateWidget(loading_text))
        empty_state = EmptyStateWidget(empty_title, empty_text, action_text, on_action)
        stack.addWidget(empty_state)
        table = QTableView()
        table.setModel(model)
        table.setSelectionBehavior(QTableView.SelectRows)
        table.setAlternatingRowColors(True)
        table.verticalHeader().setVisible(False)
        table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        stack.addWidget(table)
        return stack, empty_state

    def _build_menu(self) -> None:
        file_menu = self.menuBar().addMenu("File")
        self.refresh_action = QAction("Refresh Collections", self)
        self.refresh_action.setShortcut(QKeySequence("Ctrl+R"))
        self.refresh_action.triggered.connect(self._controller.on_refresh_collections)
        file_menu.addAction(self.refresh_action)
        file_menu.addSeparator()
        self.export_action = QAction("Export to CSV", self)
        self.export_action.setShortcut(QKeySequence("Ctrl+E"))
        self.export_action.triggered.connect(self._on_export)
        file_menu.addAction(self.export_action)
        file_menu.addSeparator()
        settings_action = QAction("Settings...", self)
        settings_action.setShortcut(QKeySequence("Ctrl+,"))
        settings_action.triggered.connect(self._on_open_settings)
        file_menu.addAction(settings_action)

    def _build_status_bar(self) -> None:
        status = QStatusBar(self)
        status.setObjectName("mainStatusBar")
        self.setStatusBar(status)
        self.status_dot_label = QLabel()
        self.status_connection_label = QLabel("Not Connected")
        self.status_progress = QProgressBar()
        self.status_progress.setRange(0, 0)
        self.status_progress.setTextVisible(False)
        self.status_progress.setMaximumWidth(80)
        self.status_progress.setVisible(False)
        self.status_summary_label = QLabel()
        status.addWidget(self.status_dot_label)
        status.addWidget(self.status_connection_label)
        status.addPermanentWidget(self.status_progress)
        status.addPermanentWidget(self.status_summary_label)

    def render_state(self, state: SyncState) -> None:
        previous = self._last_state
        self._last_state = state
        decision = self._controller.decide_toolbar(state, self.active_tab)
        apply_button_decision(self.connect_button, decision.connect)
        apply_button_decision(self.export_button, decision.export)
        apply_button_decision(self.refresh_products_button, decision.refresh_products)
        self.export_action.setEnabled(decision.export.enabled)
        self.refresh_action.setEnabled(state.is_connected and not state.is_loading)

        self.status_dot_label.setText(status_dot(decision.status_tone))
        self.status_dot_label.setStyleSheet(f"color: {tone_color(decision.status_tone)};")
        self.status_dot_label.setToolTip(status_badge(decision.status_tone))
        self.status_connection_label.setText(decision.status_text)
        self.status_progress.setVisible(state.is_loading)
        self.status_summary_label.setText(decision.summary_text)

        if state.collections is not previous.collections or self.collections_list.count() != len(state.collections):
            self._render_collections(state)
        if state.products is not previous.products:
            self.products_model.set_products(state.products)
        self._render_page(
            self.collections_stack,
            loading=state.is_connecting or state.is_loading_collections,
            has_rows=bool(state.collections),
        )
        self._render_page(self.products_stack, loading=state.is_loading_products, has_rows=bool(state.products))

        if state.notice and state.notice != previous.notice:
            self.statusBar().showMessage(state.notice, 5000)
        if state.last_error is not None and state.last_error is not self._shown_error:
            self._shown_error = state.last_error
            # Fuera del ciclo de publicación: el diálogo abre un bucle de eventos propio.
            QTimer.singleShot(0, lambda error=state.last_error: self._show_error(error))

    def _render_collections(self, state: SyncState) -> None:
        self.collections_model.set_collections(state.collections)
        self.collections_list.clear()
        for collection in state.collections:
            item = QListWidgetItem(f"{collection.title}\nID: {collection.id}")
            item.setData(COLLECTION_ID_ROLE, collection.id)
            self.collections_list.addItem(item)

    @staticmethod
    def _render_page(stack: QStackedWidget, *, loading: bool, has_rows: bool) -> None:
        if loading:
            stack.setCurrentIndex(_PAGE_LOADING)
        elif has_rows:
            stack.setCurrentIndex(_PAGE_TABLE)
        else:
            stack.setCurrentIndex(_PAGE_EMPTY)

    def _show_error(self, error: AppError) -> None:
        mapped = map_error_to_ui_message(error)
        if mapped.severity == "warning":
            QMessageBox.warning(self, "Error", mapped.as_text())
        else:
            QMessageBox.critical(self, "Error", mapped.as_text())
        if self._orchestrator.state.last_error is error:
            self._controller.on_dismiss_error()

    def _on_collection_activated(self, item: QListWidgetItem) -> None:
        collection_id = item.data(COLLECTION_ID_ROLE)
        if collection_id is not None:
            self.open_collection(int(collection_id))

    def _on_collection_row_activated(self, index) -> None:
        collection = self.collections_model.collection_at(index.row())
        if collection is not None:
            self.open_collection(collection.id)

    def open_collection(self, collection_id: int) -> None:
        collection = next((item for item in self._last_state.collections if item.id == collection_id), None)
        if collection is None:
            self._controller.on_select_collection(collection_id)
            return
        window = self._collection_windows.get(collection_id)
        if window is None or not window.isVisible():
            window = CollectionProductsWindow(collection, self._orchestrator.subscribe, self)
            window.setAttribute(Qt.WA_DeleteOnClose, True)
            window.destroyed.connect(lambda _obj=None, key=collection_id: self._collection_windows.pop(key, None))
            self._collection_windows[collection_id] = window
        self._controller.on_select_collection(collection_id)
        if not window.awaiting_result and window.products_model.rowCount() == 0:
            # La selección no llegó a lanzar la carga (p. ej. sin conexión).
            window.close()
            return
        window.show()
        window.raise_()
        window.activateWindow()

    def _on_export(self) -> None:
        active_tab = self.active_tab
        path, _ = QFileDialog.getSaveFileName(
            self,
            "Export to CSV",
            self._controller.default_export_name(active_tab),
            "CSV (*.csv)",
        )
        if not path:
            return
        try:
            destination = self._controller.export_to(active_tab, path)
        except AppError as exc:
            mapped = map_error_to_ui_message(exc)
            QMessageBox.critical(self, mapped.title, mapped.as_text())
            return
        self.statusBar().showMessage(f"Exported to {destination}", 5000)

    def _on_open_settings(self) -> None:
        dialog = SettingsDialog(self._settings_service, self)
        if dialog.exec() == SettingsDialog.Accepted:
            self._controller.on_settings_saved(dialog.last_result)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        for window in list(self._collection_windows.values()):
            window.close()
        self._unsubscribe()
        super().closeEvent(event)
