from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHeaderView, QLabel, QStackedWidget, QTableView, QVBoxLayout, QWidget

from shopify_sync.domain.models import Collection
from shopify_sync.domain.sync_state import SyncState
from shopify_sync.ui.components import EmptyStateWidget, LoadingStateWidget
from shopify_sync.ui.models_qt import ProductsTableModel
from shopify_sync.ui.patterns import SPACING_BASE

_PAGE_LOADING = 0
_PAGE_EMPTY = 1
_PAGE_TABLE = 2
_PAGE_ERROR = 3


class CollectionProductsWindow(QWidget):
    """Ventana independiente con los productos de una colección.

    Solo acepta el resultado de la carga que vio empezar para su colección;
    una ventana abierta antes conserva su último listado.
    """

    def __init__(
        self,
        collection: Collection,
        subscribe: Callable[[Callable[[SyncState], None]], Callable[[], None]],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._collection = collection
        self._awaiting_result = False
        self.setWindowFlag(Qt.Window, True)
        self.setWindowTitle(f"Products in {collection.title}")
        self.resize(800, 500)
        self._build_ui()
        self._unsubscribe: Callable[[], None] | None = subscribe(self.render_state)

    @property
    def collection(self) -> Collection:
        return self._collection

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(SPACING_BASE * 2, SPACING_BASE * 2, SPACING_BASE * 2, SPACING_BASE * 2)
        layout.setSpacing(SPACING_BASE)

        title = QLabel(self._collection.title)
        title.setProperty("role", "subtitle")
        layout.addWidget(title)
        id_label = QLabel(f"ID: {self._collection.id}")
        id_label.setProperty("role", "secondary")
        layout.addWidget(id_label)

        self.stack = QStackedWidget()
        self.stack.addWidget(LoadingStateWidget("Loading collection products..."))
        self.stack.addWidget(EmptyStateWidget("No Products", "This collection has no products"))

        self.products_model = ProductsTableModel()
        self.products_table = QTableView()
        self.products_table.setModel(self.products_model)
        self.products_table.setSelectionBehavior(QTableView.SelectRows)
        self.products_table.setAlternatingRowColors(True)
        self.products_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        self.products_table.verticalHeader().setVisible(False)
        self.stack.addWidget(self.products_table)
        self.error_state = EmptyStateWidget("Could not load products", "")
        self.stack.addWidget(self.error_state)
        layout.addWidget(self.stack, 1)

    def render_state(self, state: SyncState) -> None:
        selected = state.selected_collection
        if selected is None or selected.id != self._collection.id:
            if self._awaiting_result:
                # Otra selección dejó obsoleta nuestra carga.
                self._awaiting_result = False
                self.stack.setCurrentIndex(_PAGE_TABLE if self.products_model.rowCount() else _PAGE_EMPTY)
            return
        if state.is_loading_collection_products:
            self._awaiting_result = True
            self.stack.setCurrentIndex(_PAGE_LOADING)
            return
        if not self._awaiting_result:
            return
        self._awaiting_result = False
        if state.last_error is not None:
            self.error_state.set_description(state.last_error.user_message)
            self.stack.setCurrentIndex(_PAGE_ERROR)
            return
        self.products_model.set_products(state.collection_products)
        self.stack.setCurrentIndex(_PAGE_TABLE if state.collection_products else _PAGE_EMPTY)

    @property
    def awaiting_result(self) -> bool:
        return self._awaiting_result

    def closeEvent(self, event) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        super().closeEvent(event)
