from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from shopify_sync.application.csv_export import format_short_datetime
from shopify_sync.domain.models import Collection, Product
from shopify_sync.domain.pricing import format_price_range

RECORD_ROLE = Qt.UserRole + 1


class CollectionsTableModel(QAbstractTableModel):
    def __init__(self, collections: Sequence[Collection] | None = None) -> None:
        super().__init__()
        self._collections = list(collections or [])
        self._headers = [
            "ID",
            "Title",
            "Handle",
            "Published Scope",
            "Last Updated",
            "Image",
        ]

    def rowCount(self, parent: QModelIndex | None = None) -> int:
        return len(self._collections)

    def columnCount(self, parent: QModelIndex | None = None) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid():
            return None
        collection = self._collections[index.row()]
        if role == RECORD_ROLE:
            return collection
        column = index.column()
        if role == Qt.ToolTipRole and column == 5:
            return collection.image.src if collection.image else "No image"
        if role != Qt.DisplayRole:
            return None
        if column == 0:
            return str(collection.id)
        if column == 1:
            return collection.title
        if column == 2:
            return collection.handle
        if column == 3:
            return collection.published_scope
        if column == 4:
            return format_short_datetime(collection.updated_at)
        if column == 5:
            if collection.image is None:
                return "No image"
            return collection.image.alt or f"{collection.image.width}×{collection.image.height}"
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return self._headers[section]
        return str(section + 1)

    def set_collections(self, collections: Sequence[Collection]) -> None:
        self.beginResetModel()
        self._collections = list(collections)
        self.endResetModel()

    def collection_at(self, row: int) -> Collection | None:
        if 0 <= row < len(self._collections):
            return self._collections[row]
        return None


class ProductsTableModel(QAbstractTableModel):
    def __init__(self, products: Sequence[Product] | None = None) -> None:
        super().__init__()
        self._products = list(products or [])
        self._headers = [
            "ID",
            "Title",
            "Vendor",
            "Type",
            "Status",
            "Variants",
            "Price Range",
            "Last Updated",
        ]

    def rowCount(self, parent: QModelIndex | None = None) -> int:
        return len(self._products)

    def columnCount(self, parent: QModelIndex | None = None) -> int:
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid():
            return None
        product = self._products[index.row()]
        if role == RECORD_ROLE:
            return product
        column = index.column()
        if role == Qt.TextAlignmentRole and column in (0, 5):
            return Qt.AlignRight | Qt.AlignVCenter
        if role != Qt.DisplayRole:
            return None
        if column == 0:
            return str(product.id)
        if column == 1:
            return product.title
        if column == 2:
            return product.vendor
        if column == 3:
            return product.product_type
        if column == 4:
            return product.status.capitalize()
        if column == 5:
            return str(len(product.variants))
        if column == 6:
            return format_price_range(product.variants)
        if column == 7:
            return format_short_datetime(product.updated_at)
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return self._headers[section]
        return str(section + 1)

    def set_products(self, products: Sequence[Product]) -> None:
        self.beginResetModel()
        self._products = list(products)
        self.endResetModel()

    def product_at(self, row: int) -> Product | None:
        if 0 <= row < len(self._products):
            return self._products[row]
        return None
