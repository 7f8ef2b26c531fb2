from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shopify_sync.core.errors import AppError
from shopify_sync.domain.models import Collection, Product


@dataclass(frozen=True)
class SyncState:
    """Instantánea completa que observa la capa de presentación.

    Es inmutable: el orquestador publica una instancia nueva en cada cambio,
    de modo que un observador nunca ve una lista a medio sustituir.
    """

    is_connected: bool = False
    is_connecting: bool = False
    is_loading_collections: bool = False
    is_loading_products: bool = False
    is_loading_collection_products: bool = False
    last_error: Optional[AppError] = None
    notice: Optional[str] = None
    collections: tuple[Collection, ...] = ()
    products: tuple[Product, ...] = ()
    selected_collection: Optional[Collection] = None
    collection_products: tuple[Product, ...] = ()

    @property
    def is_loading(self) -> bool:
        return (
            self.is_connecting
            or self.is_loading_collections
            or self.is_loading_products
            or self.is_loading_collection_products
        )

    @property
    def last_error_message(self) -> str | None:
        if self.last_error is None:
            return None
        return self.last_error.user_message
