from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Mapping, Sequence, TypeVar

from shopify_sync.bootstrap.logging import log_operational_error
from shopify_sync.core.errors import AppError
from shopify_sync.core.observability import OperationContext, generate_correlation_id, log_event
from shopify_sync.application.catalog_decoder import decode_collections, decode_collects, decode_products
from shopify_sync.domain.catalog_errors import (
    CatalogError,
    NotConnectedError,
    UnexpectedSyncError,
    classify_status,
)
from shopify_sync.domain.models import Collection, Credentials, Product
from shopify_sync.domain.ports import CredentialsStorePort, ShopifyHttpPort, TaskRunnerPort
from shopify_sync.domain.sync_state import SyncState

logger = logging.getLogger(__name__)

T = TypeVar("T")

StateObserver = Callable[[SyncState], None]

# Máximo que admite la Admin API por página; no se pagina más allá.
PAGE_LIMIT = "250"

NO_COLLECTIONS_NOTICE = "No collections found"
NO_PRODUCTS_NOTICE = "No products found"
UNKNOWN_COLLECTION_NOTICE = "Collection not found"

_COLLECTIONS = "collections"
_PRODUCTS = "products"
_COLLECTION_PRODUCTS = "collection_products"


class SyncOrchestrator:
    """Coordina conexión, descargas y publicación de ``SyncState``.

    Todas las mutaciones de estado ocurren en los callbacks del runner, que
    se entregan en el hilo de observación. El trabajo de red y el decodificado
    corren fuera de ese hilo y no tocan el estado.

    Cada lista destino lleva un número de generación: una llamada nueva deja
    obsoletas las que sigan en vuelo para la misma lista y sus resultados se
    descartan al llegar, así que siempre gana la última llamada iniciada.
    """

    def __init__(
        self,
        credentials_store: CredentialsStorePort,
        http: ShopifyHttpPort,
        runner: TaskRunnerPort,
    ) -> None:
        self._http = http
        self._runner = runner
        self._credentials = credentials_store.load()
        self._state = SyncState()
        self._observers: list[StateObserver] = []
        self._generations: dict[str, int] = {_COLLECTIONS: 0, _PRODUCTS: 0, _COLLECTION_PRODUCTS: 0}
        self._probe_generation = 0

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def update_credentials(self, credentials: Credentials) -> None:
        self._credentials = credentials
        self._probe_generation += 1
        # Las descargas en vuelo usan las credenciales anteriores.
        for target in self._generations:
            self._generations[target] += 1
        self._publish(
            is_connected=False,
            is_connecting=False,
            is_loading_collections=False,
            is_loading_products=False,
            is_loading_collection_products=False,
        )

    def dismiss_error(self) -> None:
        self._publish(last_error=None, notice=None)

    def verify_connection(self) -> None:
        credentials = self._current_credentials()
        self._probe_generation += 1
        generation = self._probe_generation
        correlation_id = generate_correlation_id()
        self._publish(is_connecting=True, last_error=None, notice=None)
        self._submit(
            "verify_connection",
            correlation_id,
            lambda: self._http.get(credentials, "shop"),
            on_success=lambda response: self._on_probe_finished(generation, response.status_code),
            on_error=lambda exc: self._on_probe_failed(generation, exc),
        )

    def fetch_collections(self) -> None:
        self._fetch_list(
            operation="fetch_collections",
            target=_COLLECTIONS,
            loading_flag="is_loading_collections",
            resource="custom_collections",
            decode=decode_collections,
            empty_notice=NO_COLLECTIONS_NOTICE,
        )

    def fetch_products(self) -> None:
        self._fetch_list(
            operation="fetch_products",
            target=_PRODUCTS,
            loading_flag="is_loading_products",
            resource="products",
            decode=decode_products,
            empty_notice=NO_PRODUCTS_NOTICE,
        )

    def select_collection(self, collection_id: int) -> None:
        collection = next((item for item in self._state.collections if item.id == collection_id), None)
        if collection is None:
            logger.warning("Colección %s no está cargada", collection_id)
            self._publish(notice=UNKNOWN_COLLECTION_NOTICE)
            return
        self.fetch_products_for_collection(collection)

    def fetch_products_for_collection(self, collection: Collection) -> None:
        if not self._require_connection("fetch_products_for_collection"):
            return
        credentials = self._current_credentials()
        generation = self._next_generation(_COLLECTION_PRODUCTS)
        correlation_id = generate_correlation_id()
        self._publish(
            selected_collection=collection,
            is_loading_collection_products=True,
            last_error=None,
            notice=None,
        )
        self._submit(
            "fetch_products_for_collection",
            correlation_id,
            lambda: self._resolve_collection_products(credentials, collection.id),
            on_success=lambda products: self._on_list_loaded(
                _COLLECTION_PRODUCTS, generation, "is_loading_collection_products", products, None
            ),
            on_error=lambda exc: self._on_list_failed(
                "fetch_products_for_collection", _COLLECTION_PRODUCTS, generation, "is_loading_collection_products", exc
            ),
        )

    def _resolve_collection_products(self, credentials: Credentials, collection_id: int) -> list[Product]:
        collects = decode_collects(
            self._checked_get(
                credentials,
                "collects",
                {"collection_id": str(collection_id), "limit": PAGE_LIMIT},
            )
        )
        product_ids = list(dict.fromkeys(collect.product_id for collect in collects))
        if not product_ids:
            logger.info("La colección %s no tiene productos; se omite la búsqueda por ids", collection_id)
            return []
        return decode_products(
            self._checked_get(
                credentials,
                "products",
                {"ids": ",".join(str(product_id) for product_id in product_ids), "limit": PAGE_LIMIT},
            )
        )

    def _fetch_list(
        self,
        *,
        operation: str,
        target: str,
        loading_flag: str,
        resource: str,
        decode: Callable[[bytes], Sequence[Any]],
        empty_notice: str,
    ) -> None:
        if not self._require_connection(operation):
            return
        credentials = self._current_credentials()
        generation = self._next_generation(target)
        correlation_id = generate_correlation_id()
        self._publish(last_error=None, notice=None, **{loading_flag: True})
        self._submit(
            operation,
            correlation_id,
            lambda: decode(self._checked_get(credentials, resource, {"limit": PAGE_LIMIT})),
            on_success=lambda records: self._on_list_loaded(target, generation, loading_flag, records, empty_notice),
            on_error=lambda exc: self._on_list_failed(operation, target, generation, loading_flag, exc),
        )

    def _checked_get(
        self,
        credentials: Credentials,
        resource: str,
        params: Mapping[str, str] | None = None,
    ) -> bytes:
        response = self._http.get(credentials, resource, params)
        error = classify_status(response.status_code)
        if error is not None:
            raise error
        return response.body

    def _on_probe_finished(self, generation: int, status_code: int) -> None:
        if generation != self._probe_generation:
            logger.info("Resultado de verificación obsoleto descartado")
            return
        error = classify_status(status_code)
        if error is not None:
            logger.warning("Verificación de conexión rechazada: %s", error.kind.value)
            self._publish(is_connecting=False, is_connected=False, last_error=error)
            return
        self._publish(is_connecting=False, is_connected=True)
        self.fetch_collections()

    def _on_probe_failed(self, generation: int, exc: Exception) -> None:
        if generation != self._probe_generation:
            return
        error = self._normalize_error("verify_connection", exc)
        self._publish(is_connecting=False, is_connected=False, last_error=error)

    def _on_list_loaded(
        self,
        target: str,
        generation: int,
        loading_flag: str,
        records: Sequence[Any],
        empty_notice: str | None,
    ) -> None:
        if generation != self._generations[target]:
            logger.info("Resultado obsoleto descartado para %s (generación %s)", target, generation)
            return
        changes: dict[str, Any] = {target: tuple(records), loading_flag: False}
        if not records and empty_notice:
            changes["notice"] = empty_notice
        self._publish(**changes)

    def _on_list_failed(
        self,
        operation: str,
        target: str,
        generation: int,
        loading_flag: str,
        exc: Exception,
    ) -> None:
        if generation != self._generations[target]:
            logger.info("Error obsoleto descartado para %s: %s", target, exc)
            return
        error = self._normalize_error(operation, exc)
        changes: dict[str, Any] = {loading_flag: False, "last_error": error}
        if isinstance(error, CatalogError) and error.disconnects:
            changes["is_connected"] = False
        self._publish(**changes)

    def _require_connection(self, operation: str) -> bool:
        if self._state.is_connected:
            return True
        logger.warning("%s sin conexión activa; no se lanza petición", operation)
        self._publish(last_error=NotConnectedError(), notice=None)
        return False

    def _normalize_error(self, operation: str, exc: Exception) -> AppError:
        if isinstance(exc, AppError):
            logger.warning("%s falló: %s (%s)", operation, exc, exc.kind.value)
            return exc
        log_operational_error(logger, "Error inesperado en operación de catálogo", exc=exc, extra={"operation": operation})
        return UnexpectedSyncError(str(exc) or exc.__class__.__name__)

    def _current_credentials(self) -> Credentials:
        # Sin credenciales guardadas se prueba igualmente con cadenas vacías.
        return self._credentials or Credentials(shop_domain="", access_token="")

    def _next_generation(self, target: str) -> int:
        self._generations[target] += 1
        return self._generations[target]

    def _submit(
        self,
        operation: str,
        correlation_id: str,
        work: Callable[[], T],
        *,
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        def _logged_work() -> T:
            with OperationContext(operation, correlation_id):
                log_event(logger, "catalog_operation_started", {"operation": operation}, correlation_id)
                result = work()
                log_event(logger, "catalog_operation_succeeded", {"operation": operation}, correlation_id)
                return result

        self._runner.submit(_logged_work, on_success, on_error)

    def _publish(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for observer in list(self._observers):
            observer(self._state)
