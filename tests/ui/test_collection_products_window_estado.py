from __future__ import annotations

from shopify_sync.domain.catalog_errors import ShopifyUnexpectedStatusError
from shopify_sync.domain.sync_state import SyncState
from shopify_sync.ui.collection_products_window import CollectionProductsWindow
from tests.factories import make_collection, make_product


class _Suscripcion:
    def __init__(self) -> None:
        self.observers = []
        self.cancelada = False

    def __call__(self, observer):
        self.observers.append(observer)

        def _cancel() -> None:
            self.cancelada = True

        return _cancel


def test_muestra_productos_tras_la_carga(qapp) -> None:
    coleccion = make_collection(1, "Verano")
    window = CollectionProductsWindow(coleccion, _Suscripcion())

    assert window.windowTitle() == "Products in Verano"
    window.render_state(SyncState(is_connected=True, selected_collection=coleccion, is_loading_collection_products=True))
    assert window.stack.currentIndex() == 0
    assert window.awaiting_result

    window.render_state(
        SyncState(is_connected=True, selected_collection=coleccion, collection_products=(make_product(10),))
    )

    assert window.stack.currentIndex() == 2
    assert window.products_model.rowCount() == 1
    assert not window.awaiting_result


def test_coleccion_vacia_muestra_estado_vacio(qapp) -> None:
    coleccion = make_collection(1)
    window = CollectionProductsWindow(coleccion, _Suscripcion())

    window.render_state(SyncState(is_connected=True, selected_collection=coleccion, is_loading_collection_products=True))
    window.render_state(SyncState(is_connected=True, selected_collection=coleccion))

    assert window.stack.currentIndex() == 1


def test_ignora_resultados_de_otra_coleccion(qapp) -> None:
    propia = make_collection(1)
    otra = make_collection(2)
    window = CollectionProductsWindow(propia, _Suscripcion())
    window.render_state(SyncState(is_connected=True, selected_collection=propia, is_loading_collection_products=True))
    window.render_state(SyncState(is_connected=True, selected_collection=propia, collection_products=(make_product(10),)))

    window.render_state(SyncState(is_connected=True, selected_collection=otra, is_loading_collection_products=True))
    window.render_state(
        SyncState(is_connected=True, selected_collection=otra, collection_products=(make_product(20), make_product(21)))
    )

    assert window.products_model.rowCount() == 1
    assert window.products_model.product_at(0).id == 10



def test_carga_superada_por_otra_ventana_sale_del_estado_de_carga(qapp) -> None:
    propia = make_collection(1)
    otra = make_collection(2)
    window = CollectionProductsWindow(propia, _Suscripcion())
    window.render_state(SyncState(is_connected=True, selected_collection=propia, is_loading_collection_products=True))

    window.render_state(SyncState(is_connected=True, selected_collection=otra, is_loading_collection_products=True))

    assert not window.awaiting_result
    assert window.stack.currentIndex() == 1


def test_recarga_superada_conserva_el_listado_previo(qapp) -> None:
    propia = make_collection(1)
    otra = make_collection(2)
    window = CollectionProductsWindow(propia, _Suscripcion())
    window.render_state(SyncState(is_connected=True, selected_collection=propia, is_loading_collection_products=True))
    window.render_state(SyncState(is_connected=True, selected_collection=propia, collection_products=(make_product(10),)))
    window.render_state(SyncState(is_connected=True, selected_collection=propia, is_loading_collection_products=True))

    window.render_state(SyncState(is_connected=True, selected_collection=otra, is_loading_collection_products=True))

    assert not window.awaiting_result
    assert window.stack.currentIndex() == 2
    assert window.products_model.product_at(0).id == 10

def test_no_acepta_resultado_sin_haber_visto_la_carga(qapp) -> None:
    coleccion = make_collection(1)
    window = CollectionProductsWindow(coleccion, _Suscripcion())

    window.render_state(SyncState(is_connected=True, selected_collection=coleccion, collection_products=(make_product(10),)))

    assert window.products_model.rowCount() == 0
    assert window.stack.currentIndex() == 0


def test_error_muestra_mensaje(qapp) -> None:
    coleccion = make_collection(1)
    window = CollectionProductsWindow(coleccion, _Suscripcion())

    window.render_state(SyncState(is_connected=True, selected_collection=coleccion, is_loading_collection_products=True))
    window.render_state(
        SyncState(is_connected=True, selected_collection=coleccion, last_error=ShopifyUnexpectedStatusError(500))
    )

    assert window.stack.currentIndex() == 3


def test_cerrar_cancela_la_suscripcion(qapp) -> None:
    suscripcion = _Suscripcion()
    window = CollectionProductsWindow(make_collection(1), suscripcion)
    window.show()

    window.close()

    assert suscripcion.observers == [window.render_state]
    assert suscripcion.cancelada
