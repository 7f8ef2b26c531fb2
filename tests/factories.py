from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Mapping

from shopify_sync.domain.models import Collection, Credentials, Product, ProductVariant
from shopify_sync.domain.ports import HttpResponse

CREDENTIALS = Credentials(shop_domain="demo-store.myshopify.com", access_token="shpat_test1234")


def collection_payload(collection_id: int = 1, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": collection_id,
        "title": f"Colección {collection_id}",
        "handle": f"coleccion-{collection_id}",
        "published_scope": "web",
        "updated_at": "2024-01-15T10:30:00-05:00",
        "image": None,
        "body_html": "<p>ignorado</p>",
    }
    payload.update(overrides)
    return payload


def variant_payload(variant_id: int = 100, price: str = "10.00", **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": variant_id,
        "title": "Default Title",
        "price": price,
        "sku": None,
        "position": 1,
        "inventory_quantity": 5,
    }
    payload.update(overrides)
    return payload


def product_payload(product_id: int = 10, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": product_id,
        "title": f"Producto {product_id}",
        "handle": f"producto-{product_id}",
        "vendor": "ACME",
        "product_type": "Camisetas",
        "status": "active",
        "published_at": "2024-01-10T08:00:00Z",
        "updated_at": "2024-01-15T10:30:00Z",
        "variants": [variant_payload(product_id * 10)],
        "images": [],
    }
    payload.update(overrides)
    return payload


def collect_payload(collect_id: int, product_id: int, collection_id: int = 1) -> dict[str, Any]:
    return {"id": collect_id, "product_id": product_id, "collection_id": collection_id, "position": 1}


def envelope(key: str, items: list[dict[str, Any]]) -> bytes:
    return json.dumps({key: items}).encode("utf-8")


def ok(body: bytes) -> HttpResponse:
    return HttpResponse(status_code=200, body=body)


def make_collection(collection_id: int = 1, title: str = "Verano", **overrides: Any) -> Collection:
    values: dict[str, Any] = {
        "id": collection_id,
        "title": title,
        "handle": title.lower(),
        "published_scope": "web",
        "updated_at": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        "image": None,
    }
    values.update(overrides)
    return Collection(**values)


def make_product(product_id: int = 10, prices: tuple[str, ...] = ("10.00",), **overrides: Any) -> Product:
    values: dict[str, Any] = {
        "id": product_id,
        "title": f"Producto {product_id}",
        "handle": f"producto-{product_id}",
        "vendor": "ACME",
        "product_type": "Camisetas",
        "status": "active",
        "updated_at": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        "published_at": None,
        "variants": tuple(
            ProductVariant(id=product_id * 10 + index, title="V", price=price, position=index + 1, inventory_quantity=1)
            for index, price in enumerate(prices)
        ),
    }
    values.update(overrides)
    return Product(**values)


class FakeShopifyHttp:
    """Puerto HTTP en memoria: responde por recurso y registra cada llamada."""

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[Credentials, str, dict[str, str]]] = []

    def get(self, credentials: Credentials, resource: str, params: Mapping[str, str] | None = None) -> HttpResponse:
        self.calls.append((credentials, resource, dict(params or {})))
        response = self.responses[resource]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, list):
            current = response.pop(0)
            if isinstance(current, Exception):
                raise current
            return current
        return response

    def resources(self) -> list[str]:
        return [resource for _credentials, resource, _params in self.calls]


class FakeCredentialsStore:
    def __init__(self, current: Credentials | None = None, error: Exception | None = None) -> None:
        self.current = current
        self.error = error
        self.saved: list[Credentials] = []

    def load(self) -> Credentials | None:
        return self.current

    def save(self, credentials: Credentials) -> Credentials:
        if self.error is not None:
            raise self.error
        self.saved.append(credentials)
        self.current = credentials
        return credentials


class ManualTaskRunner:
    """Runner que guarda las tareas y deja elegir en qué orden terminan."""

    def __init__(self) -> None:
        self.tasks: list[tuple[Any, Any, Any]] = []

    def submit(self, work, on_success, on_error) -> None:
        self.tasks.append((work, on_success, on_error))

    def run(self, index: int = 0) -> None:
        work, on_success, on_error = self.tasks.pop(index)
        try:
            result = work()
        except Exception as exc:  # noqa: BLE001
            on_error(exc)
        else:
            on_success(result)

    def run_all(self) -> None:
        while self.tasks:
            self.run()
