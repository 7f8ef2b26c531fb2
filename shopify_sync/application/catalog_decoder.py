from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Callable, TypeVar

from shopify_sync.domain.catalog_errors import CatalogDecodeError
from shopify_sync.domain.models import (
    Collect,
    Collection,
    CollectionImage,
    Product,
    ProductImage,
    ProductVariant,
)

T = TypeVar("T")

_MISSING = object()


def _join(path: str, key: str | int) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


def _load_json(body: bytes | str) -> Any:
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise CatalogDecodeError("", f"invalid JSON ({exc.msg} at line {exc.lineno} column {exc.colno})") from exc
    except UnicodeDecodeError as exc:
        raise CatalogDecodeError("", f"body is not valid UTF-8 ({exc.reason})") from exc


def _object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CatalogDecodeError(path, f"expected object, got {_type_name(value)}")
    return value


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _field(payload: dict[str, Any], key: str, path: str, *, optional: bool = False) -> Any:
    value = payload.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        reason = "missing required field" if value is _MISSING else "required field is null"
        raise CatalogDecodeError(_join(path, key), reason)
    return value


def _int(payload: dict[str, Any], key: str, path: str) -> int:
    value = _field(payload, key, path)
    if isinstance(value, bool) or not isinstance(value, int):
        raise CatalogDecodeError(_join(path, key), f"expected integer, got {_type_name(value)}")
    return value


def _check_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise CatalogDecodeError(path, f"expected string, got {_type_name(value)}")
    return value


def _str(payload: dict[str, Any], key: str, path: str) -> str:
    return _check_str(_field(payload, key, path), _join(path, key))


def _optional_str(payload: dict[str, Any], key: str, path: str) -> str | None:
    value = _field(payload, key, path, optional=True)
    return None if value is None else _check_str(value, _join(path, key))


def _price(payload: dict[str, Any], key: str, path: str) -> str:
    # Shopify serializa el precio como cadena decimal; nunca se pasa por float.
    value = _field(payload, key, path)
    if isinstance(value, str):
        return value
    raise CatalogDecodeError(_join(path, key), f"expected decimal string, got {_type_name(value)}")


def parse_timestamp(raw: str, path: str) -> datetime:
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        value = datetime.fromisoformat(text)
    except ValueError as exc:
        raise CatalogDecodeError(path, f"invalid ISO-8601 timestamp {raw!r}") from exc
    if value.tzinfo is None or value.utcoffset() is None:
        raise CatalogDecodeError(path, f"timestamp without UTC offset {raw!r}")
    return value


def _datetime(payload: dict[str, Any], key: str, path: str) -> datetime:
    return parse_timestamp(_str(payload, key, path), _join(path, key))


def _optional_datetime(payload: dict[str, Any], key: str, path: str) -> datetime | None:
    raw = _optional_str(payload, key, path)
    if raw is None:
        return None
    return parse_timestamp(raw, _join(path, key))


def _list(payload: dict[str, Any], key: str, path: str, decode_item: Callable[[Any, str], T]) -> list[T]:
    value = _field(payload, key, path)
    list_path = _join(path, key)
    if not isinstance(value, list):
        raise CatalogDecodeError(list_path, f"expected array, got {_type_name(value)}")
    return [decode_item(item, _join(list_path, index)) for index, item in enumerate(value)]


def _collection_image(value: Any, path: str) -> CollectionImage:
    payload = _object(value, path)
    return CollectionImage(
        src=_str(payload, "src", path),
        width=_int(payload, "width", path),
        height=_int(payload, "height", path),
        alt=_optional_str(payload, "alt", path),
        created_at=_optional_datetime(payload, "created_at", path),
    )


def _collection(value: Any, path: str) -> Collection:
    payload = _object(value, path)
    image_payload = _field(payload, "image", path, optional=True)
    return Collection(
        id=_int(payload, "id", path),
        title=_str(payload, "title", path),
        handle=_str(payload, "handle", path),
        published_scope=_str(payload, "published_scope", path),
        updated_at=_datetime(payload, "updated_at", path),
        image=_collection_image(image_payload, _join(path, "image")) if image_payload is not None else None,
    )


def _variant(value: Any, path: str) -> ProductVariant:
    payload = _object(value, path)
    return ProductVariant(
        id=_int(payload, "id", path),
        title=_str(payload, "title", path),
        price=_price(payload, "price", path),
        sku=_optional_str(payload, "sku", path),
        position=_int(payload, "position", path),
        inventory_quantity=_int(payload, "inventory_quantity", path),
    )


def _product_image(value: Any, path: str) -> ProductImage:
    payload = _object(value, path)
    return ProductImage(
        id=_int(payload, "id", path),
        src=_str(payload, "src", path),
        width=_int(payload, "width", path),
        height=_int(payload, "height", path),
        alt=_optional_str(payload, "alt", path),
    )


def _product(value: Any, path: str) -> Product:
    payload = _object(value, path)
    return Product(
        id=_int(payload, "id", path),
        title=_str(payload, "title", path),
        handle=_str(payload, "handle", path),
        vendor=_str(payload, "vendor", path),
        product_type=_str(payload, "product_type", path),
        status=_str(payload, "status", path),
        published_at=_optional_datetime(payload, "published_at", path),
        updated_at=_datetime(payload, "updated_at", path),
        variants=tuple(_list(payload, "variants", path, _variant)),
        images=tuple(_list(payload, "images", path, _product_image)),
    )


def _collect(value: Any, path: str) -> Collect:
    payload = _object(value, path)
    return Collect(
        id=_int(payload, "id", path),
        product_id=_int(payload, "product_id", path),
        collection_id=_int(payload, "collection_id", path),
    )


def _decode_envelope(body: bytes | str, envelope_key: str, decode_item: Callable[[Any, str], T]) -> list[T]:
    root = _object(_load_json(body), "")
    return _list(root, envelope_key, "", decode_item)


def decode_collections(body: bytes | str) -> list[Collection]:
    return _decode_envelope(body, "custom_collections", _collection)


def decode_products(body: bytes | str) -> list[Product]:
    return _decode_envelope(body, "products", _product)


def decode_collects(body: bytes | str) -> list[Collect]:
    return _decode_envelope(body, "collects", _collect)
