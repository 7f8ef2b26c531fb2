from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Credentials:
    """Par dominio de tienda + token de Admin API.

    Se guarda tal cual lo introduce la persona usuaria (ya normalizado por el
    servicio de ajustes); cadenas vacías son válidas y simplemente fallan en
    remoto.
    """

    shop_domain: str
    access_token: str


@dataclass(frozen=True)
class CollectionImage:
    src: str
    width: int
    height: int
    alt: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Collection:
    """Colección personalizada de Shopify.

    La identidad es el ``id`` remoto: dos instancias con el mismo id son la
    misma colección aunque el resto de campos difiera entre descargas.
    """

    id: int
    title: str = field(compare=False)
    handle: str = field(compare=False)
    published_scope: str = field(compare=False)
    updated_at: datetime = field(compare=False)
    image: Optional[CollectionImage] = field(default=None, compare=False)


@dataclass(frozen=True)
class ProductVariant:
    id: int
    title: str
    price: str
    position: int
    inventory_quantity: int
    sku: Optional[str] = None


@dataclass(frozen=True)
class ProductImage:
    id: int
    src: str
    width: int
    height: int
    alt: Optional[str] = None


@dataclass(frozen=True)
class Product:
    id: int
    title: str
    handle: str
    vendor: str
    product_type: str
    status: str
    updated_at: datetime
    published_at: Optional[datetime] = None
    variants: tuple[ProductVariant, ...] = ()
    images: tuple[ProductImage, ...] = ()


@dataclass(frozen=True)
class Collect:
    """Vínculo colección-producto; solo se usa para resolver ids de producto."""

    id: int
    product_id: int
    collection_id: int
