from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable

from shopify_sync.domain.models import ProductVariant

CURRENCY_PREFIX = "$"


def _parse_price(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, AttributeError):
        return None
    return value if value.is_finite() else None


def format_price(raw: str) -> str:
    return f"{CURRENCY_PREFIX}{raw}"


def format_price_range(variants: Iterable[ProductVariant]) -> str:
    """Rango min-max de precios de variantes.

    Los precios llegan como cadenas decimales; se parsean con ``Decimal``
    solo para comparar y se muestran con el texto original, así "10.00" no
    se convierte en "10.0". Precios no numéricos se ignoran.
    """
    priced: list[tuple[Decimal, str]] = []
    for variant in variants:
        value = _parse_price(variant.price)
        if value is not None:
            priced.append((value, variant.price.strip()))
    if not priced:
        return ""
    lowest = min(priced, key=lambda item: item[0])
    highest = max(priced, key=lambda item: item[0])
    if lowest[0] == highest[0]:
        return format_price(lowest[1])
    return f"{format_price(lowest[1])} - {format_price(highest[1])}"
