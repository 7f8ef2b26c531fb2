from __future__ import annotations

MYSHOPIFY_SUFFIX = ".myshopify.com"


def normalize_shop_domain(value: str) -> str:
    """Acepta "tienda.myshopify.com", "https://tienda.myshopify.com/" o "tienda"."""
    raw = value.strip()
    for prefix in ("https://", "http://"):
        if raw.lower().startswith(prefix):
            raw = raw[len(prefix):]
    raw = raw.split("/", 1)[0].strip()
    if raw and "." not in raw:
        raw = f"{raw}{MYSHOPIFY_SUFFIX}"
    return raw.lower()
