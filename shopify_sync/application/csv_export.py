from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Callable, Iterable, Sequence

from shopify_sync.domain.catalog_errors import ExportError
from shopify_sync.domain.models import Collection, Product
from shopify_sync.domain.pricing import format_price_range

logger = logging.getLogger(__name__)

DEFAULT_COLLECTIONS_FILE_NAME = "shopify_collections.csv"
DEFAULT_PRODUCTS_FILE_NAME = "shopify_products.csv"

COLLECTION_HEADERS = ("ID", "Title", "Handle", "Published Scope", "Last Updated", "Image URL")
PRODUCT_HEADERS = (
    "ID",
    "Title",
    "Handle",
    "Vendor",
    "Type",
    "Status",
    "Published At",
    "Variants",
    "Price Range",
)
NOT_PUBLISHED = "Not published"

# Abreviaturas fijas: el CSV no depende del locale del sistema.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

DateTimeFormatter = Callable[[datetime], str]


def _date_and_hour(local: datetime) -> tuple[str, int, str]:
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}", hour, meridiem


def format_medium_datetime(value: datetime, tz: tzinfo | None = None) -> str:
    """Formato "Jan 15, 2024 at 10:30:00 AM", por defecto en hora local."""
    local = value.astimezone(tz)
    date_text, hour, meridiem = _date_and_hour(local)
    return f"{date_text} at {hour}:{local.minute:02d}:{local.second:02d} {meridiem}"


def format_short_datetime(value: datetime, tz: tzinfo | None = None) -> str:
    local = value.astimezone(tz)
    date_text, hour, meridiem = _date_and_hour(local)
    return f"{date_text}, {hour}:{local.minute:02d} {meridiem}"


def _render(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def export_collections_csv(
    collections: Iterable[Collection],
    *,
    format_datetime: DateTimeFormatter = format_medium_datetime,
) -> str:
    rows = (
        (
            collection.id,
            collection.title,
            collection.handle,
            collection.published_scope,
            format_datetime(collection.updated_at),
            collection.image.src if collection.image else "",
        )
        for collection in collections
    )
    return _render(COLLECTION_HEADERS, rows)


def export_products_csv(
    products: Iterable[Product],
    *,
    format_datetime: DateTimeFormatter = format_medium_datetime,
) -> str:
    rows = (
        (
            product.id,
            product.title,
            product.handle,
            product.vendor,
            product.product_type,
            product.status,
            format_datetime(product.published_at) if product.published_at else NOT_PUBLISHED,
            len(product.variants),
            format_price_range(product.variants),
        )
        for product in products
    )
    return _render(PRODUCT_HEADERS, rows)


def write_csv(path: str | Path, text: str) -> Path:
    destination = Path(path)
    tmp_path = destination.with_name(f"{destination.name}.tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8", newline="")
        tmp_path.replace(destination)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise ExportError(f"Failed to save CSV: {exc.strerror or exc}") from exc
    logger.info("CSV exportado a %s (%s bytes)", destination, len(text.encode("utf-8")))
    return destination
