from __future__ import annotations

import csv
import io
from datetime import datetime, timedelta, timezone

import pytest

from shopify_sync.application.csv_export import (
    COLLECTION_HEADERS,
    NOT_PUBLISHED,
    PRODUCT_HEADERS,
    export_collections_csv,
    export_products_csv,
    format_medium_datetime,
    format_short_datetime,
    write_csv,
)
from shopify_sync.domain.catalog_errors import ExportError
from shopify_sync.domain.models import CollectionImage
from tests.factories import make_collection, make_product


def _utc(value: datetime) -> str:
    return format_medium_datetime(value, timezone.utc)


def _rows(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_format_medium_datetime_en_utc() -> None:
    value = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)

    assert format_medium_datetime(value, timezone.utc) == "Jan 15, 2024 at 10:30:00 AM"


def test_format_medium_datetime_convierte_de_zona() -> None:
    value = datetime(2024, 7, 4, 23, 5, 9, tzinfo=timezone(timedelta(hours=-5)))

    assert format_medium_datetime(value, timezone.utc) == "Jul 5, 2024 at 4:05:09 AM"


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(0, "Mar 1, 2024, 12:00 AM"), (12, "Mar 1, 2024, 12:00 PM"), (15, "Mar 1, 2024, 3:00 PM")],
)
def test_format_short_datetime_reloj_de_12_horas(hour: int, expected: str) -> None:
    value = datetime(2024, 3, 1, hour, 0, tzinfo=timezone.utc)

    assert format_short_datetime(value, timezone.utc) == expected


def test_export_collections_cabecera_y_filas() -> None:
    image = CollectionImage(src="https://cdn.shopify.com/verano.png", width=100, height=100)
    collections = [make_collection(1, "Verano", image=image), make_collection(2, "Invierno")]

    rows = _rows(export_collections_csv(collections, format_datetime=_utc))

    assert rows[0] == list(COLLECTION_HEADERS)
    assert rows[1] == ["1", "Verano", "verano", "web", "Jan 15, 2024 at 10:30:00 AM", "https://cdn.shopify.com/verano.png"]
    assert rows[2][-1] == ""
    assert len(rows) == 3


def test_export_collections_vacio_solo_cabecera() -> None:
    assert export_collections_csv([]) == "ID,Title,Handle,Published Scope,Last Updated,Image URL\n"


def test_export_citas_comas_y_comillas() -> None:
    collection = make_collection(5, 'Camisetas, "edición" limitada')

    text = export_collections_csv([collection], format_datetime=_utc)

    assert '"Camisetas, ""edición"" limitada"' in text
    assert _rows(text)[1][1] == 'Camisetas, "edición" limitada'


def test_export_products_columnas() -> None:
    publicado = make_product(
        10,
        prices=("10.00", "24.50"),
        published_at=datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc),
    )
    borrador = make_product(11, prices=(), status="draft")

    rows = _rows(export_products_csv([publicado, borrador], format_datetime=_utc))

    assert rows[0] == list(PRODUCT_HEADERS)
    assert rows[1] == [
        "10",
        "Producto 10",
        "producto-10",
        "ACME",
        "Camisetas",
        "active",
        "Jan 10, 2024 at 8:00:00 AM",
        "2",
        "$10.00 - $24.50",
    ]
    assert rows[2][6] == NOT_PUBLISHED
    assert rows[2][7] == "0"
    assert rows[2][8] == ""


def test_write_csv_escribe_en_utf8(tmp_path) -> None:
    destino = tmp_path / "shopify_products.csv"

    resultado = write_csv(destino, "ID,Title\n1,Año\n")

    assert resultado == destino
    assert destino.read_text(encoding="utf-8") == "ID,Title\n1,Año\n"
    assert not (tmp_path / "shopify_products.csv.tmp").exists()


def test_write_csv_sobrescribe_fichero_existente(tmp_path) -> None:
    destino = tmp_path / "export.csv"
    destino.write_text("viejo", encoding="utf-8")

    write_csv(destino, "nuevo\n")

    assert destino.read_text(encoding="utf-8") == "nuevo\n"


def test_write_csv_directorio_inexistente_lanza_export_error(tmp_path) -> None:
    destino = tmp_path / "no-existe" / "export.csv"

    with pytest.raises(ExportError) as exc_info:
        write_csv(destino, "ID\n")

    assert exc_info.value.user_message.startswith("Failed to save CSV: ")
    assert not destino.exists()
