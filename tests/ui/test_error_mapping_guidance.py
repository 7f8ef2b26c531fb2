from __future__ import annotations

import pytest

from shopify_sync.core.errors import BusinessError
from shopify_sync.domain.catalog_errors import (
    CredentialsPersistenceError,
    NotConnectedError,
    ShopifyAuthError,
    ShopifyUnexpectedStatusError,
)
from shopify_sync.ui.error_mapping import map_error_to_ui_message

pytestmark = pytest.mark.headless_safe


def test_error_de_autenticacion_lleva_guia() -> None:
    mapped = map_error_to_ui_message(ShopifyAuthError(), incident_id="INC-000000000001")

    assert mapped.title == "Authentication failed. Please check your access token."
    assert mapped.severity == "blocking"
    assert "Settings" in mapped.recommended_action
    assert mapped.as_text().endswith("Incident ID: INC-000000000001")


@pytest.mark.parametrize("error", [NotConnectedError(), CredentialsPersistenceError()])
def test_errores_recuperables_son_warning(error: Exception) -> None:
    assert map_error_to_ui_message(error).severity == "warning"


def test_status_inesperado_conserva_el_codigo() -> None:
    text = map_error_to_ui_message(ShopifyUnexpectedStatusError(503)).as_text()

    assert text.startswith("Unexpected error (Status 503)\n")
    assert "Probable cause:" in text
    assert "Recommended action:" in text


def test_error_de_negocio_generico() -> None:
    mapped = map_error_to_ui_message(BusinessError("Regla incumplida"))

    assert mapped.title == "Regla incumplida"
    assert mapped.severity == "warning"


def test_excepcion_desconocida_no_expone_detalles() -> None:
    mapped = map_error_to_ui_message(KeyError("interno"))

    assert mapped.title == "An unexpected error occurred."
    assert "interno" not in mapped.as_text()
