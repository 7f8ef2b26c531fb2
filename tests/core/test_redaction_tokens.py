from __future__ import annotations

import logging

from shopify_sync.core.redaction import LoggingSecretsFilter, redact_text, redact_token


def test_redact_text_oculta_tokens_shopify() -> None:
    text = "usando shpat_abc123DEF para demo-store"

    assert redact_text(text) == "usando <REDACTED> para demo-store"


def test_redact_text_oculta_pares_clave_valor() -> None:
    redacted = redact_text('{"access_token": "secreto", "shop_domain": "demo"}')

    assert "secreto" not in redacted
    assert '"shop_domain": "demo"' in redacted


def test_redact_token_muestra_solo_los_ultimos_cuatro() -> None:
    assert redact_token("shpat_123456789") == "****6789"
    assert redact_token("abc") == "****"
    assert redact_token("") == ""


def test_logging_filter_redacta_mensaje_y_argumentos() -> None:
    record = logging.LogRecord(
        name="tests",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="token=%s",
        args=("shpat_zzz999",),
        exc_info=None,
    )

    assert LoggingSecretsFilter().filter(record) is True
    assert "shpat_zzz999" not in record.getMessage()
