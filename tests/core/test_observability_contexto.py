from __future__ import annotations

import logging

from shopify_sync.core.observability import (
    OperationContext,
    failed_operation_name,
    generate_correlation_id,
    get_correlation_id,
    get_operation_name,
    log_event,
)


def test_operation_context_generates_uuid4_correlation_id() -> None:
    with OperationContext("unit_test") as operation:
        correlation_id = operation.correlation_id
        assert get_correlation_id() == correlation_id

    assert len(correlation_id) == 36
    assert correlation_id.count("-") == 4


def test_operation_context_restaura_el_id_anterior() -> None:
    previo = get_correlation_id()
    with OperationContext("exterior", "cid-exterior"):
        with OperationContext("interior", "cid-interior"):
            assert get_correlation_id() == "cid-interior"
        assert get_correlation_id() == "cid-exterior"
    assert get_correlation_id() == previo


def test_log_event_returns_structured_event_dict() -> None:
    logger = logging.getLogger("tests.observability")

    event = log_event(logger, "catalog_operation_started", {"operation": "fetch_collections"}, "cid-123")

    assert event["event"] == "catalog_operation_started"
    assert event["correlation_id"] == "cid-123"
    assert "timestamp" in event
    assert event["payload"] == {"operation": "fetch_collections"}


def test_generate_correlation_id_is_unique() -> None:
    assert generate_correlation_id() != generate_correlation_id()


def test_excepcion_recuerda_la_operacion_mas_interna() -> None:
    try:
        with OperationContext("fetch_products"):
            with OperationContext("decode_products"):
                assert get_operation_name() == "decode_products"
                raise ValueError("payload roto")
    except ValueError as exc:
        error = exc

    assert get_operation_name() is None
    assert failed_operation_name(error) == "decode_products"


def test_excepcion_fuera_de_operacion_usa_la_activa() -> None:
    error = RuntimeError("fuera")

    assert failed_operation_name(error) is None
    with OperationContext("export_csv"):
        assert failed_operation_name(error) == "export_csv"
