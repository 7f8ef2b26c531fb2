from __future__ import annotations

from shopify_sync.bootstrap.settings import (
    DEFAULT_API_VERSION,
    DEFAULT_TIMEOUT_SECONDS,
    AppSettings,
    resolve_log_dir,
)


def test_defaults_sin_variables(monkeypatch) -> None:
    monkeypatch.delenv("SHOPIFY_SYNC_API_VERSION", raising=False)
    monkeypatch.delenv("SHOPIFY_SYNC_TIMEOUT_SECONDS", raising=False)

    settings = AppSettings.from_env()

    assert settings.api_version == DEFAULT_API_VERSION == "2024-01"
    assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS


def test_variables_de_entorno_sobrescriben(monkeypatch) -> None:
    monkeypatch.setenv("SHOPIFY_SYNC_API_VERSION", "2024-04")
    monkeypatch.setenv("SHOPIFY_SYNC_TIMEOUT_SECONDS", "12.5")

    settings = AppSettings.from_env()

    assert settings.api_version == "2024-04"
    assert settings.timeout_seconds == 12.5


def test_timeout_invalido_vuelve_al_defecto(monkeypatch) -> None:
    monkeypatch.setenv("SHOPIFY_SYNC_TIMEOUT_SECONDS", "no-numero")
    assert AppSettings.from_env().timeout_seconds == DEFAULT_TIMEOUT_SECONDS

    monkeypatch.setenv("SHOPIFY_SYNC_TIMEOUT_SECONDS", "-3")
    assert AppSettings.from_env().timeout_seconds == DEFAULT_TIMEOUT_SECONDS


def test_resolve_log_dir_prefiere_variable_de_entorno(monkeypatch, tmp_path) -> None:
    target = tmp_path / "mis-logs"
    monkeypatch.setenv("SHOPIFY_SYNC_LOG_DIR", str(target))

    assert resolve_log_dir() == target
    assert target.is_dir()
