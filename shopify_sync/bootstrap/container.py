from __future__ import annotations

from dataclasses import dataclass

from shopify_sync.application.settings_service import SettingsService
from shopify_sync.application.sync_orchestrator import SyncOrchestrator
from shopify_sync.bootstrap.settings import AppSettings
from shopify_sync.domain.ports import CredentialsStorePort, ShopifyHttpPort, TaskRunnerPort
from shopify_sync.infrastructure.local_config_store import LocalCredentialsStore
from shopify_sync.infrastructure.shopify_client import ShopifyClient


@dataclass
class AppContainer:
    settings: AppSettings
    credentials_store: CredentialsStorePort
    http_client: ShopifyHttpPort
    task_runner: TaskRunnerPort
    orchestrator: SyncOrchestrator
    settings_service: SettingsService

    def close(self) -> None:
        if isinstance(self.http_client, ShopifyClient):
            self.http_client.close()


def build_container(
    task_runner: TaskRunnerPort,
    *,
    settings: AppSettings | None = None,
    credentials_store: CredentialsStorePort | None = None,
    http_client: ShopifyHttpPort | None = None,
) -> AppContainer:
    resolved_settings = settings or AppSettings.from_env()
    store = credentials_store or LocalCredentialsStore()
    client = http_client or ShopifyClient(
        api_version=resolved_settings.api_version,
        timeout_seconds=resolved_settings.timeout_seconds,
    )
    orchestrator = SyncOrchestrator(store, client, task_runner)
    settings_service = SettingsService(store, orchestrator)
    return AppContainer(
        settings=resolved_settings,
        credentials_store=store,
        http_client=client,
        task_runner=task_runner,
        orchestrator=orchestrator,
        settings_service=settings_service,
    )
