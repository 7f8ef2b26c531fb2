from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Protocol, TypeVar

from shopify_sync.domain.models import Credentials

T = TypeVar("T")


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class CredentialsStorePort(Protocol):
    def load(self) -> Credentials | None:
        ...

    def save(self, credentials: Credentials) -> Credentials:
        ...


class ShopifyHttpPort(Protocol):
    def get(
        self,
        credentials: Credentials,
        resource: str,
        params: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        """Una petición autenticada; lanza ShopifyConnectionError en fallos de transporte."""
        ...


class TaskRunnerPort(Protocol):
    def submit(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        """Ejecuta ``work`` fuera del hilo de observación.

        Los callbacks se entregan siempre en el hilo de observación y nunca
        antes de que ``submit`` haya retornado.
        """
        ...
