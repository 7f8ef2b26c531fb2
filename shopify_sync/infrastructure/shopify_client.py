from __future__ import annotations

import logging
from typing import Mapping

import requests

from shopify_sync.bootstrap.settings import DEFAULT_API_VERSION, DEFAULT_TIMEOUT_SECONDS
from shopify_sync.domain.models import Credentials
from shopify_sync.domain.ports import HttpResponse, ShopifyHttpPort
from shopify_sync.domain.shop_domain import normalize_shop_domain
from shopify_sync.infrastructure.shopify_errors import map_requests_exception

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


def build_base_url(shop_domain: str, api_version: str = DEFAULT_API_VERSION) -> str:
    return f"https://{normalize_shop_domain(shop_domain)}/admin/api/{api_version}"


class ShopifyClient(ShopifyHttpPort):
    """Cliente REST mínimo: una petición GET por llamada, sin reintentos.

    El status HTTP se devuelve tal cual; la clasificación de errores la hace
    el orquestador. Solo los fallos de transporte se traducen aquí.
    """

    def __init__(
        self,
        *,
        api_version: str = DEFAULT_API_VERSION,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._api_version = api_version
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    @property
    def api_version(self) -> str:
        return self._api_version

    def resource_url(self, credentials: Credentials, resource: str) -> str:
        return f"{build_base_url(credentials.shop_domain, self._api_version)}/{resource}.json"

    def get(
        self,
        credentials: Credentials,
        resource: str,
        params: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        url = self.resource_url(credentials, resource)
        headers = {
            ACCESS_TOKEN_HEADER: credentials.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        logger.info("GET %s params=%s", url, dict(params or {}))
        try:
            response = self._session.get(
                url,
                headers=headers,
                params=dict(params) if params else None,
                timeout=self._timeout_seconds,
            )
        except requests.exceptions.RequestException as exc:
            mapped = map_requests_exception(exc)
            logger.warning("Fallo de transporte en GET %s: %s", url, mapped)
            raise mapped from exc
        logger.info("GET %s -> %s (%s bytes)", url, response.status_code, len(response.content))
        return HttpResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        self._session.close()
