from __future__ import annotations

import requests

from shopify_sync.domain.catalog_errors import CatalogError, ShopifyConnectionError


def _describe_transport_failure(ex: requests.exceptions.RequestException) -> str:
    if isinstance(ex, requests.exceptions.SSLError):
        return "TLS handshake failed"
    if isinstance(ex, requests.exceptions.Timeout):
        return "the request timed out"
    if isinstance(ex, requests.exceptions.ConnectionError):
        return "could not reach the shop"
    if isinstance(ex, (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema)):
        return "invalid shop URL"
    return ex.__class__.__name__


def map_requests_exception(ex: Exception) -> CatalogError:
    if isinstance(ex, CatalogError):
        return ex
    if isinstance(ex, requests.exceptions.RequestException):
        return ShopifyConnectionError(_describe_transport_failure(ex))
    return ShopifyConnectionError(str(ex))
