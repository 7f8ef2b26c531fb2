from __future__ import annotations

from shopify_sync.domain.ports import CredentialsStorePort
from shopify_sync.infrastructure.local_config import CredentialsFileStore


class LocalCredentialsStore(CredentialsFileStore, CredentialsStorePort):
    """Adaptador nominal para inyección por puerto."""
