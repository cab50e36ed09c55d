"""
synapse_client.py
- Purpose: Owns the Synapse SDK client used for Filecoin storage.
- Lifecycle: built on first use, reused afterwards, reset() for tests and
  reconfiguration. Construction is serialized so concurrent first callers
  share one client.
- The SDK is located through settings.SYNAPSE_CLIENT_FACTORY
  ("package.module:attr.path"), imported lazily so a missing dependency
  surfaces as STORAGE_CLIENT_NOT_CONFIGURED instead of an import failure.
"""

from __future__ import annotations

import importlib
import logging
import threading
from typing import Any, Callable, Optional

from app.core.config import settings
from app.core.storage_errors import client_not_configured_error
from app.services.storage.types import SynapseClient

logger = logging.getLogger("app.storage.synapse")

ClientFactory = Callable[[], SynapseClient]


def _resolve_factory(path: str) -> Callable[..., Any]:
    module_name, _, attr_path = path.partition(":")
    if not module_name or not attr_path:
        raise client_not_configured_error(
            f"SYNAPSE_CLIENT_FACTORY must look like 'module:callable', got {path!r}"
        )

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise client_not_configured_error(f"Synapse SDK module {module_name!r} failed to import") from e

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise client_not_configured_error(f"Synapse SDK factory {path!r} not found") from e

    if not callable(target):
        raise client_not_configured_error(f"Synapse SDK factory {path!r} is not callable")
    return target


def build_synapse_client() -> SynapseClient:
    """Default factory: build a client from application settings."""
    if not settings.BACKEND_PRIVATE_KEY:
        raise client_not_configured_error("BACKEND_PRIVATE_KEY not set in environment")
    if not settings.SYNAPSE_CLIENT_FACTORY:
        raise client_not_configured_error("SYNAPSE_CLIENT_FACTORY not set in environment")

    factory = _resolve_factory(settings.SYNAPSE_CLIENT_FACTORY)
    client = factory(private_key=settings.BACKEND_PRIVATE_KEY, rpc_url=settings.FILECOIN_RPC_URL)

    logger.info(
        "synapse.client_initialized",
        extra={"network": settings.FILECOIN_NETWORK, "rpc_url": settings.FILECOIN_RPC_URL},
    )
    return client


class SynapseClientProvider:
    def __init__(self, factory: Optional[ClientFactory] = None):
        self._factory: ClientFactory = factory or build_synapse_client
        self._client: Optional[SynapseClient] = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._client is not None

    def get(self) -> SynapseClient:
        client = self._client
        if client is not None:
            return client

        with self._lock:
            # Another thread may have finished construction while we waited
            if self._client is None:
                self._client = self._factory()
            return self._client

    def reset(self) -> None:
        with self._lock:
            self._client = None

    def is_connected(self) -> bool:
        """Health probe. Never raises."""
        try:
            client = self.get()
        except Exception:
            logger.warning("synapse.connection_check_failed", exc_info=True)
            return False
        return getattr(client, "storage", None) is not None


default_client_provider = SynapseClientProvider()
