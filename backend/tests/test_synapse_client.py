import threading
import time

import pytest

from app.core.config import settings
from app.core.storage_errors import StorageError, StorageErrorCode
from app.services.storage.synapse_client import SynapseClientProvider, build_synapse_client
from conftest import FakeSynapseClient


def test_client_is_built_lazily_and_reused():
    calls = []

    def factory():
        calls.append(1)
        return FakeSynapseClient()

    provider = SynapseClientProvider(factory=factory)
    assert not provider.initialized
    assert calls == []

    first = provider.get()
    assert provider.get() is first
    assert provider.initialized
    assert len(calls) == 1


def test_reset_forces_a_new_client():
    provider = SynapseClientProvider(factory=FakeSynapseClient)
    first = provider.get()

    provider.reset()
    assert not provider.initialized
    assert provider.get() is not first


def test_concurrent_first_use_builds_once():
    calls = []

    def slow_factory():
        calls.append(1)
        time.sleep(0.05)
        return FakeSynapseClient()

    provider = SynapseClientProvider(factory=slow_factory)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(provider.get())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(c is results[0] for c in results)


def test_failed_construction_is_not_cached():
    attempts = []

    def flaky():
        attempts.append(1)
        if len(attempts) == 1:
            raise StorageError(code=StorageErrorCode.NETWORK_ERROR, technical_message="rpc down")
        return FakeSynapseClient()

    provider = SynapseClientProvider(factory=flaky)
    with pytest.raises(StorageError):
        provider.get()
    assert not provider.initialized
    assert provider.get() is not None


def test_is_connected_never_raises():
    def broken():
        raise RuntimeError("boom")

    assert SynapseClientProvider(factory=broken).is_connected() is False
    assert SynapseClientProvider(factory=FakeSynapseClient).is_connected() is True


def test_missing_private_key(monkeypatch):
    monkeypatch.setattr(settings, "BACKEND_PRIVATE_KEY", None)
    monkeypatch.setattr(settings, "SYNAPSE_CLIENT_FACTORY", "types:SimpleNamespace")

    with pytest.raises(StorageError) as exc_info:
        build_synapse_client()
    assert exc_info.value.code == StorageErrorCode.CLIENT_NOT_CONFIGURED
    assert "BACKEND_PRIVATE_KEY" in exc_info.value.technical_message


def test_missing_factory_setting(monkeypatch):
    monkeypatch.setattr(settings, "BACKEND_PRIVATE_KEY", "0xabc")
    monkeypatch.setattr(settings, "SYNAPSE_CLIENT_FACTORY", None)

    with pytest.raises(StorageError) as exc_info:
        build_synapse_client()
    assert exc_info.value.code == StorageErrorCode.CLIENT_NOT_CONFIGURED


@pytest.mark.parametrize(
    "path",
    ["no_colon_here", "definitely_not_a_module_xyz:make", "types:NoSuchThing", "math:pi"],
)
def test_unusable_factory_path(monkeypatch, path):
    monkeypatch.setattr(settings, "BACKEND_PRIVATE_KEY", "0xabc")
    monkeypatch.setattr(settings, "SYNAPSE_CLIENT_FACTORY", path)

    with pytest.raises(StorageError) as exc_info:
        build_synapse_client()
    assert exc_info.value.code == StorageErrorCode.CLIENT_NOT_CONFIGURED


def test_factory_receives_key_and_rpc_url(monkeypatch):
    monkeypatch.setattr(settings, "BACKEND_PRIVATE_KEY", "0xabc")
    monkeypatch.setattr(settings, "FILECOIN_RPC_URL", "https://rpc.example/v1")
    monkeypatch.setattr(settings, "SYNAPSE_CLIENT_FACTORY", "types:SimpleNamespace")

    client = build_synapse_client()
    assert client.private_key == "0xabc"
    assert client.rpc_url == "https://rpc.example/v1"
