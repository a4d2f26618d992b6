"""
Cart Storage Tests
"""
import os

import pytest
from filelock import FileLock

from tohome.core.config import get_settings
from tohome.core.exceptions import CartStorageError, CorruptSnapshotError
from tohome.services.cart import (
    FileCartStorage,
    MemoryCartStorage,
    get_cart_storage,
    reset_cart_storage,
)


@pytest.fixture
def file_storage(tmp_path):
    return FileCartStorage(directory=tmp_path / "carts", lock_timeout=0)


def test_file_storage_round_trip(file_storage):
    assert file_storage.load("tohome_cart") is None
    file_storage.save("tohome_cart", '{"a": 1}')
    assert file_storage.load("tohome_cart") == '{"a": 1}'
    file_storage.save("tohome_cart", '{"a": 2}')
    assert file_storage.load("tohome_cart") == '{"a": 2}'


def test_file_storage_delete(file_storage):
    file_storage.save("tohome_cart", "{}")
    file_storage.delete("tohome_cart")
    assert file_storage.load("tohome_cart") is None
    file_storage.delete("tohome_cart")


def test_file_storage_leaves_no_temp_files(file_storage):
    file_storage.save("tohome_cart", "{}")
    leftovers = [name for name in os.listdir(file_storage.directory) if name.endswith(".tmp")]
    assert leftovers == []


def test_failed_replace_keeps_previous_snapshot(file_storage, monkeypatch):
    file_storage.save("tohome_cart", "old")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(CartStorageError):
        file_storage.save("tohome_cart", "new")

    assert file_storage.load("tohome_cart") == "old"
    leftovers = [name for name in os.listdir(file_storage.directory) if name.endswith(".tmp")]
    assert leftovers == []


def test_lock_timeout_raises_storage_error(file_storage):
    file_storage.save("tohome_cart", "old")
    lock = FileLock(str(file_storage.directory / "tohome_cart.json.lock"))
    with lock:
        with pytest.raises(CartStorageError):
            file_storage.save("tohome_cart", "new")
    assert file_storage.load("tohome_cart") == "old"


def test_unsafe_key_is_rejected(file_storage):
    with pytest.raises(ValueError):
        file_storage.save("../escape", "{}")


def test_file_storage_health_check(file_storage):
    assert file_storage.health_check() is True


def test_memory_storage_simulated_failure():
    storage = MemoryCartStorage({"k": "v"}, fail_writes=True)
    with pytest.raises(CartStorageError):
        storage.save("k", "w")
    with pytest.raises(CartStorageError):
        storage.delete("k")
    assert storage.load("k") == "v"
    assert storage.health_check() is False


def test_factory_defaults_to_memory_in_development():
    assert get_cart_storage().provider_name == "memory"
    assert get_cart_storage() is get_cart_storage()


def test_factory_uses_file_in_production(monkeypatch, tmp_path):
    monkeypatch.setenv("ENV_MODE", "production")
    get_settings.cache_clear()
    reset_cart_storage()

    storage = get_cart_storage()

    assert storage.provider_name == "file"
    assert storage.directory == tmp_path / "data"


def test_explicit_backend_overrides_env_mode(monkeypatch):
    monkeypatch.setenv("ENV_MODE", "production")
    monkeypatch.setenv("CART_STORAGE_BACKEND", "memory")
    get_settings.cache_clear()
    reset_cart_storage()
    assert get_cart_storage().provider_name == "memory"


def test_invalid_utf8_snapshot_raises_corrupt_error(file_storage):
    file_storage.directory.mkdir(parents=True)
    (file_storage.directory / "tohome_cart.json").write_bytes(b'{"restaurant_id": "\xff\xfe"}')

    with pytest.raises(CorruptSnapshotError):
        file_storage.load("tohome_cart")


def test_unreadable_snapshot_raises_storage_error(file_storage):
    (file_storage.directory / "tohome_cart.json").mkdir(parents=True)

    with pytest.raises(CartStorageError):
        file_storage.load("tohome_cart")
