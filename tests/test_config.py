"""
Configuration Tests
"""
import pytest
from pydantic import ValidationError

from tohome.core.config import (
    EnvironmentMode,
    Settings,
    StorageBackend,
    get_settings,
)


def test_defaults():
    settings = get_settings()
    assert settings.env_mode == EnvironmentMode.DEVELOPMENT
    assert settings.timezone == "Europe/Rome"
    assert settings.cart_storage_key == "tohome_cart"
    assert settings.effective_storage_backend == StorageBackend.MEMORY


def test_env_mode_is_case_insensitive(monkeypatch):
    monkeypatch.setenv("ENV_MODE", "PRODUCTION")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.is_production
    assert settings.effective_storage_backend == StorageBackend.FILE


def test_invalid_env_mode():
    with pytest.raises(ValidationError):
        Settings(env_mode="chaos")


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError):
        Settings(timezone="Mars/Olympus_Mons")


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_setup_logging_returns_package_logger(monkeypatch):
    import logging

    from tohome.core.config import get_logger, setup_logging

    monkeypatch.setenv("DEBUG", "true")
    get_settings.cache_clear()
    logger = setup_logging()
    assert logger.name == "tohome"
    assert get_logger("tohome.services.cart").name == "tohome.services.cart"
    assert logging.getLogger("filelock").level == logging.WARNING
