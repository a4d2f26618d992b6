"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from tohome.core.config import (
    EnvironmentMode,
    Settings,
    StorageBackend,
    get_logger,
    get_settings,
    setup_logging,
)
from tohome.core.exceptions import (
    CartError,
    CartNotHydratedError,
    CartStorageError,
    CorruptSnapshotError,
    InvalidQuantityError,
    OptionSelectionError,
    ToHomeError,
)

__all__ = [
    "get_settings",
    "get_logger",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "StorageBackend",
    "ToHomeError",
    "CartError",
    "CartNotHydratedError",
    "CartStorageError",
    "CorruptSnapshotError",
    "InvalidQuantityError",
    "OptionSelectionError",
]
