"""
File Cart Storage with Concurrency Control

Durable storage writing one JSON file per key under the data directory.
Every write holds a file lock and goes through a temporary file that is
atomically renamed over the target, so an interrupted write leaves the
previous snapshot intact.

Calls block the calling thread, up to lock_timeout while waiting for the
lock. CartStore runs them in a worker thread so the event loop keeps going.

Author: ToHome Team
Version: 1.0.0
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

from filelock import FileLock, Timeout

from tohome.core.config import get_settings
from tohome.core.exceptions import CartStorageError, CorruptSnapshotError
from tohome.services.cart.storage.base import BaseCartStorage

logger = logging.getLogger(__name__)

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileCartStorage(BaseCartStorage):
    """
    Lock-protected JSON file storage.

    Attributes:
        directory: Directory holding <key>.json files
        lock_timeout: Seconds to wait for the per-key file lock
    """

    def __init__(
        self,
        directory: Optional[Union[str, Path]] = None,
        lock_timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.directory = Path(directory if directory is not None else settings.data_directory)
        self.lock_timeout = (
            lock_timeout if lock_timeout is not None else settings.storage_lock_timeout
        )
        logger.info(
            f"FileCartStorage initialized "
            f"(directory={self.directory}, lock_timeout={self.lock_timeout}s)"
        )

    @property
    def provider_name(self) -> str:
        return "file"

    def _ensure_directory(self) -> None:
        if not self.directory.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created data directory: {self.directory}")

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def _lock(self, key: str) -> FileLock:
        return FileLock(str(self._path(key)) + ".lock", timeout=self.lock_timeout)

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            raise CartStorageError(f"Could not read {key!r}: {e}") from e
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Snapshot {path} is not valid UTF-8")
            raise CorruptSnapshotError(f"Snapshot {key!r} is not valid UTF-8: {e}") from e

    def save(self, key: str, payload: str) -> None:
        self._ensure_directory()
        path = self._path(key)
        try:
            with self._lock(key):
                fd, tmp_name = tempfile.mkstemp(
                    dir=str(self.directory), prefix=f".{key}.", suffix=".tmp"
                )
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                        tmp.write(payload)
                        tmp.flush()
                        os.fsync(tmp.fileno())
                    os.replace(tmp_name, path)
                except BaseException:
                    if os.path.exists(tmp_name):
                        os.unlink(tmp_name)
                    raise
            logger.debug(f"Snapshot written to {path}")
        except Timeout:
            logger.error(f"Lock timeout writing {path}")
            raise CartStorageError(f"Lock timeout ({self.lock_timeout}s) for {key!r}")
        except OSError as e:
            logger.exception(f"Error writing {path}")
            raise CartStorageError(f"Could not write {key!r}: {e}") from e

    def delete(self, key: str) -> None:
        path = self._path(key)
        if not path.exists():
            return
        try:
            with self._lock(key):
                path.unlink(missing_ok=True)
            logger.debug(f"Snapshot removed: {path}")
        except Timeout:
            logger.error(f"Lock timeout deleting {path}")
            raise CartStorageError(f"Lock timeout ({self.lock_timeout}s) for {key!r}")
        except OSError as e:
            logger.exception(f"Error deleting {path}")
            raise CartStorageError(f"Could not delete {key!r}: {e}") from e

    def health_check(self) -> bool:
        try:
            self._ensure_directory()
            return os.access(self.directory, os.W_OK)
        except OSError as e:
            logger.error(f"Storage health check failed: {e}")
            return False
