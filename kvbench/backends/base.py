"""Base class and error types for all storage backends."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class BackendError(Exception):
    """Error reported by a storage engine."""

    verb = "operation"


class OpenError(BackendError):
    verb = "open"


class WriteError(BackendError):
    verb = "put"


class ReadError(BackendError):
    verb = "get"


class DeleteError(BackendError):
    verb = "delete"


class BackendAdapter(ABC):
    """Abstract base for all storage backends.

    Each backend opens a store at a location owned by the benchmark, exposes
    put/get/delete against the handle returned by ``open``, and removes every
    on-disk artifact in ``close``. Engine exceptions must be re-raised as the
    matching :class:`BackendError` subclass.
    """

    name: str = ""
    location_name: str = ""

    def size_hint(self, nops: int, lkv: int) -> None:
        """Called before ``open`` with the workload dimensions. Engines that
        preallocate storage override this."""

    @abstractmethod
    def open(self, location: Path) -> Any:
        """Create a fresh store at *location* and return its handle."""

    @abstractmethod
    def put(self, handle: Any, key: bytes, value: bytes) -> None:
        """Durably store *value* under *key*."""

    @abstractmethod
    def get(self, handle: Any, key: bytes) -> bytes:
        """Return the value of *key*. A missing key raises ReadError."""

    @abstractmethod
    def delete(self, handle: Any, key: bytes) -> None:
        """Remove *key*."""

    @abstractmethod
    def _release(self, handle: Any) -> None:
        """Close the engine's resources for *handle*."""

    def close(self, handle: Any, location: Path) -> None:
        """Release *handle* and delete the store, even if releasing fails."""
        try:
            if handle is not None:
                self._release(handle)
        finally:
            self.cleanup(location)

    def cleanup(self, location: Path) -> None:
        location = Path(location)
        if location.is_dir():
            shutil.rmtree(location)
        elif location.exists():
            location.unlink()
