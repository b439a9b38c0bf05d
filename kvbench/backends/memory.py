"""In-process dict backend, for dry runs and harness tests."""

from __future__ import annotations

from pathlib import Path

from .base import BackendAdapter, DeleteError, ReadError


class MemoryBackend(BackendAdapter):
    name = "Memory"
    location_name = "memory_bench"

    def __init__(self) -> None:
        # Last handle opened, kept so tests can inspect what was left behind.
        self.last_store: dict[bytes, bytes] | None = None

    def open(self, location: Path) -> dict[bytes, bytes]:
        self.last_store = {}
        return self.last_store

    def put(self, handle: dict[bytes, bytes], key: bytes, value: bytes) -> None:
        handle[key] = value

    def get(self, handle: dict[bytes, bytes], key: bytes) -> bytes:
        try:
            return handle[key]
        except KeyError:
            raise ReadError(f"key not found: {key!r}") from None

    def delete(self, handle: dict[bytes, bytes], key: bytes) -> None:
        try:
            del handle[key]
        except KeyError:
            raise DeleteError(f"key not found: {key!r}") from None

    def _release(self, handle: dict[bytes, bytes]) -> None:
        pass
