"""LMDB backend via the py-lmdb binding."""

from __future__ import annotations

from pathlib import Path

import lmdb

from .base import BackendAdapter, DeleteError, OpenError, ReadError, WriteError

# Minimum map size, 10 MiB. Grown by size_hint for larger workloads.
LMDB_MAP_SIZE = 10 * 1024 * 1024

# Per-pair estimate: key and value of up to lkv + 7 bytes each.
PAIR_OVERHEAD = 14
# B-tree pages are not full after random inserts; also covers node headers.
MAP_HEADROOM = 4
PAGE_SIZE = 4096


class LmdbBackend(BackendAdapter):
    """One write transaction per put/delete; every commit is synced to disk."""

    name = "LMDB"
    location_name = "lmdb_bench"

    def __init__(self, map_size: int = LMDB_MAP_SIZE) -> None:
        self.map_size = map_size

    def size_hint(self, nops: int, lkv: int) -> None:
        needed = nops * (2 * lkv + PAIR_OVERHEAD) * MAP_HEADROOM
        needed = -(-needed // PAGE_SIZE) * PAGE_SIZE
        self.map_size = max(self.map_size, needed)

    def open(self, location: Path) -> lmdb.Environment:
        try:
            return lmdb.open(
                str(location),
                map_size=self.map_size,
                subdir=True,
                sync=True,
                metasync=True,
                mode=0o755,
            )
        except lmdb.Error as e:
            raise OpenError(str(e)) from e

    def put(self, handle: lmdb.Environment, key: bytes, value: bytes) -> None:
        try:
            with handle.begin(write=True) as txn:
                txn.put(key, value)
        except lmdb.Error as e:
            raise WriteError(str(e)) from e

    def get(self, handle: lmdb.Environment, key: bytes) -> bytes:
        try:
            with handle.begin() as txn:
                value = txn.get(key)
        except lmdb.Error as e:
            raise ReadError(str(e)) from e
        if value is None:
            raise ReadError(f"key not found: {key!r}")
        return value

    def delete(self, handle: lmdb.Environment, key: bytes) -> None:
        try:
            with handle.begin(write=True) as txn:
                found = txn.delete(key)
        except lmdb.Error as e:
            raise DeleteError(str(e)) from e
        if not found:
            raise DeleteError(f"key not found: {key!r}")

    def _release(self, handle: lmdb.Environment) -> None:
        handle.close()
