"""RocksDB backend via the rocksdict binding."""

from __future__ import annotations

from pathlib import Path

from rocksdict import Options, Rdict, WriteOptions

from .base import BackendAdapter, DeleteError, OpenError, ReadError, WriteError


class RocksDbBackend(BackendAdapter):
    """fsync'd WAL and synchronous writes, matching the other engines."""

    name = "RocksDB"
    location_name = "rocksdb_bench"

    def open(self, location: Path) -> Rdict:
        # rocksdict raises plain Exception for engine errors.
        try:
            opts = Options(raw_mode=True)
            opts.create_if_missing(True)
            opts.set_use_fsync(True)
            db = Rdict(str(location), options=opts)
            write_opts = WriteOptions()
            write_opts.sync = True
            db.set_write_options(write_opts)
        except Exception as e:
            raise OpenError(str(e)) from e
        return db

    def put(self, handle: Rdict, key: bytes, value: bytes) -> None:
        try:
            handle.put(key, value)
        except Exception as e:
            raise WriteError(str(e)) from e

    def get(self, handle: Rdict, key: bytes) -> bytes:
        try:
            value = handle.get(key)
        except Exception as e:
            raise ReadError(str(e)) from e
        if value is None:
            raise ReadError(f"key not found: {key!r}")
        return value

    def delete(self, handle: Rdict, key: bytes) -> None:
        # Deletes are blind tombstone writes; RocksDB never reports absence.
        try:
            handle.delete(key)
        except Exception as e:
            raise DeleteError(str(e)) from e

    def _release(self, handle: Rdict) -> None:
        handle.close()
