"""Backend registry -- lazy imports so a missing engine binding doesn't crash the CLI."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BackendAdapter


def get_backends() -> list[BackendAdapter]:
    """Return the default backends in run order, skipping those with missing bindings."""
    backends: list[BackendAdapter] = []

    def _try_register(module: str, cls_name: str) -> None:
        try:
            mod = __import__(module, fromlist=[cls_name])
            backends.append(getattr(mod, cls_name)())
        except ImportError as e:
            # Only stay quiet if the missing module is an engine binding.
            # Internal import errors (typo, broken code) get a warning.
            missing = getattr(e, "name", None)
            expected_missing = {"lmdb", "rocksdict"}
            if missing and missing.split(".")[0] in expected_missing:
                print(f"Skipping {cls_name}: {missing} is not installed", file=sys.stderr)
            else:
                print(f"Warning: failed to load {cls_name}: {e}", file=sys.stderr)

    _try_register("kvbench.backends.lmdb_backend", "LmdbBackend")
    _try_register("kvbench.backends.rocksdb", "RocksDbBackend")
    _try_register("kvbench.backends.sqlite", "SqliteBackend")

    return backends
