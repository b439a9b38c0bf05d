"""Default parameters and the immutable run configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# Number of put/get/delete operations per phase.
DEFAULT_OPERATION_COUNT = 1000

# Length of the random alphanumeric suffix of every key and value.
DEFAULT_KV_LENGTH = 32

# Keys and values start with a decimal number drawn from [0, KEY_PREFIX_RANGE).
KEY_PREFIX_RANGE = 1_000_000


class ConfigError(ValueError):
    """Invalid benchmark configuration."""


@dataclass(frozen=True)
class BenchmarkConfig:
    nops: int = DEFAULT_OPERATION_COUNT
    lkv: int = DEFAULT_KV_LENGTH
    # Parent directory for the per-backend storage locations.
    workdir: Path = field(default_factory=Path)

    def __post_init__(self) -> None:
        for name in ("nops", "lkv"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        object.__setattr__(self, "workdir", Path(self.workdir))
