"""Phase timing and human-scaled duration formatting."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable


class Phase(Enum):
    WRITE = "write"
    READ = "read"
    DELETE = "delete"

    @property
    def label(self) -> str:
        return _PHASE_LABELS[self]


_PHASE_LABELS = {
    Phase.WRITE: "Write",
    Phase.READ: "Get",
    Phase.DELETE: "Delete",
}


def format_duration(seconds: float) -> str:
    """Render *seconds* in s, ms or µs depending on magnitude.

    Both thresholds are inclusive: exactly 1.0 is printed in seconds and
    exactly 0.001 in milliseconds.
    """
    if seconds >= 1.0:
        return f"{seconds:.9f}s"
    if seconds >= 0.001:
        return f"{seconds * 1000:.6f}ms"
    return f"{seconds * 1_000_000:.3f}µs"


@dataclass(frozen=True)
class PhaseResult:
    backend: str
    phase: Phase
    elapsed: float          # seconds, perf_counter delta
    completed: int = 0      # operations that succeeded
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        return f"{self.backend} {self.phase.label} benchmark: {format_duration(self.elapsed)}"


def time_phase(
    backend: str,
    phase: Phase,
    operation: Callable[[], tuple[int, str | None]],
) -> PhaseResult:
    """Run *operation* once and measure it with a monotonic clock.

    *operation* returns ``(completed, error)``. A phase that stopped early
    is still timed up to the point where it gave up.
    """
    start = time.perf_counter()
    completed, error = operation()
    elapsed = time.perf_counter() - start
    return PhaseResult(
        backend=backend,
        phase=phase,
        elapsed=elapsed,
        completed=completed,
        error=error,
    )
