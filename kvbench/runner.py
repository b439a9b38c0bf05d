"""Benchmark runner -- replays one workload against each backend in turn.

Each backend goes through open, write, read, delete and close strictly in
sequence, and one backend is closed before the next is opened. A failing
operation ends its phase early; the truncated phase is still timed and
reported, and the run carries on with the next phase.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Callable, Sequence, TextIO

from .backends.base import BackendAdapter, BackendError, OpenError, ReadError
from .config import BenchmarkConfig
from .timer import Phase, PhaseResult, time_phase
from .workload import KeyValuePair


class RunState(Enum):
    IDLE = 0
    OPENED = 1
    WRITE_DONE = 2
    READ_DONE = 3
    DELETE_DONE = 4
    CLOSED = 5


_PHASE_STATES = {
    Phase.WRITE: (RunState.OPENED, RunState.WRITE_DONE),
    Phase.READ: (RunState.WRITE_DONE, RunState.READ_DONE),
    Phase.DELETE: (RunState.READ_DONE, RunState.DELETE_DONE),
}


class BenchmarkRunner:
    """Runs the write/read/delete phases for every backend and prints the timings."""

    def __init__(
        self,
        config: BenchmarkConfig,
        backends: Sequence[BackendAdapter],
        *,
        out: TextIO | None = None,
        err: TextIO | None = None,
        verify: bool = False,
    ) -> None:
        locations = [b.location_name for b in backends]
        if len(set(locations)) != len(locations):
            raise ValueError(f"backend storage locations must be distinct: {locations}")
        self.config = config
        self.backends = list(backends)
        self.verify = verify
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr
        self.state = RunState.IDLE
        self._expected: dict[bytes, bytes] | None = None
        self._delete_plan: tuple[tuple[KeyValuePair, bool], ...] = ()

    # ---- Report sink ------------------------------------------------------

    def _emit(self, line: str = "") -> None:
        self._out.write(line + "\n")
        self._out.flush()

    def _report_error(self, line: str) -> None:
        self._err.write(line + "\n")
        self._err.flush()

    # ---- State machine ----------------------------------------------------

    def _advance(self, expected: RunState, new: RunState) -> None:
        if self.state is not expected:
            raise RuntimeError(f"cannot move to {new.name} from {self.state.name}")
        self.state = new

    # ---- Run --------------------------------------------------------------

    def run(self, pairs: Sequence[KeyValuePair]) -> list[PhaseResult]:
        results: list[PhaseResult] = []
        for backend in self.backends:
            results.extend(self.run_backend(backend, pairs))
        return results

    def run_backend(
        self, backend: BackendAdapter, pairs: Sequence[KeyValuePair],
    ) -> list[PhaseResult]:
        self.state = RunState.IDLE
        location = self.config.workdir / backend.location_name
        self._emit(f"Running {backend.name} benchmark...")

        results: list[PhaseResult] = []
        handle = None
        # Built outside the timed phases. Repeated keys hold their last value.
        self._expected = {p.key: p.value for p in pairs} if self.verify else None
        self._delete_plan = _delete_plan(pairs)
        try:
            try:
                # Leftovers from an interrupted earlier invocation.
                try:
                    backend.cleanup(location)
                except OSError as e:
                    raise OpenError(str(e)) from e
                backend.size_hint(self.config.nops, self.config.lkv)
                handle = backend.open(location)
            except OpenError as e:
                self._report_error(f"{backend.name} open failed: {e}")
                return results
            self._advance(RunState.IDLE, RunState.OPENED)

            for phase, loop in (
                (Phase.WRITE, self._write_loop),
                (Phase.READ, self._read_loop),
                (Phase.DELETE, self._delete_loop),
            ):
                result = time_phase(
                    backend.name, phase, lambda: loop(backend, handle, pairs),
                )
                if result.error is not None:
                    self._report_error(result.error)
                self._emit(result.render())
                results.append(result)
                self._advance(*_PHASE_STATES[phase])
        finally:
            try:
                backend.close(handle, location)
            except (BackendError, OSError) as e:
                self._report_error(f"{backend.name} close failed: {e}")
            self.state = RunState.CLOSED
            self._emit()
        return results

    # ---- Phase loops ------------------------------------------------------

    @staticmethod
    def _run_ops(
        backend: BackendAdapter,
        items: Sequence[Any],
        op: Callable[[Any], Any],
    ) -> tuple[int, str | None]:
        completed = 0
        for item in items:
            try:
                op(item)
            except BackendError as e:
                return completed, f"{backend.name} {e.verb} failed: {e}"
            completed += 1
        return completed, None

    def _write_loop(self, backend, handle, pairs):
        return self._run_ops(backend, pairs, lambda p: backend.put(handle, p.key, p.value))

    def _read_loop(self, backend, handle, pairs):
        expected = self._expected
        if expected is None:
            return self._run_ops(backend, pairs, lambda p: backend.get(handle, p.key))

        def _get_and_compare(pair: KeyValuePair) -> None:
            value = backend.get(handle, pair.key)
            if value != expected[pair.key]:
                raise ReadError(f"value mismatch for key {pair.key!r}")

        return self._run_ops(backend, pairs, _get_and_compare)

    def _delete_loop(self, backend, handle, pairs):
        def _delete(step: tuple[KeyValuePair, bool]) -> None:
            pair, already_deleted = step
            if not already_deleted:
                backend.delete(handle, pair.key)

        return self._run_ops(backend, self._delete_plan, _delete)


def _delete_plan(pairs: Sequence[KeyValuePair]) -> tuple[tuple[KeyValuePair, bool], ...]:
    """Pair each entry with whether an earlier entry already deletes its key.

    Repeated keys are deleted once and their later occurrences count as done,
    so every engine runs the same number of real deletes.
    """
    seen: set[bytes] = set()
    plan = []
    for pair in pairs:
        plan.append((pair, pair.key in seen))
        seen.add(pair.key)
    return tuple(plan)
