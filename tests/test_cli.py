"""Tests for the kvbench command line."""

from __future__ import annotations

import io
import random
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from kvbench.backends.memory import MemoryBackend
from kvbench.run import build_parser, main


class RecordingBackend(MemoryBackend):
    def __init__(self) -> None:
        super().__init__()
        self.opened = 0

    def open(self, location):
        self.opened += 1
        return super().open(location)


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.workdir = Path(self._tmpdir.name)

    def tearDown(self):
        self._tmpdir.cleanup()

    def _main(self, argv, backend=None):
        backend = backend or RecordingBackend()
        out, err = io.StringIO(), io.StringIO()
        code = 0
        with redirect_stdout(out), redirect_stderr(err):
            try:
                main(argv, backends=[backend], rng=random.Random(0), workdir=self.workdir)
            except SystemExit as e:
                code = e.code
        return code, out.getvalue(), err.getvalue(), backend

    # ---- Invalid arguments --------------------------------------------------

    def test_invalid_nops_exit_1_without_benchmarking(self):
        for bad in ("0", "-5", "abc", "1.5", ""):
            with self.subTest(value=bad):
                code, out, err, backend = self._main(["--nops", bad])
                self.assertEqual(code, 1)
                self.assertIn("--nops", err)
                self.assertIn("invalid value", err)
                self.assertEqual(backend.opened, 0)
                self.assertNotIn("benchmark:", out)

    def test_invalid_lkv(self):
        code, _, err, backend = self._main(["--lkv", "0"])
        self.assertEqual(code, 1)
        self.assertIn("--lkv", err)
        self.assertEqual(backend.opened, 0)

    def test_missing_value(self):
        code, _, err, backend = self._main(["--nops"])
        self.assertEqual(code, 1)
        self.assertIn("expected one argument", err)
        self.assertEqual(backend.opened, 0)

    def test_unknown_argument(self):
        code, _, err, backend = self._main(["--bogus"])
        self.assertEqual(code, 1)
        self.assertIn("--bogus", err)
        self.assertEqual(backend.opened, 0)

    def test_help_exits_0(self):
        code, out, _, backend = self._main(["--help"])
        self.assertEqual(code, 0)
        self.assertIn("--nops", out)
        self.assertIn("--lkv", out)
        self.assertEqual(backend.opened, 0)

    # ---- End to end ---------------------------------------------------------

    def test_end_to_end_memory_backend(self):
        code, out, err, backend = self._main(["--nops", "10", "--lkv", "4"])
        self.assertEqual(code, 0)
        self.assertEqual(err, "")
        self.assertIn("Running benchmarks with 10 operations and key-value length of 4", out)
        result_lines = [line for line in out.splitlines() if " benchmark: " in line]
        self.assertEqual(len(result_lines), 3)
        self.assertTrue(result_lines[0].startswith("Memory Write benchmark: "))
        self.assertTrue(result_lines[1].startswith("Memory Get benchmark: "))
        self.assertTrue(result_lines[2].startswith("Memory Delete benchmark: "))
        self.assertEqual(backend.opened, 1)
        self.assertEqual(backend.last_store, {})

    def test_defaults(self):
        parsed = build_parser().parse_args([])
        self.assertEqual(parsed.nops, 1000)
        self.assertEqual(parsed.lkv, 32)


if __name__ == "__main__":
    unittest.main()
