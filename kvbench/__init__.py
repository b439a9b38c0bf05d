"""kvbench -- put/get/delete latency benchmarks for embedded key-value engines."""

__version__ = "0.1.0"
