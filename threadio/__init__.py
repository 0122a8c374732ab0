"""Reference-counted tasks, event sources and outputers, and packed data stream helpers for threaded I/O benchmarks."""

__version__ = "0.1.0"