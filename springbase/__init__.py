"""Assertion helpers that report to a recorder, and lock-guarded value holders."""

__version__ = "0.1.0"
__all__ = ["asserts", "atomics"]