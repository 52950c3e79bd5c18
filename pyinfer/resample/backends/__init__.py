"""Compute backends for null distribution generation."""

from pyinfer.resample.backends.cpu import CPUNullBackend

__all__ = ["CPUNullBackend"]
