"""
Shared compute infrastructure for PyInfer.

Hardware detection and timing utilities shared by all backends.
Domain-specific backends live in {domain}/backends/.
"""

from pyinfer.core.compute.device import DeviceInfo, detect_gpu
from pyinfer.core.compute.timing import Timer

__all__ = [
    "DeviceInfo",
    "detect_gpu",
    "Timer",
]
