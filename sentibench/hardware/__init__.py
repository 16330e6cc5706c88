"""
Hardware capability detection for sentibench.
"""

from .capability_prober import (
    CapabilityProber,
    query_onnx_providers,
    onnx_runtime_version,
)

__all__ = [
    "CapabilityProber",
    "query_onnx_providers",
    "onnx_runtime_version",
]
