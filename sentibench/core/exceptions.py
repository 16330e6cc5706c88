"""
Error types raised by the sentibench core.

All errors are RuntimeError subclasses so callers that already guard
backend calls with ``except RuntimeError`` keep working.
"""

from typing import Optional

from .message_types import Device


class SentimentBenchError(RuntimeError):
    """Base class for sentibench errors"""


class UnsupportedBackendError(SentimentBenchError):
    """Requested GPU backend is not available on this host"""

    def __init__(self, device: Device):
        self.device = device
        super().__init__(f"{device.value} backend not supported")


class ModelLoadError(SentimentBenchError):
    """Model construction failed for a device"""

    def __init__(self, message: str, device: Optional[Device] = None):
        self.device = device
        super().__init__(message)


class InferenceError(SentimentBenchError):
    """A classification call failed"""


class ConfigurationMissingError(SentimentBenchError):
    """A required credential or setting is absent"""
