"""
Performance Tracking Utilities

Tracks inference latency:
- Wall time of a single classification
- Aggregate request count and average latency
"""

import time
from typing import Optional, Dict, Any
from dataclasses import dataclass, field

from .message_types import Device


@dataclass
class InferenceMetrics:
    """
    Metrics for a single inference call.

    Attributes:
        device: Device the model was loaded for
        start_time: perf_counter value when inference started
        end_time: perf_counter value when inference completed
        input_chars: Length of the classified text
    """
    device: Optional[Device] = None
    start_time: float = field(default_factory=time.perf_counter)
    end_time: Optional[float] = None
    input_chars: int = 0

    def mark_complete(self) -> None:
        """Mark when inference is complete"""
        if self.end_time is None:
            self.end_time = time.perf_counter()

    @property
    def elapsed_ms(self) -> Optional[float]:
        """
        Elapsed wall time in milliseconds.

        Returns:
            Elapsed ms or None if not complete
        """
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary"""
        return {
            "device": self.device.value if self.device else None,
            "input_chars": self.input_chars,
            "elapsed_ms": self.elapsed_ms,
        }


class PerformanceTracker:
    """
    Tracks latency across classification requests.

    Each request owns the InferenceMetrics returned by start_inference();
    the tracker only keeps the last completed one and the aggregates.
    """

    def __init__(self):
        """Initialize performance tracker"""
        self._last_completed_metrics: Optional[InferenceMetrics] = None

        # Aggregate stats
        self._total_requests: int = 0
        self._total_time_ms: float = 0.0
        self._failed_requests: int = 0

    def start_inference(self, device: Optional[Device] = None, input_chars: int = 0) -> InferenceMetrics:
        """
        Start tracking a new inference.

        Pass the returned metrics to complete_inference() or
        abort_inference(); concurrent requests each keep their own.

        Args:
            device: Device the live model is bound to
            input_chars: Length of the input text

        Returns:
            New InferenceMetrics instance
        """
        return InferenceMetrics(device=device, input_chars=input_chars)

    def complete_inference(self, metrics: InferenceMetrics) -> None:
        """Mark an inference as complete and update aggregates"""
        metrics.mark_complete()

        self._total_requests += 1
        self._total_time_ms += metrics.elapsed_ms or 0.0

        self._last_completed_metrics = metrics

    def abort_inference(self, metrics: InferenceMetrics) -> None:
        """Close a failed inference; counted as a failure, not in latency"""
        metrics.mark_complete()
        self._failed_requests += 1

    def get_current_stats(self) -> Dict[str, Any]:
        """
        Get last inference statistics.

        Returns:
            Dictionary with the last completed metrics
        """
        if self._last_completed_metrics:
            return self._last_completed_metrics.to_dict()

        return {
            "device": None,
            "input_chars": 0,
            "elapsed_ms": None,
        }

    def get_aggregate_stats(self) -> Dict[str, Any]:
        """
        Get aggregate statistics across all inferences.

        Returns:
            Dictionary with aggregate metrics
        """
        avg_ms = None
        if self._total_requests > 0:
            avg_ms = self._total_time_ms / self._total_requests

        return {
            "total_requests": self._total_requests,
            "average_latency_ms": avg_ms,
            "total_time_ms": self._total_time_ms,
            "failed_requests": self._failed_requests,
        }
