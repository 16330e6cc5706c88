"""
Base engine interface for sentiment inference backends.

An engine turns (task, model id, backend configuration) into a callable
pipeline:
- pipeline(text) -> [{"label": str, "score": float}, ...]
- pipeline.dispose() releases the underlying session
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from sentibench.core.message_types import ProgressCallback

if TYPE_CHECKING:
    from .onnxrt.config import BackendConfig


class BaseSentimentEngine(ABC):
    """
    Abstract base class for engines the Model Loader can drive.
    """

    @abstractmethod
    def load(
        self,
        task: str,
        model_id: str,
        config: "BackendConfig",
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Any:
        """
        Construct a pipeline for the configured device.

        Args:
            task: Pipeline task
            model_id: Model repo id or local path
            config: Backend configuration for the target device
            progress_callback: Optional sink for loading progress events

        Returns:
            Callable pipeline bound to config.device
        """
        pass

    @property
    def version(self) -> Optional[str]:
        """Engine version string, if known"""
        return None
