"""
Inference Runner

Runs one classification through a loaded pipeline.
"""

import asyncio
import logging
from typing import Any

from sentibench.core.exceptions import InferenceError
from sentibench.core.message_types import SentimentResult

logger = logging.getLogger(__name__)


class InferenceRunner:
    """Single-call text classification, no batching and no fallback"""

    async def classify(self, instance: Any, text: str) -> SentimentResult:
        """
        Classify text with a loaded pipeline.

        Args:
            instance: Pipeline returned by the Model Loader
            text: Input text

        Returns:
            Top-scoring label with its score

        Raises:
            ValueError: If no pipeline is given
            InferenceError: If the pipeline call fails or returns nothing
        """
        if instance is None:
            raise ValueError("classify() requires a loaded model instance")

        try:
            output = await asyncio.to_thread(instance, text)
        except Exception as e:
            logger.error(f"Inference failed: {e}", exc_info=True)
            raise InferenceError(f"Inference failed: {e}") from e

        if not output:
            raise InferenceError("Model returned no predictions")

        top = output[0]
        return SentimentResult(label=top["label"], score=float(top["score"]))
