"""
Startup diagnostics: environment check, model load and warm-up inference.
Each step is logged with its status and duration.
"""

import logging
import time
from typing import List, Optional

from sentibench.config import SENTIMENT_CONFIG, SentimentBenchConfig
from sentibench.core.exceptions import InferenceError, ModelLoadError
from sentibench.core.message_types import (
    DiagnosticReport,
    DiagnosticResult,
    ModelStatus,
    ProgressCallback,
    StepStatus,
)
from sentibench.hardware.capability_prober import CapabilityProber
from .inference import InferenceRunner
from .model_loader import ModelLoader

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


async def run_diagnostics(
    loader: ModelLoader,
    runner: InferenceRunner,
    prober: CapabilityProber,
    config: SentimentBenchConfig = SENTIMENT_CONFIG,
    progress_callback: Optional[ProgressCallback] = None,
) -> DiagnosticReport:
    """
    Verify the environment, load the CPU default and run a warm-up.

    Load and inference failures end the run with an error step; nothing
    is raised.

    Returns:
        DiagnosticReport with READY or ERROR status
    """
    steps: List[DiagnosticResult] = []

    start = time.perf_counter()
    env = prober.environment_info()
    runtime = env.get("onnxruntime") or "not detected"
    steps.append(DiagnosticResult(
        step="env",
        status=StepStatus.SUCCESS,
        message=f"Environment verified: {env.get('cores')} cores / {env.get('threads')} threads, ONNX Runtime: {runtime}",
        duration=_elapsed_ms(start),
    ))

    try:
        start = time.perf_counter()
        instance = await loader.load(progress_callback=progress_callback)
        steps.append(DiagnosticResult(
            step="model",
            status=StepStatus.SUCCESS,
            message=f"Model loaded and cached ({loader.model_id})",
            duration=_elapsed_ms(start),
        ))

        start = time.perf_counter()
        await runner.classify(instance, config.diagnostic_text)
        steps.append(DiagnosticResult(
            step="inference",
            status=StepStatus.SUCCESS,
            message="Inference succeeded",
            duration=_elapsed_ms(start),
        ))
    except (ModelLoadError, InferenceError) as e:
        logger.error(f"Diagnostic failed: {e}")
        steps.append(DiagnosticResult(
            step="error",
            status=StepStatus.ERROR,
            message=f"Model load or inference failed: {e}",
        ))
        return DiagnosticReport(status=ModelStatus.ERROR, steps=steps)

    return DiagnosticReport(status=ModelStatus.READY, steps=steps)
