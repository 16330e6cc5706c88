"""
Benchmark Orchestrator

Measures inference latency per device:
- skip devices the host cannot accelerate
- force-load the model for the device
- one untimed warm-up call (absorbs kernel/shader compilation)
- one timed call on a fixed-length payload

Devices run strictly one after another; only one model is resident at a
time and timings must not overlap. There is no cancellation and no
timeout: a hanging inference call stalls the run.
"""

import logging
from typing import Dict, List, Optional

from sentibench.config import SENTIMENT_CONFIG, SentimentBenchConfig
from sentibench.core.exceptions import ModelLoadError, UnsupportedBackendError
from sentibench.core.message_types import (
    BENCHMARK_DEVICES,
    BenchmarkResult,
    Device,
    ResultStatus,
    StepCallback,
)
from sentibench.core.performance_tracker import InferenceMetrics
from sentibench.hardware.capability_prober import CapabilityProber
from .inference import InferenceRunner
from .model_loader import ModelLoader

logger = logging.getLogger(__name__)


def compute_speedup(cpu: Optional[BenchmarkResult], result: BenchmarkResult) -> Optional[float]:
    """
    Ratio of CPU time to device time.

    CPU's own result is the reference (1.0) and is never divided. None means
    unavailable: the CPU or device result is missing, failed or took 0 ms.
    """
    if cpu is None or not cpu.ok or not result.ok:
        return None
    if result.device == Device.CPU:
        return 1.0
    return cpu.time / result.time


def apply_speedups(results: List[BenchmarkResult]) -> List[BenchmarkResult]:
    """Copy of results with speedup filled in against the CPU result"""
    cpu = next((r for r in results if r.device == Device.CPU), None)
    return [
        r.model_copy(update={"speedup": compute_speedup(cpu, r)})
        for r in results
    ]


def _error_result(device: Device, message: str) -> BenchmarkResult:
    return BenchmarkResult(device=device, time=0.0, status=ResultStatus.ERROR, error=message)


class BenchmarkOrchestrator:
    """
    Drives the Model Loader and Inference Runner across devices.

    The orchestrator never holds the pipeline itself; every access goes
    through the loader.
    """

    def __init__(
        self,
        loader: ModelLoader,
        runner: InferenceRunner,
        prober: CapabilityProber,
        config: SentimentBenchConfig = SENTIMENT_CONFIG,
        devices: Optional[List[Device]] = None,
    ):
        self._loader = loader
        self._runner = runner
        self._prober = prober
        self._payload = config.benchmark_text
        self._devices = list(devices or BENCHMARK_DEVICES)

    @property
    def payload(self) -> str:
        return self._payload

    async def _measure(self, device: Device, text: str) -> BenchmarkResult:
        """Load, warm up and time one call; failures become error records"""
        try:
            instance = await self._loader.load(device, force=True)

            # Warm-up, not timed
            await self._runner.classify(instance, text)

            metrics = InferenceMetrics(device=device, input_chars=len(text))
            await self._runner.classify(instance, text)
            metrics.mark_complete()
        except Exception as e:
            logger.error(f"Benchmark failed on {device.value}: {e}", exc_info=True)
            return _error_result(device, str(e))

        elapsed = metrics.elapsed_ms or 0.0
        logger.info(f"Benchmark {device.value}: {elapsed:.2f} ms")
        return BenchmarkResult(device=device, time=elapsed, status=ResultStatus.SUCCESS)

    async def run_device(self, device: Device, text: str = "") -> BenchmarkResult:
        """
        Benchmark a single device.

        Args:
            device: Device to measure
            text: Input text, empty for the default synthetic payload

        Returns:
            BenchmarkResult (speedup not filled in)
        """
        device = Device.parse(device)
        if not self._prober.supports(device):
            error = UnsupportedBackendError(device)
            logger.warning(f"Skipping benchmark: {error}")
            return _error_result(device, str(error))

        return await self._measure(device, text or self._payload)

    async def run_suite(self, on_step: Optional[StepCallback] = None) -> List[BenchmarkResult]:
        """
        Benchmark every device in order and restore the CPU default.

        Args:
            on_step: Optional sink for progress messages

        Returns:
            One result per device, in benchmark order, with speedups
        """
        def step(message: str) -> None:
            logger.info(message)
            if on_step is not None:
                on_step(message)

        report: Dict[Device, BenchmarkResult] = {}
        try:
            for device in self._devices:
                if device.is_gpu and not self._prober.supports(device):
                    report[device] = _error_result(device, str(UnsupportedBackendError(device)))
                    step(f"Skipping {device.value.upper()} (not supported)")
                    continue

                suffix = " (downloading FP32 model)..." if device.is_gpu else "..."
                step(f"Testing {device.value.upper()}{suffix}")
                report[device] = await self._measure(device, self._payload)
        finally:
            step("Restoring efficient environment (CPU/quantized)...")
            try:
                await self._loader.load(Device.CPU, force=True)
            except ModelLoadError as e:
                logger.error(f"Could not restore CPU model after benchmark: {e}")

        return apply_speedups([report[d] for d in self._devices if d in report])
