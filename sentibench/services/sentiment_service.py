"""
Sentiment Service

The one object callers (API, CLI) talk to. Owns the loader, runner,
prober and orchestrator and returns plain data only.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from sentibench.config import SENTIMENT_CONFIG, SentimentBenchConfig
from sentibench.core.message_types import (
    BENCHMARK_DEVICES,
    BenchmarkResult,
    Capabilities,
    Device,
    DiagnosticReport,
    EngineInfo,
    ModelStatus,
    ProgressCallback,
    SentimentResult,
    SentimentTestCase,
    StepCallback,
)
from sentibench.core.performance_tracker import PerformanceTracker
from sentibench.core.secrets import get_secrets
from sentibench.backends.base_backend import BaseSentimentEngine
from sentibench.backends.onnxrt.config import BackendConfigurator, EngineEnvironment
from sentibench.backends.onnxrt.manager import ONNXSentimentEngine
from sentibench.hardware.capability_prober import CapabilityProber
from .benchmark import BenchmarkOrchestrator, apply_speedups
from .case_generator import GeminiCaseGenerator
from .diagnostics import run_diagnostics
from .inference import InferenceRunner
from .model_loader import ModelLoader

logger = logging.getLogger(__name__)


class SentimentService:
    """
    Classification, diagnostics and benchmarks behind one interface.

    Every operation that touches the model slot runs under one
    asyncio.Lock: a load, its warm-up and its timed call are never
    interleaved with another request.

    Args:
        engine: Inference engine (defaults to ONNX Runtime)
        prober: Capability prober
        generator: Test case generator
        config: Model and benchmark settings
    """

    def __init__(
        self,
        engine: Optional[BaseSentimentEngine] = None,
        prober: Optional[CapabilityProber] = None,
        generator: Optional[GeminiCaseGenerator] = None,
        config: SentimentBenchConfig = SENTIMENT_CONFIG,
    ):
        self.config = config

        if engine is None:
            secrets = get_secrets()
            environment = EngineEnvironment(
                allow_local_models=config.allow_local_models,
                cache_dir=secrets.model_cache_dir,
            )
            engine = ONNXSentimentEngine(
                environment=environment,
                token=secrets.huggingface_token,
                max_length=config.max_sequence_length,
            )
        self.engine = engine

        environment = getattr(engine, "environment", None) or EngineEnvironment(
            allow_local_models=config.allow_local_models
        )
        self.configurator = BackendConfigurator(config, environment)
        self.loader = ModelLoader(engine, self.configurator, config)
        self.runner = InferenceRunner()
        self.prober = prober or CapabilityProber(config)
        self.orchestrator = BenchmarkOrchestrator(self.loader, self.runner, self.prober, config)
        self.generator = generator or GeminiCaseGenerator(config=config)

        self._model_status = ModelStatus.IDLE
        self._performance_tracker = PerformanceTracker()
        self._device_results: Dict[Device, BenchmarkResult] = {}
        self._lock = asyncio.Lock()

    @property
    def model_status(self) -> ModelStatus:
        return self._model_status

    @property
    def device(self) -> Optional[Device]:
        return self.loader.device

    def _refresh_status(self) -> None:
        """Benchmarks reload the model; report what is actually bound now"""
        if self.loader.is_model_loaded():
            self._model_status = ModelStatus.READY
        elif self._model_status != ModelStatus.IDLE:
            self._model_status = ModelStatus.ERROR

    def probe_capabilities(self) -> Capabilities:
        """Which GPU paths this host exposes"""
        return self.prober.probe()

    async def load_default(self, progress_callback: Optional[ProgressCallback] = None) -> None:
        """
        Load the CPU model if it is not already live.

        Raises:
            ModelLoadError: If the model cannot be constructed
        """
        async with self._lock:
            self._model_status = ModelStatus.LOADING
            try:
                await self.loader.load(Device.CPU, progress_callback=progress_callback)
            except Exception:
                self._model_status = ModelStatus.ERROR
                raise
            self._model_status = ModelStatus.READY

    async def classify(self, text: str) -> Optional[SentimentResult]:
        """
        Classify text with the live model (CPU default when none is loaded).

        Blank input is ignored and returns None without touching the engine.

        Raises:
            ModelLoadError: If the default model cannot be loaded
            InferenceError: If the classification fails
        """
        if not text or not text.strip():
            logger.debug("Ignoring blank classify input")
            return None

        async with self._lock:
            instance = await self.loader.get_instance()
            metrics = self._performance_tracker.start_inference(self.loader.device, len(text))
            try:
                result = await self.runner.classify(instance, text)
            except Exception:
                self._performance_tracker.abort_inference(metrics)
                raise
            self._performance_tracker.complete_inference(metrics)
            return result

    async def run_benchmark_suite(self, on_step: Optional[StepCallback] = None) -> List[BenchmarkResult]:
        """Benchmark CPU, WebGL and WebGPU in order, then restore CPU"""
        async with self._lock:
            results = await self.orchestrator.run_suite(on_step=on_step)
            self._device_results = {r.device: r for r in results}
            self._refresh_status()
            return results

    async def run_benchmark(self, device: Device, text: str = "") -> BenchmarkResult:
        """
        Benchmark one device.

        The latest result per device is kept so speedup is reported against
        the most recent CPU run. The model stays loaded on the benchmarked
        device afterwards.
        """
        device = Device.parse(device)
        async with self._lock:
            result = await self.orchestrator.run_device(device, text)
            self._refresh_status()
            self._device_results[device] = result

            ordered = [self._device_results[d] for d in BENCHMARK_DEVICES if d in self._device_results]
            with_speedup = {r.device: r for r in apply_speedups(ordered)}
            self._device_results = with_speedup
            return with_speedup[device]

    async def run_diagnostics(
        self,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> DiagnosticReport:
        """Environment check, default model load and warm-up"""
        async with self._lock:
            self._model_status = ModelStatus.LOADING
            report = await run_diagnostics(
                self.loader,
                self.runner,
                self.prober,
                self.config,
                progress_callback=progress_callback,
            )
            self._model_status = report.status
            return report

    def engine_info(self) -> EngineInfo:
        environment = self.configurator.environment
        backend_config = self.loader.backend_config
        return EngineInfo(
            version=self.engine.version,
            backend=environment.backend.value,
            allow_local_models=environment.allow_local_models,
            model_id=self.loader.model_id,
            device=self.loader.device,
            providers=list(backend_config.providers) if backend_config else [],
        )

    def get_stats(self) -> Dict[str, object]:
        """Latency of the last classification plus aggregates"""
        return {
            "last": self._performance_tracker.get_current_stats(),
            "aggregate": self._performance_tracker.get_aggregate_stats(),
        }

    async def generate_test_cases(self, topic: Optional[str] = None, count: Optional[int] = None) -> List[SentimentTestCase]:
        """Synthetic sentences from the LLM, or the fallback list"""
        return await self.generator.generate_test_cases(
            topic or self.config.generator_topic,
            count or self.config.generator_count,
        )

    def shutdown(self) -> None:
        self.loader.dispose()
        self._model_status = ModelStatus.IDLE


_service: Optional[SentimentService] = None


def get_sentiment_service() -> SentimentService:
    """Get the process-wide SentimentService, created on first use"""
    global _service
    if _service is None:
        _service = SentimentService()
    return _service


def reset_sentiment_service() -> None:
    """Dispose and drop the process-wide service"""
    global _service
    if _service is not None:
        _service.shutdown()
    _service = None
