"""
Pytest configuration and shared fixtures

Provides a fake inference engine, a fake capability prober, a service
wired to both and an API test client. No network or model download.
"""

from typing import Callable, Iterable, List, Optional, Tuple

import pytest
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient

from sentibench.api.main import app
from sentibench.backends.base_backend import BaseSentimentEngine
from sentibench.backends.onnxrt.config import BackendConfig, BackendConfigurator, EngineEnvironment
from sentibench.config import SentimentBenchConfig
from sentibench.core.message_types import Device, LoadingProgressPayload, LoadingStatus
from sentibench.hardware.capability_prober import CapabilityProber
from sentibench.services.case_generator import GeminiCaseGenerator
from sentibench.services.inference import InferenceRunner
from sentibench.services.model_loader import ModelLoader
from sentibench.services.sentiment_service import SentimentService, get_sentiment_service


class FakePipeline:
    """Callable stand-in for a loaded model, records its inputs"""

    def __init__(self, device: Device, events: List[Tuple[str, Device]], fail: bool = False):
        self.device = device
        self.calls: List[str] = []
        self.disposed = False
        self._events = events
        self._fail = fail

    def __call__(self, text: str):
        if self.disposed:
            raise RuntimeError("pipeline disposed")
        if self._fail:
            raise RuntimeError(f"{self.device.value} kernel crashed")
        self.calls.append(text)
        if "terrible" in text:
            return [{"label": "NEGATIVE", "score": 0.97}, {"label": "POSITIVE", "score": 0.03}]
        return [{"label": "POSITIVE", "score": 0.98}, {"label": "NEGATIVE", "score": 0.02}]

    def dispose(self) -> None:
        self.disposed = True
        self._events.append(("dispose", self.device))


class FakeEngine(BaseSentimentEngine):
    """
    Engine that builds FakePipeline instances.

    Args:
        fail_load: Devices whose construction raises
        fail_inference: Devices whose pipeline raises when called
    """

    def __init__(self, fail_load: Iterable[Device] = (), fail_inference: Iterable[Device] = ()):
        self.environment = EngineEnvironment()
        self.fail_load = set(fail_load)
        self.fail_inference = set(fail_inference)
        self.configs: List[BackendConfig] = []
        self.pipelines: List[FakePipeline] = []
        self.events: List[Tuple[str, Device]] = []

    @property
    def loaded_devices(self) -> List[Device]:
        return [c.device for c in self.configs]

    def load(self, task, model_id, config, progress_callback=None):
        self.configs.append(config)
        if config.device in self.fail_load:
            raise RuntimeError(f"cannot create session for {config.device.value}")

        if progress_callback is not None:
            progress_callback(LoadingProgressPayload(
                status=LoadingStatus.DONE,
                file=config.model_file,
                progress=100,
            ))

        pipeline = FakePipeline(config.device, self.events, fail=config.device in self.fail_inference)
        self.pipelines.append(pipeline)
        self.events.append(("load", config.device))
        return pipeline

    @property
    def version(self):
        return "fake-1.0"


def providers_for(webgl: bool = True, webgpu: bool = True) -> Callable[[], List[str]]:
    providers = ["CPUExecutionProvider"]
    if webgl:
        providers.append("DmlExecutionProvider")
    if webgpu:
        providers.append("WebGpuExecutionProvider")
    return lambda: providers


@pytest.fixture
def config() -> SentimentBenchConfig:
    """Config with a short benchmark payload"""
    return SentimentBenchConfig(benchmark_sentence="Benchmark sentence. ", benchmark_repeat=3)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def make_prober(config) -> Callable[..., CapabilityProber]:
    """
    Factory for probers with a fixed provider list

    Returns:
        Callable taking webgl / webgpu flags
    """
    def _make(webgl: bool = True, webgpu: bool = True) -> CapabilityProber:
        return CapabilityProber(config, providers_fn=providers_for(webgl, webgpu))
    return _make


@pytest.fixture
def prober(make_prober) -> CapabilityProber:
    return make_prober()


@pytest.fixture
def loader(engine, config) -> ModelLoader:
    configurator = BackendConfigurator(config, engine.environment)
    return ModelLoader(engine, configurator, config)


@pytest.fixture
def runner() -> InferenceRunner:
    return InferenceRunner()


def make_genai_client(text: Optional[str] = None, error: Optional[Exception] = None) -> Mock:
    """Mock genai.Client whose async generate_content returns text or raises"""
    client = Mock()
    if error is not None:
        client.aio.models.generate_content = AsyncMock(side_effect=error)
    else:
        client.aio.models.generate_content = AsyncMock(return_value=Mock(text=text))
    return client


@pytest.fixture
def genai_client() -> Callable[..., Mock]:
    """Factory for mock genai clients"""
    return make_genai_client


@pytest.fixture
def offline_generator(config) -> GeminiCaseGenerator:
    """Generator whose LLM call always fails"""
    return GeminiCaseGenerator(client=make_genai_client(error=ConnectionError("offline")), config=config)


@pytest.fixture
def service(engine, prober, offline_generator, config) -> SentimentService:
    return SentimentService(engine=engine, prober=prober, generator=offline_generator, config=config)


@pytest.fixture
def client(service) -> TestClient:
    """
    FastAPI test client bound to the fake service

    Returns:
        TestClient for API testing
    """
    app.dependency_overrides[get_sentiment_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
