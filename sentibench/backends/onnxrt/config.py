"""
ONNX Runtime backend configuration.

Maps a compute device to the execution backend, provider list and weight
precision the engine should use for it.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum

from sentibench.config import SENTIMENT_CONFIG, SentimentBenchConfig
from sentibench.core.message_types import Device


logger = logging.getLogger(__name__)


class ONNXProvider(str, Enum):
    """ONNX Runtime execution providers"""
    CPU = "CPUExecutionProvider"
    DIRECTML = "DmlExecutionProvider"
    WEBGPU = "WebGpuExecutionProvider"


class ONNXOptimizationLevel(int, Enum):
    """ONNX graph optimization levels"""
    DISABLE_ALL = 0
    ENABLE_BASIC = 1
    ENABLE_EXTENDED = 2
    ENABLE_ALL = 99


class BackendId(str, Enum):
    """Execution backend identifiers, one per device"""
    WASM = "wasm"
    WEBGL = "webgl"
    WEBGPU = "webgpu"


class ModelFile(str, Enum):
    """ONNX weight files shipped with the model repo"""
    FP32 = "onnx/model.onnx"
    INT8 = "onnx/model_quantized.onnx"


@dataclass(frozen=True)
class BackendConfig:
    """
    Engine configuration derived from a device.

    Attributes:
        device: Device this configuration was built for
        backend_id: Execution backend identifier
        providers: ONNX Runtime providers in priority order
        quantized: Use int8 weights (CPU) instead of fp32 (GPU)
        optimization_level: Graph optimization level
        log_severity_level: Logging level (0=Verbose, 4=Error)
        intra_op_num_threads: Number of intra-op threads (0=auto)
        inter_op_num_threads: Number of inter-op threads (0=auto)
    """
    device: Device
    backend_id: BackendId
    providers: Tuple[str, ...]
    quantized: bool
    optimization_level: ONNXOptimizationLevel = ONNXOptimizationLevel.ENABLE_EXTENDED
    log_severity_level: int = 3  # Warning
    intra_op_num_threads: int = 0  # Auto
    inter_op_num_threads: int = 0  # Auto

    @property
    def model_file(self) -> str:
        return ModelFile.INT8.value if self.quantized else ModelFile.FP32.value

    @property
    def dtype(self) -> str:
        return "int8" if self.quantized else "fp32"


@dataclass
class EngineEnvironment:
    """
    Process-wide engine settings.

    The active backend is set by BackendConfigurator.configure() and read
    by the engine on its next load.
    """
    backend: BackendId = BackendId.WASM
    active_config: Optional[BackendConfig] = None
    allow_local_models: bool = False
    use_cache: bool = True
    cache_dir: Optional[str] = None


_BACKEND_IDS = {
    Device.CPU: BackendId.WASM,
    Device.WEBGL: BackendId.WEBGL,
    Device.WEBGPU: BackendId.WEBGPU,
}

# Global engine environment
ENGINE_ENV = EngineEnvironment(allow_local_models=SENTIMENT_CONFIG.allow_local_models)


class BackendConfigurator:
    """
    Builds BackendConfig values and records the active one.

    CPU runs quantized (int8) weights. GPU paths use full precision (fp32):
    int8 GPU kernels are often missing and fall back to CPU without notice.
    """

    def __init__(
        self,
        config: SentimentBenchConfig = SENTIMENT_CONFIG,
        environment: EngineEnvironment = ENGINE_ENV,
    ):
        self._config = config
        self.environment = environment

    def build(self, device: Device) -> BackendConfig:
        """
        Map a device to its configuration without touching global state.

        Args:
            device: Requested device (unknown values fall back to CPU)

        Returns:
            BackendConfig for the device
        """
        device = Device.parse(device)
        providers = self._config.device_providers.get(device.value) or [ONNXProvider.CPU.value]

        return BackendConfig(
            device=device,
            backend_id=_BACKEND_IDS[device],
            providers=tuple(providers),
            quantized=not device.is_gpu,
        )

    def configure(self, device: Device) -> BackendConfig:
        """
        Select the backend for the next model load.

        Args:
            device: Requested device

        Returns:
            BackendConfig now active on the engine environment
        """
        backend_config = self.build(device)

        self.environment.backend = backend_config.backend_id
        self.environment.active_config = backend_config

        logger.info(
            f"Backend configured: {backend_config.backend_id.value} "
            f"({backend_config.dtype}, providers: {list(backend_config.providers)})"
        )
        return backend_config
