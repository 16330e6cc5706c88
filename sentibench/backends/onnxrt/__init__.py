"""
ONNX Runtime backend: device configuration and sentiment engine.
"""

from .config import (
    ONNXProvider,
    ONNXOptimizationLevel,
    BackendId,
    ModelFile,
    BackendConfig,
    EngineEnvironment,
    BackendConfigurator,
    ENGINE_ENV,
)
from .manager import (
    SentimentPipeline,
    ONNXSentimentEngine,
    SUPPORTED_TASKS,
)

__all__ = [
    "ONNXProvider",
    "ONNXOptimizationLevel",
    "BackendId",
    "ModelFile",
    "BackendConfig",
    "EngineEnvironment",
    "BackendConfigurator",
    "ENGINE_ENV",
    "SentimentPipeline",
    "ONNXSentimentEngine",
    "SUPPORTED_TASKS",
]
