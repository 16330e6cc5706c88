"""
Strongly typed configuration for sentibench.
"""

from typing import Dict, List, Literal
from dataclasses import dataclass, field


# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
LOG_FORMAT: str = "%(levelname)s: %(message)s"

# Default model (ONNX export with fp32 and int8 weights)
DEFAULT_TASK: str = "sentiment-analysis"
DEFAULT_MODEL_ID: str = "Xenova/distilbert-base-uncased-finetuned-sst-2-english"


def _default_device_providers() -> Dict[str, List[str]]:
    return {
        "cpu": ["CPUExecutionProvider"],
        "webgl": ["DmlExecutionProvider"],
        "webgpu": ["WebGpuExecutionProvider"],
    }


@dataclass
class SentimentBenchConfig:
    """Model, benchmark and generator configuration"""

    # Model settings
    task: str = DEFAULT_TASK
    model_id: str = DEFAULT_MODEL_ID
    allow_local_models: bool = False  # True = never hit the Hub, cache only
    max_sequence_length: int = 512

    # Device -> ONNX Runtime providers (priority order)
    device_providers: Dict[str, List[str]] = field(default_factory=_default_device_providers)

    # Benchmark payload (long text to stress the device)
    benchmark_sentence: str = "Benchmarking AI inference on local hardware is fascinating. "
    benchmark_repeat: int = 50

    # Diagnostics
    diagnostic_text: str = "Diagnostic warm up"

    # Test case generator
    generator_model: str = "gemini-2.5-flash"
    generator_topic: str = "Customer reviews for a tech gadget"
    generator_count: int = 3

    # API server
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    @property
    def benchmark_text(self) -> str:
        """Fixed-length synthetic payload used for timed inference"""
        return self.benchmark_sentence * self.benchmark_repeat


# Global configuration instance
SENTIMENT_CONFIG = SentimentBenchConfig()
