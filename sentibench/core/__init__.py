"""
Core module for sentibench.
Contains shared types, errors, secrets and performance tracking.
"""

# Message types
from .message_types import (
    # Enums
    Device,
    LoadingStatus,
    ModelStatus,
    ResultStatus,
    StepStatus,
    ExpectedSentiment,
    BENCHMARK_DEVICES,

    # Models
    SentimentResult,
    BenchmarkResult,
    DiagnosticResult,
    DiagnosticReport,
    SentimentTestCase,
    LoadingProgressPayload,
    Capabilities,
    EngineInfo,

    # Callbacks
    ProgressCallback,
    StepCallback,
)

# Errors
from .exceptions import (
    SentimentBenchError,
    UnsupportedBackendError,
    ModelLoadError,
    InferenceError,
    ConfigurationMissingError,
)

# Secrets
from .secrets import SecretsManager, get_secrets, reset_secrets

# Performance tracking
from .performance_tracker import InferenceMetrics, PerformanceTracker

__all__ = [
    "Device",
    "LoadingStatus",
    "ModelStatus",
    "ResultStatus",
    "StepStatus",
    "ExpectedSentiment",
    "BENCHMARK_DEVICES",
    "SentimentResult",
    "BenchmarkResult",
    "DiagnosticResult",
    "DiagnosticReport",
    "SentimentTestCase",
    "LoadingProgressPayload",
    "Capabilities",
    "EngineInfo",
    "ProgressCallback",
    "StepCallback",
    "SentimentBenchError",
    "UnsupportedBackendError",
    "ModelLoadError",
    "InferenceError",
    "ConfigurationMissingError",
    "SecretsManager",
    "get_secrets",
    "reset_secrets",
    "InferenceMetrics",
    "PerformanceTracker",
]
