"""
Services: model ownership, inference, benchmarks, diagnostics and the
caller-facing SentimentService.
"""

from .model_loader import ModelLoader
from .inference import InferenceRunner
from .benchmark import BenchmarkOrchestrator, compute_speedup, apply_speedups
from .diagnostics import run_diagnostics
from .case_generator import GeminiCaseGenerator, FALLBACK_TEST_CASES, fallback_test_cases
from .sentiment_service import (
    SentimentService,
    get_sentiment_service,
    reset_sentiment_service,
)

__all__ = [
    "ModelLoader",
    "InferenceRunner",
    "BenchmarkOrchestrator",
    "compute_speedup",
    "apply_speedups",
    "run_diagnostics",
    "GeminiCaseGenerator",
    "FALLBACK_TEST_CASES",
    "fallback_test_cases",
    "SentimentService",
    "get_sentiment_service",
    "reset_sentiment_service",
]
