"""
API Constants

All string literals for API endpoints and error codes.
"""

from enum import Enum


class APIPrefix(str, Enum):
    """API path prefixes"""
    V1 = "/api/v1"


class EndpointPath(str, Enum):
    """API endpoint paths (relative to prefix)"""
    HEALTH = "/health"
    STATS = "/stats"

    # System
    CAPABILITIES = "/capabilities"
    ENGINE_INFO = "/engine-info"
    DIAGNOSTICS = "/diagnostics"

    # Model
    LOAD = "/load"
    CLASSIFY = "/classify"

    # Benchmark
    BENCHMARK = "/benchmark"
    BENCHMARK_DEVICE = "/benchmark/{device}"

    # Test cases
    TEST_CASES = "/test-cases"


class ErrorCode(str, Enum):
    """Application error codes"""
    # Client errors
    INVALID_REQUEST = "invalid_request"

    # Server errors
    MODEL_LOAD_FAILED = "model_load_failed"
    INFERENCE_FAILED = "inference_failed"
