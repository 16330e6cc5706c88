"""
API Request/Response Types

Request and response models that wrap the core message types.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from sentibench.core.message_types import (
    BenchmarkResult,
    Device,
    ModelStatus,
    SentimentTestCase,
)


# Request Models

class ClassifyRequest(BaseModel):
    """Text to classify"""
    text: str = Field(..., description="Text to analyze", examples=["I simply love how easy this app is to use!"])


class BenchmarkDeviceRequest(BaseModel):
    """Optional payload for a single-device benchmark"""
    text: str = Field("", description="Input text, empty for the default synthetic payload")


class CaseGenerationRequest(BaseModel):
    """Request for generated test sentences"""
    topic: Optional[str] = Field(None, description="Topic of the sentences", examples=["Customer reviews for a tech gadget"])
    count: int = Field(3, ge=1, le=20, description="Number of sentences")


# Response Models

class HealthStatus(BaseModel):
    """Health check response"""
    model_config = {"protected_namespaces": ()}

    status: str
    model_status: ModelStatus
    model_loaded: bool
    device: Optional[Device] = None
    uptime: Optional[float] = None


class LoadResponse(BaseModel):
    """Result of loading the default model"""
    success: bool
    message: str
    device: Optional[Device] = None


class BenchmarkReport(BaseModel):
    """Full benchmark run"""
    results: List[BenchmarkResult]
    steps: List[str] = Field(default_factory=list)


class GeneratedCasesResponse(BaseModel):
    """Generated test sentences"""
    cases: List[SentimentTestCase]


class StatsResponse(BaseModel):
    """Classification latency statistics"""
    last: Dict[str, Any]
    aggregate: Dict[str, Any]
