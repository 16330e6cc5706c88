"""
Message types and data structures for sentibench.
Strongly typed definitions shared by the services, the API and the CLI.
"""

from enum import Enum
from typing import Any, Callable, List, Optional
from pydantic import BaseModel, Field


# Device Types
class Device(str, Enum):
    """Compute devices a model can be loaded for"""
    CPU = "cpu"
    WEBGL = "webgl"
    WEBGPU = "webgpu"

    @property
    def is_gpu(self) -> bool:
        return self is not Device.CPU

    @classmethod
    def parse(cls, value: Any) -> "Device":
        """Parse a device tag, falling back to CPU for unknown values"""
        if isinstance(value, Device):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.CPU


# Fixed benchmark order
BENCHMARK_DEVICES: List[Device] = [Device.CPU, Device.WEBGL, Device.WEBGPU]


# Loading Status Types
class LoadingStatus(str, Enum):
    """Model loading status values"""
    INITIATE = "initiate"
    PROGRESS = "progress"
    DONE = "done"
    ERROR = "error"


class ModelStatus(str, Enum):
    """Lifecycle of the default model as seen by callers"""
    IDLE = "IDLE"
    LOADING = "LOADING"
    READY = "READY"
    ERROR = "ERROR"


class ResultStatus(str, Enum):
    """Outcome of a benchmark run for one device"""
    SUCCESS = "success"
    ERROR = "error"


class StepStatus(str, Enum):
    """Status of a diagnostic step"""
    SUCCESS = "success"
    ERROR = "error"


class ExpectedSentiment(str, Enum):
    """Sentiment labels used by generated test cases"""
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


# Pydantic Models

class SentimentResult(BaseModel):
    """Single classification result"""
    label: str
    score: float = Field(ge=0.0, le=1.0)


class BenchmarkResult(BaseModel):
    """
    Timing for one device.

    time is in milliseconds and is 0 when the device was skipped or failed.
    speedup is None when it cannot be computed.
    """
    device: Device
    time: float = 0.0
    status: ResultStatus
    speedup: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.SUCCESS and self.time > 0

    def speedup_label(self) -> str:
        """Human readable speedup ("1.0x (Ref)", "2.35x" or "-")"""
        if self.speedup is None:
            return "-"
        if self.device == Device.CPU:
            return "1.0x (Ref)"
        return f"{self.speedup:.2f}x"


class DiagnosticResult(BaseModel):
    """One logged diagnostic step"""
    step: str
    status: StepStatus
    message: str
    duration: Optional[float] = None


class DiagnosticReport(BaseModel):
    """Full diagnostic run"""
    status: ModelStatus
    steps: List[DiagnosticResult] = Field(default_factory=list)


class SentimentTestCase(BaseModel):
    """Sentence with the sentiment a model is expected to assign"""
    text: str
    expectedSentiment: ExpectedSentiment


class LoadingProgressPayload(BaseModel):
    """Loading progress event payload"""
    status: LoadingStatus
    file: str
    progress: int = Field(ge=0, le=100)
    loaded: Optional[int] = None
    total: Optional[int] = None


# Push-style sink for model loading progress
ProgressCallback = Callable[[LoadingProgressPayload], None]

# Sink for human readable benchmark step messages
StepCallback = Callable[[str], None]


class Capabilities(BaseModel):
    """GPU acceleration paths exposed by the host"""
    webgpu: bool
    webgl: bool


class EngineInfo(BaseModel):
    """Inference engine state"""
    model_config = {"protected_namespaces": ()}

    version: Optional[str] = None
    backend: Optional[str] = None
    allow_local_models: bool = False
    model_id: str
    device: Optional[Device] = None
    providers: List[str] = Field(default_factory=list)

