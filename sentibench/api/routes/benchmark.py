"""
Benchmark Endpoints

Sequential CPU / WebGL / WebGPU latency comparison.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Body, Depends

from sentibench.core.message_types import BenchmarkResult, Device
from sentibench.services.sentiment_service import SentimentService, get_sentiment_service
from ..constants import EndpointPath
from ..types import BenchmarkDeviceRequest, BenchmarkReport

logger = logging.getLogger(__name__)

router = APIRouter()


# [ENDPOINT] POST /api/v1/benchmark - Full suite
@router.post(EndpointPath.BENCHMARK.value, response_model=BenchmarkReport)
async def run_benchmark_suite(service: SentimentService = Depends(get_sentiment_service)):
    """
    Benchmark every device in order, then restore the CPU model.

    Per-device failures show up as error results; the request itself
    succeeds.
    """
    steps: List[str] = []
    results = await service.run_benchmark_suite(on_step=steps.append)
    return BenchmarkReport(results=results, steps=steps)


# [ENDPOINT] POST /api/v1/benchmark/{device} - One device
@router.post(EndpointPath.BENCHMARK_DEVICE.value, response_model=BenchmarkResult)
async def run_benchmark_device(
    device: Device,
    request: Optional[BenchmarkDeviceRequest] = Body(None),
    service: SentimentService = Depends(get_sentiment_service),
):
    """
    Benchmark a single device.

    Speedup is computed against the latest CPU result, when there is one.
    """
    text = request.text if request else ""
    return await service.run_benchmark(device, text)
