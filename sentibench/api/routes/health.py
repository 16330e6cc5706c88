"""
Health Check and Statistics Endpoints
"""

import time
from fastapi import APIRouter, Depends

from sentibench.services.sentiment_service import SentimentService, get_sentiment_service
from ..constants import EndpointPath
from ..types import HealthStatus, StatsResponse

router = APIRouter()

# Track server start time
_start_time = time.time()


# [ENDPOINT] GET /api/v1/health - Server health and model status
@router.get(EndpointPath.HEALTH.value, response_model=HealthStatus, summary="Health Check")
async def health_check(service: SentimentService = Depends(get_sentiment_service)):
    """
    Health check endpoint

    Returns:
        Server health status including model state and bound device
    """
    return HealthStatus(
        status="ok",
        model_status=service.model_status,
        model_loaded=service.loader.is_model_loaded(),
        device=service.device,
        uptime=time.time() - _start_time,
    )


# [ENDPOINT] GET /api/v1/stats - Classification latency
@router.get(EndpointPath.STATS.value, response_model=StatsResponse, summary="Latency Statistics")
async def get_stats(service: SentimentService = Depends(get_sentiment_service)):
    """Last and aggregate classification latency"""
    return StatsResponse(**service.get_stats())
