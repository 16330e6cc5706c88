"""
System Information Endpoints

GPU capabilities, engine state and startup diagnostics.
"""

import logging
from fastapi import APIRouter, Depends

from sentibench.core.message_types import Capabilities, DiagnosticReport, EngineInfo
from sentibench.services.sentiment_service import SentimentService, get_sentiment_service
from ..constants import EndpointPath

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(EndpointPath.CAPABILITIES.value, response_model=Capabilities)
async def get_capabilities(service: SentimentService = Depends(get_sentiment_service)):
    """
    Report which GPU acceleration paths the host exposes.

    Returns:
        {"webgpu": bool, "webgl": bool}
    """
    return service.probe_capabilities()


@router.get(EndpointPath.ENGINE_INFO.value, response_model=EngineInfo)
async def get_engine_info(service: SentimentService = Depends(get_sentiment_service)):
    """Engine version, active backend and bound device"""
    return service.engine_info()


@router.post(EndpointPath.DIAGNOSTICS.value, response_model=DiagnosticReport)
async def run_diagnostics(service: SentimentService = Depends(get_sentiment_service)):
    """
    Run the diagnostic sequence: environment, model load, warm-up.

    Failures are reported as an error step, never as an HTTP error.
    """
    report = await service.run_diagnostics()
    logger.info(f"Diagnostics finished: {report.status.value}")
    return report
