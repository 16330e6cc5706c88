"""
Model Load and Classification Endpoints
"""

import logging
from fastapi import APIRouter, Depends, status

from sentibench.core.exceptions import InferenceError, ModelLoadError
from sentibench.core.message_types import SentimentResult
from sentibench.services.sentiment_service import SentimentService, get_sentiment_service
from ..constants import EndpointPath, ErrorCode
from ..types import ClassifyRequest, LoadResponse
from .errors import http_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


# [ENDPOINT] POST /api/v1/load - Load the default (CPU) model
@router.post(EndpointPath.LOAD.value, response_model=LoadResponse)
async def load_default(service: SentimentService = Depends(get_sentiment_service)):
    """
    Load the quantized CPU model if it is not already live.

    Raises:
        HTTPException: 500 if the model cannot be loaded
    """
    try:
        await service.load_default()
    except ModelLoadError as e:
        raise to_http_exception(e)

    return LoadResponse(success=True, message="Model loaded successfully", device=service.device)


# [ENDPOINT] POST /api/v1/classify - Sentiment of a text
@router.post(EndpointPath.CLASSIFY.value, response_model=SentimentResult)
async def classify(request: ClassifyRequest, service: SentimentService = Depends(get_sentiment_service)):
    """
    Classify a text.

    Raises:
        HTTPException: 400 for blank text, 500 on load or inference failure
    """
    if not request.text.strip():
        raise http_error(status.HTTP_400_BAD_REQUEST, ErrorCode.INVALID_REQUEST, "text must not be empty")

    try:
        result = await service.classify(request.text)
    except (ModelLoadError, InferenceError) as e:
        raise to_http_exception(e)

    return result
