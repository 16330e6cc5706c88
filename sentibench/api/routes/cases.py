"""
Test Case Generation Endpoint
"""

from fastapi import APIRouter, Depends

from sentibench.services.sentiment_service import SentimentService, get_sentiment_service
from ..constants import EndpointPath
from ..types import CaseGenerationRequest, GeneratedCasesResponse

router = APIRouter()


# [ENDPOINT] POST /api/v1/test-cases - Sentences from the LLM
@router.post(EndpointPath.TEST_CASES.value, response_model=GeneratedCasesResponse)
async def generate_test_cases(
    request: CaseGenerationRequest,
    service: SentimentService = Depends(get_sentiment_service),
):
    """
    Generate labelled test sentences.

    Falls back to a fixed list when the LLM is unavailable.
    """
    cases = await service.generate_test_cases(request.topic, request.count)
    return GeneratedCasesResponse(cases=cases)
