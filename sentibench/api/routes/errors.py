"""
Mapping of core errors to HTTP responses.
"""

import logging
from typing import Union

from fastapi import HTTPException, status

from sentibench.core.exceptions import InferenceError, ModelLoadError
from ..constants import ErrorCode

logger = logging.getLogger(__name__)


def http_error(status_code: int, code: ErrorCode, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "message": message,
                "type": code.value,
            }
        },
    )


def to_http_exception(error: Union[ModelLoadError, InferenceError]) -> HTTPException:
    """Translate a load or inference failure into a 500 response"""
    code = ErrorCode.MODEL_LOAD_FAILED if isinstance(error, ModelLoadError) else ErrorCode.INFERENCE_FAILED
    logger.error(f"Request failed: {error}")
    return http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, code, str(error))
