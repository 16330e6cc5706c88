"""
Secrets and token management for sentibench

SECURITY:
- Tokens are loaded from environment variables or a .env file
- Tokens are NEVER logged or exposed in error messages
"""

import os
from pathlib import Path
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path.cwd() / ".env"


class SecretsManager:
    """Loads API tokens and cache paths from .env and the environment"""

    def __init__(self, env_file: Optional[Union[str, Path]] = None):
        self._env_file = Path(env_file) if env_file else DEFAULT_ENV_FILE
        self._load_secrets()

    def _load_secrets(self):
        """Load secrets from environment variables and .env file"""
        if self._env_file.exists():
            try:
                with open(self._env_file, 'r') as f:
                    for line in f:
                        line = line.strip()
                        if line and not line.startswith('#') and '=' in line:
                            key, value = line.split('=', 1)
                            # Only set if not already in environment
                            if key not in os.environ:
                                os.environ[key] = value.strip()
                logger.info("Loaded secrets from .env file")
            except OSError as e:
                logger.warning(f"Could not load .env file: {e}")

        # GEMINI_API_KEY wins, API_KEY kept for older setups
        self._gemini_key = os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY')
        self._hf_token = os.getenv('HUGGINGFACE_TOKEN')
        self._model_cache_dir = os.getenv('MODEL_CACHE_DIR')

        # Log availability (NOT the actual tokens!)
        logger.debug(f"Gemini key available: {bool(self._gemini_key)}")
        logger.debug(f"HuggingFace token available: {bool(self._hf_token)}")

    @property
    def gemini_key(self) -> Optional[str]:
        """Get Gemini API key"""
        return self._gemini_key

    @property
    def huggingface_token(self) -> Optional[str]:
        """Get HuggingFace API token"""
        return self._hf_token

    @property
    def model_cache_dir(self) -> Optional[str]:
        """Get custom model cache directory"""
        return self._model_cache_dir

    def has_gemini_key(self) -> bool:
        return bool(self._gemini_key)


_secrets: Optional[SecretsManager] = None


def get_secrets() -> SecretsManager:
    """Get the global secrets manager instance"""
    global _secrets
    if _secrets is None:
        _secrets = SecretsManager()
    return _secrets


def reset_secrets() -> None:
    """Drop the cached instance so the next call re-reads the environment"""
    global _secrets
    _secrets = None
