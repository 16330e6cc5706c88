"""
Synthetic test sentences from Gemini.

The generator never fails its caller: a missing API key, a network error
or a malformed response all yield the fixed fallback list.
"""

import json
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from sentibench.config import SENTIMENT_CONFIG, SentimentBenchConfig
from sentibench.core.exceptions import ConfigurationMissingError
from sentibench.core.message_types import ExpectedSentiment, SentimentTestCase
from sentibench.core.secrets import get_secrets

logger = logging.getLogger(__name__)


FALLBACK_TEST_CASES: List[SentimentTestCase] = [
    SentimentTestCase(text="The service was absolutely terrible and slow.", expectedSentiment=ExpectedSentiment.NEGATIVE),
    SentimentTestCase(text="I simply love how easy this app is to use!", expectedSentiment=ExpectedSentiment.POSITIVE),
    SentimentTestCase(text="It was okay, nothing special but not bad either.", expectedSentiment=ExpectedSentiment.NEUTRAL),
]

TEST_CASE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "text": types.Schema(
                type=types.Type.STRING,
                description="The English sentence to analyze.",
            ),
            "expectedSentiment": types.Schema(
                type=types.Type.STRING,
                enum=[s.value for s in ExpectedSentiment],
                description="The expected sentiment.",
            ),
        },
        required=["text", "expectedSentiment"],
    ),
)


def build_prompt(topic: str, count: int) -> str:
    return (
        f'Generate {count} English sentences about the topic "{topic}" to test a sentiment analysis model.\n'
        "Include a mix of positive, negative and ambiguous/sarcastic sentiments.\n"
        "Return strictly structured JSON."
    )


def fallback_test_cases() -> List[SentimentTestCase]:
    """Fresh copies of the fallback list"""
    return [case.model_copy() for case in FALLBACK_TEST_CASES]


class GeminiCaseGenerator:
    """
    Generates labelled sentences with the Gemini API.

    Args:
        api_key: Gemini API key (defaults to the secrets manager)
        client: Pre-built genai.Client, mainly for tests
        config: Generator model settings
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
        config: SentimentBenchConfig = SENTIMENT_CONFIG,
    ):
        self._api_key = api_key
        self._client = client
        self._model = config.generator_model

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = self._api_key or get_secrets().gemini_key
            if not api_key:
                raise ConfigurationMissingError(
                    "Gemini API key not found. Set GEMINI_API_KEY in the environment or .env"
                )
            self._client = genai.Client(api_key=api_key)
        return self._client

    async def _request(self, topic: str, count: int) -> List[SentimentTestCase]:
        client = self._get_client()
        response = await client.aio.models.generate_content(
            model=self._model,
            contents=build_prompt(topic, count),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=TEST_CASE_SCHEMA,
            ),
        )

        json_text = response.text
        if not json_text:
            return []

        data = json.loads(json_text)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
        return [SentimentTestCase.model_validate(item) for item in data]

    async def generate_test_cases(self, topic: str, count: int = 3) -> List[SentimentTestCase]:
        """
        Generate test sentences about a topic.

        Args:
            topic: Subject of the sentences
            count: Number of sentences to request

        Returns:
            Generated cases, [] for an empty response, or the fallback list
        """
        try:
            cases = await self._request(topic, count)
            logger.info(f"Generated {len(cases)} test cases for '{topic}'")
            return cases
        except ConfigurationMissingError as e:
            logger.warning(f"{e}; using fallback test cases")
        except Exception as e:
            logger.error(f"Error generating test cases: {e}", exc_info=True)
        return fallback_test_cases()
