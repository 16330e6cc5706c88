"""
Unit tests for the Gemini test case generator
"""

import json

import pytest

from sentibench.core.message_types import ExpectedSentiment, SentimentTestCase
from sentibench.core.secrets import reset_secrets
from sentibench.services.case_generator import (
    FALLBACK_TEST_CASES,
    GeminiCaseGenerator,
    build_prompt,
)


class TestGeminiCaseGenerator:
    """Tests for GeminiCaseGenerator"""

    @pytest.mark.asyncio
    async def test_parses_structured_response(self, config, genai_client):
        """Test a JSON array becomes SentimentTestCase items"""
        # Arrange
        payload = [
            {"text": "Battery life is superb.", "expectedSentiment": "POSITIVE"},
            {"text": "Oh great, it broke again.", "expectedSentiment": "NEGATIVE"},
        ]
        client = genai_client(text=json.dumps(payload))
        generator = GeminiCaseGenerator(client=client, config=config)

        # Act
        cases = await generator.generate_test_cases("gadgets", 2)

        # Assert
        assert cases == [
            SentimentTestCase(text="Battery life is superb.", expectedSentiment=ExpectedSentiment.POSITIVE),
            SentimentTestCase(text="Oh great, it broke again.", expectedSentiment=ExpectedSentiment.NEGATIVE),
        ]
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == config.generator_model
        assert kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_error_returns_fallback_verbatim(self, config, genai_client):
        """Test any client error yields the fixed three-item list"""
        # Arrange
        generator = GeminiCaseGenerator(client=genai_client(error=TimeoutError("network down")), config=config)

        # Act
        cases = await generator.generate_test_cases("gadgets", 3)

        # Assert
        assert cases == FALLBACK_TEST_CASES
        assert [c.text for c in cases] == [
            "The service was absolutely terrible and slow.",
            "I simply love how easy this app is to use!",
            "It was okay, nothing special but not bad either.",
        ]

    @pytest.mark.asyncio
    async def test_fallback_is_a_copy(self, config, genai_client):
        """Test callers cannot mutate the module-level fallback list"""
        # Arrange
        generator = GeminiCaseGenerator(client=genai_client(error=RuntimeError("boom")), config=config)

        # Act
        cases = await generator.generate_test_cases("gadgets")
        cases.clear()

        # Assert
        assert len(FALLBACK_TEST_CASES) == 3

    @pytest.mark.asyncio
    async def test_empty_response_returns_empty_list(self, config, genai_client):
        """Test empty response text yields []"""
        # Arrange
        generator = GeminiCaseGenerator(client=genai_client(text=""), config=config)

        # Act
        cases = await generator.generate_test_cases("gadgets")

        # Assert
        assert cases == []

    @pytest.mark.asyncio
    async def test_malformed_response_returns_fallback(self, config, genai_client):
        """Test a non-array JSON body falls back"""
        # Arrange
        generator = GeminiCaseGenerator(client=genai_client(text='{"text": "x"}'), config=config)

        # Act
        cases = await generator.generate_test_cases("gadgets")

        # Assert
        assert cases == FALLBACK_TEST_CASES

    @pytest.mark.asyncio
    async def test_missing_key_returns_fallback(self, config, monkeypatch, tmp_path):
        """Test a missing credential falls back without calling the API"""
        # Arrange
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("sentibench.core.secrets.DEFAULT_ENV_FILE", tmp_path / ".env")
        reset_secrets()
        generator = GeminiCaseGenerator(config=config)

        # Act
        cases = await generator.generate_test_cases("gadgets")

        # Assert
        assert cases == FALLBACK_TEST_CASES
        reset_secrets()

    def test_prompt_mentions_topic_and_count(self):
        """Test the prompt carries topic and count"""
        # Act
        prompt = build_prompt("coffee makers", 5)

        # Assert
        assert "coffee makers" in prompt
        assert "Generate 5" in prompt
