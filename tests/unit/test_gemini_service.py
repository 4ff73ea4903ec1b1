"""
Unit tests for the Gemini formula service.

The genai client is replaced with a mock; no network calls are made.
"""

import asyncio
import json
from dataclasses import replace
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from google.genai import errors as genai_errors

from formula_hub.core.errors import (
    EXPLANATION_ERROR_MESSAGE,
    ExplanationFetchError,
    SyllabusFetchError,
)
from formula_hub.core.models import AppSettings, ExplanationDepth
from formula_hub.services.gemini_service import GeminiFormulaService
from formula_hub.services.schemas import EXPLANATION_SCHEMA, SYLLABUS_SCHEMA


def make_client(text=None, side_effect=None):
    """Mock genai.Client whose async generate_content returns `text`."""
    client = Mock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text),
        side_effect=side_effect,
    )
    return client


def make_service(client):
    return GeminiFormulaService(
        api_key="test-key",
        model_name="gemini-test",
        thinking_budget=16000,
        client=client,
    )


def sent_config(client):
    return client.aio.models.generate_content.await_args.kwargs["config"]


# ============================================================================
# Explanation
# ============================================================================


class TestFetchExplanation:
    @pytest.mark.asyncio
    async def test_returns_all_fields(self, explanation_json):
        service = make_service(make_client(text=explanation_json))

        explanation = await service.fetch_explanation("Pythagoras", AppSettings())

        dumped = explanation.model_dump()
        assert len(dumped) == 10
        assert all(value for value in dumped.values())
        assert explanation.solved_example.steps == [
            "Write a = 3 and b = 4.",
            "Square them: 9 and 16.",
            "Add: 9 + 16 = 25.",
            "Take the square root: √25 = 5.",
        ]

    @pytest.mark.asyncio
    async def test_request_embeds_topic_grade_and_depth(self, explanation_json):
        client = make_client(text=explanation_json)
        service = make_service(client)
        settings = AppSettings(grade_level=10, explanation_depth=ExplanationDepth.COMPREHENSIVE)

        await service.fetch_explanation("Volume of a Cone", settings)

        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert '"Volume of a Cone"' in kwargs["contents"]
        assert "Class 10" in kwargs["contents"]

        config = kwargs["config"]
        assert "Grade/Class 10" in config.system_instruction
        assert "Explanation depth: comprehensive" in config.system_instruction
        assert config.response_mime_type == "application/json"
        assert config.response_schema == EXPLANATION_SCHEMA

    @pytest.mark.asyncio
    async def test_thinking_budget_when_enabled(self, explanation_json):
        client = make_client(text=explanation_json)

        await make_service(client).fetch_explanation("Slope", AppSettings(enable_thinking=True))

        assert sent_config(client).thinking_config.thinking_budget == 16000

    @pytest.mark.asyncio
    async def test_thinking_budget_zero_when_disabled(self, explanation_json):
        client = make_client(text=explanation_json)

        await make_service(client).fetch_explanation("Slope", AppSettings(enable_thinking=False))

        assert sent_config(client).thinking_config.thinking_budget == 0

    @pytest.mark.asyncio
    async def test_transport_error_collapses(self):
        service = make_service(make_client(side_effect=httpx.ConnectError("offline")))

        with pytest.raises(ExplanationFetchError) as exc_info:
            await service.fetch_explanation("Slope", AppSettings())

        assert exc_info.value.user_message == EXPLANATION_ERROR_MESSAGE
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [ConnectionRefusedError("refused"), asyncio.TimeoutError(), OSError("network unreachable")],
    )
    async def test_non_httpx_transport_error_collapses(self, error):
        service = make_service(make_client(side_effect=error))

        with pytest.raises(ExplanationFetchError) as exc_info:
            await service.fetch_explanation("Slope", AppSettings())

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_api_error_collapses(self):
        error = genai_errors.ClientError(
            400, {"error": {"code": 400, "message": "API key not valid", "status": "INVALID_ARGUMENT"}}
        )
        service = make_service(make_client(side_effect=error))

        with pytest.raises(ExplanationFetchError):
            await service.fetch_explanation("Slope", AppSettings())

    @pytest.mark.asyncio
    async def test_non_json_collapses(self):
        service = make_service(make_client(text="Here is your formula!"))

        with pytest.raises(ExplanationFetchError):
            await service.fetch_explanation("Slope", AppSettings())

    @pytest.mark.asyncio
    async def test_missing_key_collapses(self, explanation_payload):
        del explanation_payload["memoryTrick"]
        service = make_service(make_client(text=json.dumps(explanation_payload)))

        with pytest.raises(ExplanationFetchError):
            await service.fetch_explanation("Slope", AppSettings())

    @pytest.mark.asyncio
    async def test_empty_response_collapses(self):
        service = make_service(make_client(text=None))

        with pytest.raises(ExplanationFetchError):
            await service.fetch_explanation("Slope", AppSettings())

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        client = make_client(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(ExplanationFetchError):
            await make_service(client).fetch_explanation("Slope", AppSettings())

        assert client.aio.models.generate_content.await_count == 1


# ============================================================================
# Syllabus
# ============================================================================


class TestFetchSyllabus:
    @pytest.mark.asyncio
    async def test_returns_categories(self, syllabus_payload):
        client = make_client(text=json.dumps(syllabus_payload))

        syllabus = await make_service(client).fetch_syllabus(8)

        assert [c.name for c in syllabus.categories] == ["Algebra", "Geometry"]
        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert "Class 8" in kwargs["contents"]
        assert "Grade/Class 8" in kwargs["config"].system_instruction
        assert kwargs["config"].response_schema == SYLLABUS_SCHEMA

    @pytest.mark.asyncio
    async def test_failure_collapses(self):
        service = make_service(make_client(side_effect=httpx.ConnectError("offline")))

        with pytest.raises(SyllabusFetchError):
            await service.fetch_syllabus(11)

    @pytest.mark.asyncio
    async def test_connection_refused_collapses(self):
        service = make_service(make_client(side_effect=ConnectionRefusedError("refused")))

        with pytest.raises(SyllabusFetchError):
            await service.fetch_syllabus(11)

    @pytest.mark.asyncio
    async def test_wrong_shape_collapses(self):
        service = make_service(make_client(text=json.dumps({"categories": [{"name": "Algebra"}]})))

        with pytest.raises(SyllabusFetchError):
            await service.fetch_syllabus(11)


# ============================================================================
# Client creation
# ============================================================================


class TestClientCreation:
    @pytest.mark.asyncio
    async def test_client_created_lazily_with_key(self, explanation_json):
        fake = make_client(text=explanation_json)
        with patch("formula_hub.services.gemini_service.genai.Client", return_value=fake) as factory:
            service = GeminiFormulaService(api_key="abc", model_name="m", thinking_budget=1)
            factory.assert_not_called()

            await service.fetch_explanation("Slope", AppSettings())
            await service.fetch_explanation("Mean", replace(AppSettings(), grade_level=7))

        factory.assert_called_once_with(api_key="abc")

    @pytest.mark.asyncio
    async def test_empty_key_passed_through(self, explanation_json):
        fake = make_client(text=explanation_json)
        with patch("formula_hub.services.gemini_service.genai.Client", return_value=fake) as factory:
            await GeminiFormulaService(api_key="").fetch_explanation("Slope", AppSettings())

        factory.assert_called_once_with(api_key="")

    @pytest.mark.asyncio
    async def test_client_rejecting_key_collapses(self):
        with patch(
            "formula_hub.services.gemini_service.genai.Client",
            side_effect=ValueError("Missing key inputs argument!"),
        ):
            with pytest.raises(ExplanationFetchError):
                await GeminiFormulaService(api_key="").fetch_explanation("Slope", AppSettings())
