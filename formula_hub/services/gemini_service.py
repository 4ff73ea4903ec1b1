"""
Gemini Formula Service: explanation and syllabus fetchers.

Both fetchers make exactly one schema-constrained call and either return a
validated record or raise a single fetch error. There is no retry, no
partial result and no repair of malformed JSON.
"""

from __future__ import annotations

from typing import Any, Protocol

from google import genai
from google.genai import types
from loguru import logger

from config import get_settings
from formula_hub.core.errors import ExplanationFetchError, SyllabusFetchError
from formula_hub.core.models import AppSettings, Explanation, Syllabus

from .prompts import build_explanation_prompt, build_syllabus_prompt
from .schemas import EXPLANATION_SCHEMA, SYLLABUS_SCHEMA


class FormulaService(Protocol):
    """Anything that can produce explanations and syllabi."""

    async def fetch_explanation(self, topic: str, settings: AppSettings) -> Explanation:
        ...

    async def fetch_syllabus(self, grade_level: int) -> Syllabus:
        ...


class GeminiFormulaService:
    """
    Formula service backed by the Gemini API.

    The client is created on first use so the API key is read at call time.
    An empty key is passed through unchanged and rejected upstream.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        thinking_budget: int | None = None,
        client: Any | None = None,
    ):
        """
        Initialize the service.

        Args:
            api_key: Gemini API key (uses GEMINI_API_KEY / API_KEY if not provided)
            model_name: Model to use for generation
            thinking_budget: Budget sent when deep reasoning is enabled
            client: Preconfigured genai.Client (mainly for tests)
        """
        settings = get_settings()
        self._api_key = api_key
        self.model_name = model_name or settings.ai_model
        self.thinking_budget = (
            thinking_budget if thinking_budget is not None else settings.thinking_budget
        )
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = self._api_key if self._api_key is not None else get_settings().gemini_api_key
            self._client = genai.Client(api_key=api_key or "")
        return self._client

    async def _generate(
        self,
        contents: str,
        system_instruction: str,
        response_schema: types.Schema,
        thinking_budget: int,
    ) -> str:
        """Run one generate_content call and return the raw response text."""
        client = self._get_client()
        response = await client.aio.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                thinking_config=types.ThinkingConfig(thinking_budget=thinking_budget),
                response_mime_type="application/json",
                response_schema=response_schema,
            ),
        )
        text = response.text
        if not text:
            raise ValueError("Empty response from model")
        return text

    async def fetch_explanation(self, topic: str, settings: AppSettings) -> Explanation:
        """
        Fetch a structured explanation for a topic.

        Args:
            topic: Formula or concept to explain
            settings: Learner settings (grade, depth, thinking flag)

        Returns:
            Validated Explanation

        Raises:
            ExplanationFetchError: On any transport, parse or schema failure
        """
        system, contents = build_explanation_prompt(topic, settings)
        budget = self.thinking_budget if settings.enable_thinking else 0

        logger.debug(
            f"Explanation request: topic={topic!r} grade={settings.grade_level} budget={budget}"
        )
        try:
            text = await self._generate(contents, system, EXPLANATION_SCHEMA, budget)
            explanation = Explanation.model_validate_json(text)
        except Exception as e:
            logger.error(f"Explanation fetch failed for {topic!r}: {e}")
            raise ExplanationFetchError(str(e)) from e

        logger.info(f"Explanation ready: {explanation.formula_name}")
        return explanation

    async def fetch_syllabus(self, grade_level: int) -> Syllabus:
        """
        Fetch the category-wise formula list for a grade.

        Raises:
            SyllabusFetchError: On any transport, parse or schema failure
        """
        system, contents = build_syllabus_prompt(grade_level)

        logger.debug(f"Syllabus request: grade={grade_level}")
        try:
            text = await self._generate(contents, system, SYLLABUS_SCHEMA, 0)
            syllabus = Syllabus.model_validate_json(text)
        except Exception as e:
            logger.error(f"Syllabus fetch failed for grade {grade_level}: {e}")
            raise SyllabusFetchError(str(e)) from e

        logger.info(
            f"Syllabus ready for grade {grade_level}: "
            f"{len(syllabus.categories)} categories, {syllabus.formula_count} formulas"
        )
        return syllabus
