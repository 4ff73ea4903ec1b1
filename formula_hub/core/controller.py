"""
Formula Hub Controller: routes learner actions into state and fetches.

The controller owns the AppState and the formula service. Reactive effects
are wired as explicit settings subscriptions:

- grade_level -> clear the shown explanation, refetch the syllabus
- theme       -> re-derive color tokens (registered by AppState itself)

Reactive fetches run as tasks on the current event loop; settle() waits
for all of them.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Coroutine

from loguru import logger

from config import get_settings

from .errors import FetchError
from .models import AppSettings, Explanation, ExplanationDepth, Syllabus, ThemeType
from .state import AppState

if TYPE_CHECKING:
    from formula_hub.services.gemini_service import FormulaService


def default_app_settings() -> AppSettings:
    """Initial learner settings from configuration."""
    config = get_settings()
    return AppSettings(
        grade_level=config.default_grade_level,
        explanation_depth=ExplanationDepth(config.default_explanation_depth),
        theme=ThemeType(config.default_theme),
        enable_thinking=config.default_enable_thinking,
        enable_voice=config.default_enable_voice,
    )


class FormulaHubController:
    """Single owner of dashboard state for one learner session."""

    def __init__(self, service: FormulaService, state: AppState | None = None):
        self.service = service
        if state is None:
            state = AppState(
                settings=default_app_settings(),
                history_limit=get_settings().history_limit,
            )
        self.state = state
        self._pending: set[asyncio.Task] = set()

        self.state.subscribe("grade_level", self._on_grade_changed)

    # =========================================================================
    # Session & settings
    # =========================================================================

    def login(self, name: str) -> bool:
        return self.state.login(name)

    def update_settings(self, new_settings: AppSettings) -> list[str]:
        """Replace settings; reactive fetches are scheduled, not awaited."""
        return self.state.update_settings(new_settings)

    def _on_grade_changed(self, previous: AppSettings, current: AppSettings) -> None:
        logger.info(f"Grade changed {previous.grade_level} -> {current.grade_level}")
        self.state.explanation.clear()
        self._schedule(self.refresh_syllabus(current.grade_level))

    def _schedule(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def settle(self) -> None:
        """Wait until every scheduled reactive fetch has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # =========================================================================
    # Queries
    # =========================================================================

    async def open_dashboard(self) -> Syllabus | None:
        """Load the syllabus for the current grade when the dashboard opens."""
        return await self.refresh_syllabus()

    async def search(self, topic: str) -> Explanation | None:
        """
        Fetch an explanation for a topic and record it in history on success.

        Blank topics are ignored. Failures land in state.explanation.error.

        Returns:
            The new Explanation, or None on failure, blank input or a stale response
        """
        if not topic or not topic.strip():
            return None

        query = self.state.explanation
        generation = query.begin()
        settings = self.state.settings

        try:
            explanation = await self.service.fetch_explanation(topic, settings)
        except FetchError as e:
            logger.warning(f"Explanation unavailable for {topic!r}: {e}")
            query.fail(generation, e.user_message)
            return None

        if not query.resolve(generation, explanation):
            return None
        self.state.history.add(topic)
        return explanation

    async def refresh_syllabus(self, grade_level: int | None = None) -> Syllabus | None:
        """
        Fetch the syllabus for a grade (defaults to the current one).

        On success the displayed explanation is cleared, since it may
        belong to another grade.
        """
        grade = grade_level if grade_level is not None else self.state.settings.grade_level
        query = self.state.syllabus
        generation = query.begin()

        try:
            syllabus = await self.service.fetch_syllabus(grade)
        except FetchError as e:
            logger.warning(f"Syllabus unavailable for grade {grade}: {e}")
            query.fail(generation, e.user_message)
            return None

        if not query.resolve(generation, syllabus):
            return None
        self.state.explanation.clear()
        return syllabus
