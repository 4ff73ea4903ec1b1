"""
Domain records for the formula hub.

Session and settings are plain frozen dataclasses owned by AppState.
Explanation and Syllabus mirror the JSON the generative service returns
and are validated with Pydantic on the way in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

MIN_GRADE = 7
MAX_GRADE = 12
GRADE_LEVELS = tuple(range(MIN_GRADE, MAX_GRADE + 1))


class ExplanationDepth(str, Enum):
    """How much detail an explanation should carry."""

    SIMPLE = "simple"
    COMPREHENSIVE = "comprehensive"


class ThemeType(str, Enum):
    """Visual theme names with a palette entry."""

    INDIGO = "indigo"
    EMERALD = "emerald"
    AMBER = "amber"
    CYAN = "cyan"


@dataclass(frozen=True)
class UserSession:
    """Logged-in learner. Name and flag are always set together."""

    name: str = ""
    is_logged_in: bool = False


@dataclass(frozen=True)
class AppSettings:
    """Learner preferences read by every request."""

    grade_level: int = 9
    explanation_depth: ExplanationDepth = ExplanationDepth.SIMPLE
    theme: ThemeType = ThemeType.INDIGO
    enable_thinking: bool = True
    enable_voice: bool = False


# =============================================================================
# Upstream response records
# =============================================================================


class _WireModel(BaseModel):
    """Immutable record parsed from camelCase service JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class SolvedExample(_WireModel):
    steps: list[str]
    result: str


class TrapQuestion(_WireModel):
    question: str
    explanation: str


class Explanation(_WireModel):
    """Structured explanation of one formula for a given grade and depth."""

    formula_name: str
    exact_formula: str
    intuitive_meaning: str
    when_to_use: str
    when_not_to_use: str
    common_mistake: str
    solved_example: SolvedExample
    trap_question: TrapQuestion
    memory_trick: str
    related_formulas: list[str]


class SyllabusCategory(_WireModel):
    name: str
    formulas: list[str]


class Syllabus(_WireModel):
    """Curriculum categories for one grade, in the order the service gave them."""

    categories: list[SyllabusCategory]

    @property
    def formula_count(self) -> int:
        return sum(len(category.formulas) for category in self.categories)
