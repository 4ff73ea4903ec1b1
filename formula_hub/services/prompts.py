"""
Prompts for formula explanations and grade syllabi.

The system instruction names the target grade and depth and lists every
field the response must carry. The response schema (see schemas.py)
enforces the same shape on the service side.
"""
from __future__ import annotations

from formula_hub.core.models import AppSettings, ExplanationDepth

# =============================================================================
# Explanation
# =============================================================================

EXPLANATION_SYSTEM_PROMPT = """You are an expert Mathematics Formula Intelligence System for school students.
The current target student is in Grade/Class {grade}.
Explanation depth: {depth}.

Provide a clean, structured JSON response with the following keys:
- formulaName: The common name.
- exactFormula: The mathematical expression in clear text format.
- intuitiveMeaning: A simple, logical explanation of what's happening.
- whenToUse: Contexts where this formula is the primary choice.
- whenNotToUse: Edge cases or similar concepts where it's inappropriate.
- commonMistake: The #1 error students make.
- solvedExample: An object with 'steps' (array of strings) and 'result' (string). Use simple numbers.
- trapQuestion: An object with 'question' and 'explanation' that highlights a misconception.
- memoryTrick: A visual analogy or mnemonic.
- relatedFormulas: Array of names of related concepts.

RULES:
- Use simple, clear language appropriate for Grade {grade}.
- Focus on clarity and visual intuition.
- Do not copy textbook definitions.
- Strictly follow the JSON structure."""

EXPLANATION_USER_TEMPLATE = (
    'Explain the mathematical concept or formula: "{topic}" for a student in Class {grade}.'
)


# =============================================================================
# Syllabus
# =============================================================================

SYLLABUS_SYSTEM_PROMPT = """You are a school mathematics curriculum planner.
List the standard mathematics syllabus for Grade/Class {grade}.

Provide a JSON response with one key:
- categories: Array of objects, each with 'name' (the chapter or strand,
  e.g. "Algebra", "Geometry") and 'formulas' (array of 5-8 formula or
  concept names a student of this grade is expected to know).

RULES:
- Only include topics taught at Grade {grade}.
- Use the names a student would search for.
- Order categories the way they are usually taught.
- Strictly follow the JSON structure."""

SYLLABUS_USER_TEMPLATE = (
    "Give the category-wise list of math formulas in the standard curriculum for Class {grade}."
)


def _depth_label(depth: ExplanationDepth | str) -> str:
    return getattr(depth, "value", depth)


def build_explanation_prompt(topic: str, settings: AppSettings) -> tuple[str, str]:
    """
    Build the (system_instruction, contents) pair for an explanation.

    Args:
        topic: Formula or concept name, passed through verbatim
        settings: Current learner settings

    Returns:
        Tuple of system instruction and user prompt
    """
    system = EXPLANATION_SYSTEM_PROMPT.format(
        grade=settings.grade_level,
        depth=_depth_label(settings.explanation_depth),
    )
    contents = EXPLANATION_USER_TEMPLATE.format(topic=topic, grade=settings.grade_level)
    return system, contents


def build_syllabus_prompt(grade_level: int) -> tuple[str, str]:
    """Build the (system_instruction, contents) pair for a grade syllabus."""
    return (
        SYLLABUS_SYSTEM_PROMPT.format(grade=grade_level),
        SYLLABUS_USER_TEMPLATE.format(grade=grade_level),
    )
