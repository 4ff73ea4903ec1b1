"""
Unit tests for the explanation and syllabus records.
"""

import pytest
from pydantic import ValidationError

from formula_hub.core.models import (
    AppSettings,
    Explanation,
    ExplanationDepth,
    Syllabus,
    ThemeType,
    UserSession,
)


class TestExplanation:
    """Parsing service JSON into Explanation."""

    def test_parses_camel_case_payload(self, explanation_json):
        explanation = Explanation.model_validate_json(explanation_json)

        assert explanation.formula_name == "Pythagorean Theorem"
        assert explanation.exact_formula == "a² + b² = c²"
        assert explanation.when_not_to_use == "Triangles without a right angle."
        assert explanation.trap_question.question.startswith("If a = 5")
        assert explanation.solved_example.result == "c = 5"
        assert explanation.memory_trick == "Two small squares make one big square."

    def test_steps_keep_order(self, explanation_payload):
        explanation = Explanation.model_validate(explanation_payload)

        assert explanation.solved_example.steps == explanation_payload["solvedExample"]["steps"]
        assert explanation.related_formulas == [
            "Distance Formula",
            "Trigonometric Ratios",
            "Converse of Pythagoras",
        ]

    @pytest.mark.parametrize(
        "missing",
        ["formulaName", "commonMistake", "solvedExample", "trapQuestion", "relatedFormulas"],
    )
    def test_missing_field_is_rejected(self, explanation_payload, missing):
        del explanation_payload[missing]

        with pytest.raises(ValidationError):
            Explanation.model_validate(explanation_payload)

    def test_missing_nested_field_is_rejected(self, explanation_payload):
        del explanation_payload["solvedExample"]["result"]

        with pytest.raises(ValidationError):
            Explanation.model_validate(explanation_payload)

    def test_null_field_is_rejected(self, explanation_payload):
        explanation_payload["memoryTrick"] = None

        with pytest.raises(ValidationError):
            Explanation.model_validate(explanation_payload)

    def test_non_json_is_rejected(self):
        with pytest.raises(ValidationError):
            Explanation.model_validate_json("Sorry, I can't help with that.")

    def test_is_immutable(self, sample_explanation):
        with pytest.raises(ValidationError):
            sample_explanation.formula_name = "Changed"


class TestSyllabus:
    def test_categories_keep_order(self, syllabus_payload):
        syllabus = Syllabus.model_validate(syllabus_payload)

        assert [c.name for c in syllabus.categories] == ["Algebra", "Geometry"]
        assert syllabus.categories[1].formulas[0] == "Pythagorean Theorem"
        assert syllabus.formula_count == 11

    def test_formula_count_not_enforced(self):
        syllabus = Syllabus.model_validate(
            {"categories": [{"name": "Statistics", "formulas": ["Mean"]}]}
        )

        assert syllabus.formula_count == 1

    def test_missing_categories_rejected(self):
        with pytest.raises(ValidationError):
            Syllabus.model_validate({"chapters": []})


class TestDefaults:
    def test_settings_defaults(self):
        settings = AppSettings()

        assert settings.grade_level == 9
        assert settings.explanation_depth == ExplanationDepth.SIMPLE
        assert settings.theme == ThemeType.INDIGO
        assert settings.enable_thinking is True
        assert settings.enable_voice is False

    def test_session_starts_logged_out(self):
        session = UserSession()

        assert session.name == ""
        assert session.is_logged_in is False
