"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formula_hub.core.models import AppSettings, Explanation, Syllabus  # noqa: E402
from formula_hub.core.state import AppState  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def explanation_payload():
    """Explanation JSON exactly as the service returns it (camelCase)."""
    return {
        "formulaName": "Pythagorean Theorem",
        "exactFormula": "a² + b² = c²",
        "intuitiveMeaning": "The squares on the two short sides fill the square on the long side.",
        "whenToUse": "Right-angled triangles when two sides are known.",
        "whenNotToUse": "Triangles without a right angle.",
        "commonMistake": "Adding the sides instead of their squares.",
        "solvedExample": {
            "steps": [
                "Write a = 3 and b = 4.",
                "Square them: 9 and 16.",
                "Add: 9 + 16 = 25.",
                "Take the square root: √25 = 5.",
            ],
            "result": "c = 5",
        },
        "trapQuestion": {
            "question": "If a = 5 and c = 13, is b = 18?",
            "explanation": "No. c is the hypotenuse, so b² = 169 - 25 and b = 12.",
        },
        "memoryTrick": "Two small squares make one big square.",
        "relatedFormulas": ["Distance Formula", "Trigonometric Ratios", "Converse of Pythagoras"],
    }


@pytest.fixture
def syllabus_payload():
    """Syllabus JSON exactly as the service returns it."""
    return {
        "categories": [
            {
                "name": "Algebra",
                "formulas": [
                    "Quadratic Formula",
                    "Difference of Squares",
                    "Slope of a Line",
                    "Linear Equation in Two Variables",
                    "Sum of Roots",
                ],
            },
            {
                "name": "Geometry",
                "formulas": [
                    "Pythagorean Theorem",
                    "Area of a Circle",
                    "Volume of a Cone",
                    "Surface Area of a Sphere",
                    "Distance Formula",
                    "Section Formula",
                ],
            },
        ]
    }


@pytest.fixture
def sample_explanation(explanation_payload):
    return Explanation.model_validate(explanation_payload)


@pytest.fixture
def sample_syllabus(syllabus_payload):
    return Syllabus.model_validate(syllabus_payload)


@pytest.fixture
def explanation_json(explanation_payload):
    return json.dumps(explanation_payload)


@pytest.fixture
def default_settings():
    return AppSettings()


@pytest.fixture
def app_state():
    return AppState(settings=AppSettings(), history_limit=5)


@pytest.fixture
def formula_service(sample_explanation, sample_syllabus):
    """Mock formula service returning the sample records."""
    service = Mock()
    service.fetch_explanation = AsyncMock(return_value=sample_explanation)
    service.fetch_syllabus = AsyncMock(return_value=sample_syllabus)
    return service
