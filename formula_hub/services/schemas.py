"""
Response schemas sent to Gemini.

Field names are the camelCase wire names; every property is required.
"""
from __future__ import annotations

from google.genai import types

_STRING = types.Schema(type=types.Type.STRING)
_STRING_LIST = types.Schema(type=types.Type.ARRAY, items=_STRING)

EXPLANATION_FIELDS = [
    "formulaName",
    "exactFormula",
    "intuitiveMeaning",
    "whenToUse",
    "whenNotToUse",
    "commonMistake",
    "solvedExample",
    "trapQuestion",
    "memoryTrick",
    "relatedFormulas",
]

EXPLANATION_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "formulaName": _STRING,
        "exactFormula": _STRING,
        "intuitiveMeaning": _STRING,
        "whenToUse": _STRING,
        "whenNotToUse": _STRING,
        "commonMistake": _STRING,
        "solvedExample": types.Schema(
            type=types.Type.OBJECT,
            properties={"steps": _STRING_LIST, "result": _STRING},
            required=["steps", "result"],
        ),
        "trapQuestion": types.Schema(
            type=types.Type.OBJECT,
            properties={"question": _STRING, "explanation": _STRING},
            required=["question", "explanation"],
        ),
        "memoryTrick": _STRING,
        "relatedFormulas": _STRING_LIST,
    },
    required=EXPLANATION_FIELDS,
)

SYLLABUS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "categories": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={"name": _STRING, "formulas": _STRING_LIST},
                required=["name", "formulas"],
            ),
        ),
    },
    required=["categories"],
)
