"""Errors surfaced by the formula fetchers."""

from __future__ import annotations

EXPLANATION_ERROR_MESSAGE = (
    "Could not fetch explanation. Please check your internet or try a different topic."
)
SYLLABUS_ERROR_MESSAGE = "Could not load the syllabus for this grade. Please try again."


class FormulaHubError(Exception):
    """Base error for the formula hub."""


class FetchError(FormulaHubError):
    """A single-attempt call to the generative service failed."""

    user_message = "Request failed."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.user_message)
        self.detail = detail


class ExplanationFetchError(FetchError):
    user_message = EXPLANATION_ERROR_MESSAGE


class SyllabusFetchError(FetchError):
    user_message = SYLLABUS_ERROR_MESSAGE
