"""Generative-service integrations."""

from .gemini_service import FormulaService, GeminiFormulaService

__all__ = ["FormulaService", "GeminiFormulaService"]
