"""
Core: session/settings state and the per-query state machine.

Components:
- models: UserSession, AppSettings, Explanation, Syllabus
- state: AppState, QueryState, RecentTopics
- themes: palette table and color token lookup
- controller: FormulaHubController (actions and reactive fetches)
"""

from .controller import FormulaHubController, default_app_settings
from .errors import ExplanationFetchError, FetchError, FormulaHubError, SyllabusFetchError
from .models import (
    AppSettings,
    Explanation,
    ExplanationDepth,
    Syllabus,
    ThemeType,
    UserSession,
)
from .state import AppState, QueryState, QueryStatus, RecentTopics
from .themes import THEME_PALETTE, ThemeTokens, resolve_theme_tokens

__all__ = [
    "AppSettings",
    "AppState",
    "Explanation",
    "ExplanationDepth",
    "ExplanationFetchError",
    "FetchError",
    "FormulaHubController",
    "FormulaHubError",
    "QueryState",
    "QueryStatus",
    "RecentTopics",
    "Syllabus",
    "SyllabusFetchError",
    "THEME_PALETTE",
    "ThemeTokens",
    "ThemeType",
    "UserSession",
    "default_app_settings",
    "resolve_theme_tokens",
]
