"""
Theme palette.

Each theme maps to three color tokens (start/mid/end of the accent
gradient). The view reads the tokens from AppState, never the table.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from .models import ThemeType


@dataclass(frozen=True)
class ThemeTokens:
    """Derived color tokens for the active theme."""

    primary_start: str
    primary_mid: str
    primary_end: str

    def as_dict(self) -> dict[str, str]:
        return {
            "primary_start": self.primary_start,
            "primary_mid": self.primary_mid,
            "primary_end": self.primary_end,
        }


THEME_PALETTE: dict[ThemeType, ThemeTokens] = {
    ThemeType.INDIGO: ThemeTokens("#6366f1", "#a855f7", "#ec4899"),
    ThemeType.EMERALD: ThemeTokens("#10b981", "#0ea5e9", "#3b82f6"),
    ThemeType.AMBER: ThemeTokens("#f59e0b", "#f97316", "#ef4444"),
    ThemeType.CYAN: ThemeTokens("#06b6d4", "#0891b2", "#4f46e5"),
}

DEFAULT_THEME = ThemeType.INDIGO


def resolve_theme_tokens(theme: ThemeType | str) -> ThemeTokens:
    """
    Look up the color tokens for a theme.

    Unknown values fall back to the default palette instead of failing.

    Args:
        theme: ThemeType member or its string value

    Returns:
        ThemeTokens for the theme
    """
    try:
        key = ThemeType(theme)
    except ValueError:
        logger.warning(f"Unknown theme {theme!r}, using {DEFAULT_THEME.value}")
        key = DEFAULT_THEME
    return THEME_PALETTE[key]
