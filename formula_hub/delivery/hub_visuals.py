"""
Formula Hub Visual Components.

Rich renderables for the dashboard. Accent colors come from the active
theme tokens (start/mid/end) so a theme switch recolors every panel.
"""

from __future__ import annotations

from rich import box
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from formula_hub.core.models import AppSettings, Explanation, Syllabus
from formula_hub.core.state import AppState, QueryStatus
from formula_hub.core.themes import THEME_PALETTE, ThemeTokens

# =============================================================================
# Fixed colors (status, not theme)
# =============================================================================

HUB_COLORS = {
    "success": "#4ade80",
    "danger": "#f87171",
    "warning": "#facc15",
    "muted": "#64748b",
    "text": "#cbd5e1",
    "code": "#f472b6",
}

LOADING_MESSAGE = "Gathering mathematical intelligence..."
IDLE_MESSAGE = "Enter a math topic to begin your intuitive journey."


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


# =============================================================================
# Header & status
# =============================================================================


def render_header(state: AppState) -> Panel:
    """Title bar: learner name, grade and depth."""
    tokens = state.theme_tokens
    settings = state.settings

    title = Text("Math Formula Hub", style=Style(color=tokens.primary_start, bold=True))
    subtitle = Text(
        f"Class {settings.grade_level} Logic • {_value(settings.explanation_depth).upper()} Style",
        style=HUB_COLORS["muted"],
    )
    body = Group(title, subtitle)
    return Panel(
        body,
        title=f"[bold {tokens.primary_mid}]{state.session.name or 'Guest'}[/]",
        title_align="right",
        border_style=tokens.primary_end,
        box=box.ROUNDED,
    )


def render_error(message: str) -> Panel:
    return Panel(
        Text(message, style=HUB_COLORS["danger"]),
        border_style=HUB_COLORS["danger"],
        box=box.ROUNDED,
    )


def render_status(message: str, tokens: ThemeTokens) -> Text:
    return Text(message, style=Style(color=tokens.primary_mid, italic=True))


def render_history(history: list[str], tokens: ThemeTokens) -> Text:
    """Recent topics as an indexed chip row (for :recent N)."""
    text = Text("Recent: ", style=HUB_COLORS["muted"])
    for idx, topic in enumerate(history, 1):
        text.append(f"[{idx}] ", style=Style(color=tokens.primary_start))
        text.append(topic, style=HUB_COLORS["text"])
        if idx < len(history):
            text.append("  ")
    return text


# =============================================================================
# Explanation card
# =============================================================================


def render_explanation(
    explanation: Explanation,
    tokens: ThemeTokens,
    enable_voice: bool = False,
) -> Group:
    """
    Render the full formula card.

    Layout mirrors the dashboard: primary card (name, formula, intuition,
    when/when-not), solved example, then the trap question, common mistake,
    memory trick and related formulas.

    Args:
        explanation: Validated explanation record
        tokens: Active theme tokens
        enable_voice: Show the read-aloud marker on the solved example

    Returns:
        Group of panels ready for console.print
    """
    primary = Group(
        Text(explanation.formula_name, style=Style(color="white", bold=True)),
        Text(explanation.exact_formula, style=Style(color=HUB_COLORS["code"], bold=True)),
        Text(""),
        Text("Intuitive meaning", style=Style(color=tokens.primary_mid, bold=True)),
        Text(explanation.intuitive_meaning, style=HUB_COLORS["text"]),
    )

    usage = Table.grid(padding=(0, 2), expand=True)
    usage.add_column(ratio=1)
    usage.add_column(ratio=1)
    usage.add_row(
        Text("WHEN TO USE", style=Style(color=HUB_COLORS["success"], bold=True)),
        Text("WHEN NOT TO USE", style=Style(color=HUB_COLORS["danger"], bold=True)),
    )
    usage.add_row(
        Text(explanation.when_to_use, style=HUB_COLORS["text"]),
        Text(explanation.when_not_to_use, style=HUB_COLORS["text"]),
    )

    primary_card = Panel(
        Group(primary, Text(""), usage),
        border_style=tokens.primary_start,
        box=box.HEAVY,
    )

    steps = Table.grid(padding=(0, 1))
    steps.add_column(justify="right", style=Style(color=tokens.primary_start, bold=True))
    steps.add_column(style=HUB_COLORS["text"])
    for idx, step in enumerate(explanation.solved_example.steps, 1):
        steps.add_row(f"{idx}.", step)

    example_title = "Solved Example"
    if enable_voice:
        example_title += "  🔊"
    example_card = Panel(
        Group(
            steps,
            Text(""),
            Text(f"Result: {explanation.solved_example.result}", style=Style(color="white", bold=True)),
        ),
        title=f"[bold {tokens.primary_mid}]{example_title}[/]",
        title_align="left",
        border_style=tokens.primary_mid,
    )

    trap_card = Panel(
        Group(
            Text(f'"{explanation.trap_question.question}"', style=Style(italic=True)),
            Text(""),
            Text(explanation.trap_question.explanation, style=HUB_COLORS["text"]),
        ),
        title="[bold]Trap Question[/]",
        border_style=HUB_COLORS["warning"],
    )
    mistake_card = Panel(
        Text(explanation.common_mistake, style=HUB_COLORS["text"]),
        title="[bold]Common Mistake[/]",
        border_style=HUB_COLORS["danger"],
    )
    trick_card = Panel(
        Text(explanation.memory_trick, style=HUB_COLORS["text"]),
        title="[bold]Memory Trick[/]",
        border_style=tokens.primary_end,
    )

    related = Text()
    for idx, formula in enumerate(explanation.related_formulas, 1):
        related.append(f"[{idx}] ", style=Style(color=tokens.primary_start))
        related.append(formula)
        if idx < len(explanation.related_formulas):
            related.append("   ")
    related_card = Panel(
        related,
        title="[bold]Related Topics[/]",
        subtitle="[dim]:related N[/]",
        border_style=tokens.primary_end,
    )

    return Group(
        primary_card,
        example_card,
        Columns([trap_card, mistake_card], expand=True, equal=True),
        trick_card,
        related_card,
    )


# =============================================================================
# Syllabus, settings, themes
# =============================================================================


def render_syllabus(syllabus: Syllabus, grade_level: int, tokens: ThemeTokens) -> Table:
    """Category-by-category formula table for one grade."""
    table = Table(
        title=f"Class {grade_level} Syllabus",
        title_style=Style(color=tokens.primary_start, bold=True),
        border_style=tokens.primary_end,
        box=box.SIMPLE_HEAVY,
        show_lines=True,
    )
    table.add_column("Category", style=Style(color=tokens.primary_mid, bold=True), no_wrap=True)
    table.add_column("Formulas", style=HUB_COLORS["text"])

    for category in syllabus.categories:
        table.add_row(category.name, ", ".join(category.formulas))
    return table


def render_settings(settings: AppSettings, tokens: ThemeTokens) -> Table:
    """System controls panel as a two-column table."""
    table = Table(
        title="System Controls",
        title_style=Style(color=tokens.primary_start, bold=True),
        border_style=tokens.primary_end,
        box=box.ROUNDED,
        show_header=False,
    )
    table.add_column("Setting", style=HUB_COLORS["muted"])
    table.add_column("Value", style="white")

    table.add_row("Grade", f"Class {settings.grade_level}")
    table.add_row("Depth", _value(settings.explanation_depth))
    table.add_row("Theme", _value(settings.theme))
    table.add_row("Deep reasoning", "on" if settings.enable_thinking else "off")
    table.add_row("Voice guidance", "on" if settings.enable_voice else "off")
    return table


def render_theme_table() -> Table:
    """All palette entries with swatches."""
    table = Table(title="Themes", box=box.SIMPLE)
    table.add_column("Theme", style="bold")
    table.add_column("Start")
    table.add_column("Mid")
    table.add_column("End")

    for theme, tokens in THEME_PALETTE.items():
        table.add_row(
            theme.value,
            Text(f"██ {tokens.primary_start}", style=tokens.primary_start),
            Text(f"██ {tokens.primary_mid}", style=tokens.primary_mid),
            Text(f"██ {tokens.primary_end}", style=tokens.primary_end),
        )
    return table


# =============================================================================
# Dashboard
# =============================================================================


def render_dashboard(console: Console, state: AppState) -> None:
    """Print the content area for the current explanation query state."""
    tokens = state.theme_tokens
    query = state.explanation

    if len(state.history):
        console.print(render_history(state.history.as_list(), tokens))

    if query.status == QueryStatus.ERROR:
        console.print(render_error(query.error))
    elif query.status == QueryStatus.LOADING:
        console.print(render_status(LOADING_MESSAGE, tokens))
    elif query.result is not None:
        console.print(render_explanation(query.result, tokens, state.settings.enable_voice))
    else:
        console.print(render_status(IDLE_MESSAGE, tokens))
