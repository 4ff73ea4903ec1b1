"""
Formula Hub CLI - grade-aware math formula explanations.

Usage:
    formula-hub start                       # Interactive dashboard
    formula-hub start --name Asha           # Skip the login prompt
    formula-hub explain "Pythagoras"        # One explanation card
    formula-hub explain "Volume of a Cone" -g 8 --depth comprehensive
    formula-hub syllabus -g 10              # Curriculum for a grade
    formula-hub themes                      # Palette table
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import replace
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.prompt import Prompt

from config import get_settings
from formula_hub.core.controller import FormulaHubController, default_app_settings
from formula_hub.core.models import (
    GRADE_LEVELS,
    MAX_GRADE,
    MIN_GRADE,
    AppSettings,
    ExplanationDepth,
    ThemeType,
)
from formula_hub.core.state import AppState, QueryStatus
from formula_hub.delivery import hub_visuals as ui
from formula_hub.services.gemini_service import GeminiFormulaService

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="formula-hub",
    help="Math Formula Hub - intuitive formula explanations for Class 7-12",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

DASHBOARD_HELP = """[bold]Type a topic to explain it, or a command:[/]
  :grade N                      switch class (7-12)
  :depth simple|comprehensive   explanation depth
  :theme NAME                   indigo, emerald, amber, cyan
  :thinking / :voice            toggle deep reasoning / voice guidance
  :recent N / :related N        explain a recent or related topic
  :syllabus                     show this class's syllabus
  :history / :settings          show recent topics / current settings
  :help / :quit"""


def configure_logging(level: str | None = None) -> None:
    """Route loguru to stderr (and an optional log file)."""
    settings = get_settings()
    logger.remove()
    logger.add(
        sys.stderr,
        level=level or settings.log_level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="5 MB", retention=3)


def build_controller(settings: AppSettings | None = None) -> FormulaHubController:
    """Wire the Gemini service and a fresh AppState."""
    state = AppState(
        settings=settings or default_app_settings(),
        history_limit=get_settings().history_limit,
    )
    return FormulaHubController(GeminiFormulaService(), state=state)


# =============================================================================
# Dashboard command parsing
# =============================================================================


def settings_from_command(settings: AppSettings, command: str, arg: str) -> AppSettings:
    """
    Build the replacement settings for a dashboard command.

    Args:
        settings: Current settings
        command: Command name without the leading colon
        arg: Raw argument text (may be empty)

    Returns:
        New AppSettings

    Raises:
        ValueError: If the argument is outside the field's domain
    """
    if command == "grade":
        try:
            grade = int(arg)
        except ValueError:
            raise ValueError(f"Grade must be a number between {MIN_GRADE} and {MAX_GRADE}") from None
        if grade not in GRADE_LEVELS:
            raise ValueError(f"Grade must be between {MIN_GRADE} and {MAX_GRADE}")
        return replace(settings, grade_level=grade)
    if command == "depth":
        return replace(settings, explanation_depth=ExplanationDepth(arg.lower()))
    if command == "theme":
        return replace(settings, theme=ThemeType(arg.lower()))
    if command == "thinking":
        return replace(settings, enable_thinking=not settings.enable_thinking)
    if command == "voice":
        return replace(settings, enable_voice=not settings.enable_voice)
    raise ValueError(f"Unknown settings command: {command}")


SETTINGS_COMMANDS = {"grade", "depth", "theme", "thinking", "voice"}


def pick_topic(options: list[str], arg: str) -> str:
    """Resolve a 1-based index into a topic list."""
    try:
        index = int(arg)
    except ValueError:
        raise ValueError("Give the number shown next to the topic") from None
    if not 1 <= index <= len(options):
        raise ValueError(f"No topic numbered {index}")
    return options[index - 1]


# =============================================================================
# Commands
# =============================================================================


@app.command()
def explain(
    topic: Annotated[str, typer.Argument(help="Formula or concept, e.g. 'Trigonometry'")],
    grade: Annotated[
        int | None,
        typer.Option("--grade", "-g", min=MIN_GRADE, max=MAX_GRADE, help="Class level"),
    ] = None,
    depth: Annotated[
        ExplanationDepth | None, typer.Option("--depth", "-d", help="Explanation depth")
    ] = None,
    theme: Annotated[ThemeType | None, typer.Option("--theme", "-t", help="Color theme")] = None,
    no_thinking: Annotated[
        bool, typer.Option("--no-thinking", help="Disable deep reasoning")
    ] = False,
    voice: Annotated[bool, typer.Option("--voice", help="Show voice guidance marker")] = False,
) -> None:
    """Explain one formula and exit. Unset options fall back to the configured defaults."""
    defaults = default_app_settings()
    settings = AppSettings(
        grade_level=grade if grade is not None else defaults.grade_level,
        explanation_depth=depth or defaults.explanation_depth,
        theme=theme or defaults.theme,
        enable_thinking=defaults.enable_thinking and not no_thinking,
        enable_voice=defaults.enable_voice or voice,
    )
    controller = build_controller(settings)
    state = controller.state

    with console.status(ui.LOADING_MESSAGE):
        asyncio.run(controller.search(topic))

    if state.explanation.status == QueryStatus.ERROR:
        console.print(ui.render_error(state.explanation.error))
        raise typer.Exit(1)
    if state.explanation.result is not None:
        console.print(ui.render_explanation(
            state.explanation.result, state.theme_tokens, settings.enable_voice
        ))


@app.command()
def syllabus(
    grade: Annotated[
        int | None,
        typer.Option("--grade", "-g", min=MIN_GRADE, max=MAX_GRADE, help="Class level"),
    ] = None,
) -> None:
    """Show the standard math syllabus for a class."""
    settings = default_app_settings()
    if grade is not None:
        settings = replace(settings, grade_level=grade)
    grade = settings.grade_level
    controller = build_controller(settings)
    state = controller.state

    with console.status(f"Loading Class {grade} syllabus..."):
        asyncio.run(controller.refresh_syllabus(grade))

    if state.syllabus.status == QueryStatus.ERROR:
        console.print(ui.render_error(state.syllabus.error))
        raise typer.Exit(1)
    _show_syllabus(state)


@app.command()
def themes() -> None:
    """List the color themes."""
    console.print(ui.render_theme_table())


@app.command()
def start(
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Display name (skips login prompt)")
    ] = None,
) -> None:
    """
    Start the interactive dashboard.

    Examples:
        formula-hub start
        formula-hub start --name Asha
    """
    controller = build_controller()
    try:
        asyncio.run(_run_dashboard(controller, name))
    except (KeyboardInterrupt, EOFError):
        console.print("\n[dim]Goodbye.[/]")


async def _run_dashboard(controller: FormulaHubController, name: str | None) -> None:
    """Login, then the read-eval-render loop."""
    state = controller.state

    if name is not None:
        controller.login(name)
    while not state.session.is_logged_in:
        controller.login(Prompt.ask("[bold]Your name[/]"))

    console.print(ui.render_header(state))
    with console.status(f"Loading Class {state.settings.grade_level} syllabus..."):
        await controller.open_dashboard()
    if state.syllabus.status == QueryStatus.ERROR:
        console.print(ui.render_error(state.syllabus.error))
    console.print(DASHBOARD_HELP)
    ui.render_dashboard(console, state)

    while True:
        line = Prompt.ask(f"\n[bold {state.theme_tokens.primary_start}]formula[/]").strip()
        if not line:
            continue
        if not line.startswith(":"):
            await _search(controller, line)
            continue

        command, _, arg = line[1:].partition(" ")
        command, arg = command.lower(), arg.strip()

        if command in ("quit", "q", "exit"):
            console.print(f"[dim]See you, {state.session.name}.[/]")
            return
        if command == "help":
            console.print(DASHBOARD_HELP)
        elif command == "settings":
            console.print(ui.render_settings(state.settings, state.theme_tokens))
        elif command == "history":
            console.print(ui.render_history(state.history.as_list(), state.theme_tokens))
        elif command == "syllabus":
            _show_syllabus(state)
        elif command in ("recent", "related"):
            if command == "recent":
                options = state.history.as_list()
            elif state.explanation.result is not None:
                options = list(state.explanation.result.related_formulas)
            else:
                options = []
            try:
                topic = pick_topic(options, arg)
            except ValueError as e:
                console.print(f"[yellow]{e}[/]")
                continue
            await _search(controller, topic)
        elif command in SETTINGS_COMMANDS:
            try:
                new_settings = settings_from_command(state.settings, command, arg)
            except ValueError as e:
                console.print(f"[yellow]{e}[/]")
                continue
            changed = controller.update_settings(new_settings)
            if "grade_level" in changed:
                with console.status(f"Loading Class {new_settings.grade_level} syllabus..."):
                    await controller.settle()
                console.print(ui.render_header(state))
                _show_syllabus(state)
            else:
                console.print(ui.render_settings(state.settings, state.theme_tokens))
        else:
            console.print(f"[yellow]Unknown command :{command}[/] (try :help)")


async def _search(controller: FormulaHubController, topic: str) -> None:
    with console.status(ui.LOADING_MESSAGE):
        await controller.search(topic)
    ui.render_dashboard(console, controller.state)


def _show_syllabus(state: AppState) -> None:
    if state.syllabus.status == QueryStatus.ERROR:
        console.print(ui.render_error(state.syllabus.error))
    elif state.syllabus.result is not None:
        console.print(
            ui.render_syllabus(state.syllabus.result, state.settings.grade_level, state.theme_tokens)
        )
    else:
        console.print("[dim]No syllabus loaded yet.[/]")


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
