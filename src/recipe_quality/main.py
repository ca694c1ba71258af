"""
Recipe Quality - CLI Entry Point.

Usage:
    recipe-quality check recipe.json     Validate instruction steps
    recipe-quality meal meal.json        Full meal quality report
    recipe-quality improve recipe.json   Regenerate failing instructions
    recipe-quality policy                Show the active criteria
    recipe-quality --help                Show help
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table

from recipe_quality.meal import first_present

app = typer.Typer(
    name="recipe-quality",
    help="Quality gate for generated recipe instructions.",
    add_completion=False,
)
console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Send log output to stderr so --json stays clean on stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    from recipe_quality.config import settings

    setup_logging("DEBUG" if verbose else settings.log_level)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[red]❌ File not found: {path}[/red]")
        raise typer.Exit(2)
    except json.JSONDecodeError as e:
        console.print(f"[red]❌ Invalid JSON in {path}: {e}[/red]")
        raise typer.Exit(2)


def _split_recipe(data: Any) -> tuple[Any, dict]:
    """Accept a bare list of steps or a recipe object."""
    if isinstance(data, dict):
        return first_present(data, "instructions", "directions"), data
    return data, {}


def _print_issues(title: str, is_valid: bool, issues: list[str]) -> None:
    if is_valid:
        console.print(f"✅ {title}: [green]passed[/green]")
        return

    table = Table(title=f"❌ {title}: {len(issues)} issue(s)", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Issue")
    for i, issue in enumerate(issues, start=1):
        table.add_row(str(i), issue)
    console.print(table)


@app.command()
def check(
    file: Path = typer.Argument(..., help="JSON list of steps, or a recipe object"),
    policy: Optional[str] = typer.Option(None, "--policy", "-p", help="strict or relaxed (default: QUALITY_POLICY)"),
    as_json: bool = typer.Option(False, "--json", help="Print the verdict as JSON"),
) -> None:
    """Validate recipe instruction steps."""
    from recipe_quality.validation import get_validator

    instructions, _ = _split_recipe(_load_json(file))

    try:
        validator = get_validator(policy)
    except ValueError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(2)

    verdict = validator.validate(instructions)

    if as_json:
        typer.echo(json.dumps(verdict.to_dict(), indent=2))
    else:
        _print_issues(f"Instructions ({validator.policy})", verdict.is_valid, verdict.issues)

    if not verdict.is_valid:
        raise typer.Exit(1)


@app.command()
def meal(
    file: Path = typer.Argument(..., help="Meal JSON object"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """Full meal quality report (ingredients and instructions)."""
    from recipe_quality.meal import validate_meal

    report = validate_meal(_load_json(file))

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_issues("Meal", report.is_valid, report.issues)

    if not report.is_valid:
        raise typer.Exit(1)


@app.command()
def improve(
    file: Path = typer.Argument(..., help="Recipe object with name, ingredients, instructions"),
    attempts: Optional[int] = typer.Option(None, "--attempts", "-a", help="Max generation attempts"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log LLM prompts to prompt_logs/"),
) -> None:
    """Regenerate failing instructions with OpenAI."""
    from recipe_quality.config import settings
    from recipe_quality.improver import improve_instructions
    from recipe_quality.llm import OpenAIInstructionGenerator
    from recipe_quality.llm.prompt_logger import enable_prompt_logging, get_session_log_dir
    from recipe_quality.validation import RecipeContext

    if log_prompts:
        enable_prompt_logging(True)

    instructions, recipe = _split_recipe(_load_json(file))
    if not isinstance(instructions, list):
        console.print("[red]❌ No instruction list found in file[/red]")
        raise typer.Exit(2)

    context = RecipeContext.from_meal(recipe) if recipe else None
    max_attempts = attempts if attempts is not None else settings.enhance_max_attempts

    with Live(Spinner("dots", text="Improving instructions..."), console=console, transient=True):
        result = asyncio.run(improve_instructions(
            instructions,
            OpenAIInstructionGenerator(),
            context=context,
            max_attempts=max_attempts,
        ))

    for i, step in enumerate(result.instructions, start=1):
        console.print(f"[bold]{i}.[/bold] {step}")

    console.print()
    _print_issues(f"Result after {result.attempts} attempt(s)", result.verdict.is_valid, result.verdict.issues)

    log_dir = get_session_log_dir()
    if log_dir:
        console.print(f"\n[dim]📝 Prompts logged to: {log_dir}[/dim]")

    if not result.verdict.is_valid:
        raise typer.Exit(1)


@app.command()
def policy() -> None:
    """Show the active validation criteria."""
    from recipe_quality.config import settings
    from recipe_quality.validation import get_criteria

    criteria = get_criteria(settings.quality_policy)

    console.print(f"\n[bold]Active policy: {criteria.policy}[/bold]\n")
    console.print(f"  Minimum steps: {criteria.min_steps}")
    if criteria.min_words_per_step is not None:
        console.print(f"  Minimum words per step: {criteria.min_words_per_step}")
    if criteria.min_timed_steps is not None:
        console.print(f"  Minimum steps with time/temperature: {criteria.min_timed_steps}")
    console.print(f"  Weak verb check: {'on' if criteria.check_weak_verbs else 'off'}")
    console.print(f"  Cooking specificity check: {'on' if criteria.check_cooking_specificity else 'off'}")
    console.print(f"  Banned phrases: {len(criteria.banned_phrases)}")


@app.command()
def version() -> None:
    """Show version information."""
    from recipe_quality import __version__

    console.print(f"recipe-quality version {__version__}")


if __name__ == "__main__":
    app()
