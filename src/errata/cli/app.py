# src/errata/cli/app.py
"""Command-line interface for errata.

This module provides a thin Typer wrapper around the adapters and the
recovery pipeline. Each command:
1. Parses args (via Typer)
2. Resolves configuration (errata.yaml, .env, environment)
3. Calls the adapter or pipeline
4. Renders results with Rich (or JSON with --json)

Failures print the classified error code and exit with status 1.
"""

from __future__ import annotations

import json
import logging
import mimetypes
import sys
from pathlib import Path

try:
    import typer
    from rich.console import Console
    from rich.markup import escape
    from rich.panel import Panel
    from rich.table import Table
except ImportError as e:
    raise SystemExit(
        "CLI requires additional dependencies.\nInstall with: pip install errata-ai[cli]"
    ) from e

from errata import __version__
from errata.config import (
    ConfigIssue,
    find_config_file,
    get_adapter,
    get_provider_config,
    get_provider_name,
    load_config,
    load_env_file,
    validate_config,
)
from errata.configuration import available_providers
from errata.errors import AIServiceError, MalformedResponseError, classify_error
from errata.models import DIFFICULTIES, LANGUAGES, StructuredQuestion
from errata.recovery import FileSink, JsonRecoveryPipeline, LoggingSink, RecoveryEvent

app = typer.Typer(
    name="errata",
    help="errata - turn photographed exam questions into structured data.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"errata {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log recovery attempts and provider failures to stderr.",
    ),
) -> None:
    """errata - structured exam questions from multimodal models."""
    load_env_file()
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _check_choice(value: str | None, choices: tuple[str, ...], option: str) -> str | None:
    if value is None:
        return None
    value = value.lower()
    if value not in choices:
        raise typer.BadParameter(f"must be one of: {', '.join(choices)}", param_hint=option)
    return value


def _resolve_adapter(provider: str | None, model: str | None, config_file: str | None):
    adapter = get_adapter(config_path=config_file, provider=provider, model=model)
    if isinstance(adapter, ConfigIssue):
        console.print(f"[red]Error: {escape(adapter.message)}[/red]")
        if adapter.suggestion:
            console.print(f"[dim]{adapter.suggestion}[/dim]")
        raise typer.Exit(1)
    return adapter


def _fail(error: AIServiceError) -> None:
    console.print(f"[red]{error.code.value}[/red]")
    if error.cause is not None:
        console.print(f"[dim]{type(error.cause).__name__}: {escape(str(error.cause))}[/dim]")
    raise typer.Exit(1)


def _render_question(question: StructuredQuestion, title: str, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(question.to_wire(), ensure_ascii=False, indent=2))
        return

    console.print(Panel(escape(question.question_text), title=title, border_style="cyan"))
    console.print(f"[bold]Answer:[/bold] {escape(question.answer_text)}")
    console.print(f"[bold]Analysis:[/bold] {escape(question.analysis)}")
    if question.subject:
        console.print(f"[bold]Subject:[/bold] {escape(question.subject)}")
    if question.knowledge_points:
        points = ", ".join(question.knowledge_points)
        console.print(f"[bold]Knowledge points:[/bold] {escape(points)}")


@app.command(name="analyze")
def analyze_cmd(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Question image"),
    provider: str = typer.Option(None, "--provider", "-p", help="Provider name"),
    model: str = typer.Option(None, "--model", "-m", help="Model id override"),
    language: str = typer.Option(
        None, "--language", "-l", help="Output language (zh/en, default: settings)"
    ),
    mime_type: str = typer.Option(None, "--mime-type", help="Image MIME type (default: guessed)"),
    config_file: str = typer.Option(None, "--config", "-c", help="Path to config file"),
    as_json: bool = typer.Option(False, "--json", help="Print the wire JSON"),
) -> None:
    """Transcribe and analyze a question image."""
    language = _check_choice(language, LANGUAGES, "--language")
    mime_type = mime_type or mimetypes.guess_type(image.name)[0] or "image/jpeg"
    adapter = _resolve_adapter(provider, model, config_file)
    language = language or adapter.settings.default_language

    try:
        question = adapter.analyze_image(image.read_bytes(), mime_type, language=language)
    except AIServiceError as e:
        _fail(e)
        return

    _render_question(question, image.name, as_json)


@app.command(name="similar")
def similar_cmd(
    question: str = typer.Argument(..., help="Original question text"),
    tags: list[str] = typer.Option(None, "--tag", "-t", help="Knowledge point (repeatable)"),
    difficulty: str = typer.Option(
        None, "--difficulty", "-d", help="easy, medium, hard or harder (default: settings)"
    ),
    provider: str = typer.Option(None, "--provider", "-p", help="Provider name"),
    model: str = typer.Option(None, "--model", "-m", help="Model id override"),
    language: str = typer.Option(
        None, "--language", "-l", help="Output language (zh/en, default: settings)"
    ),
    config_file: str = typer.Option(None, "--config", "-c", help="Path to config file"),
    as_json: bool = typer.Option(False, "--json", help="Print the wire JSON"),
) -> None:
    """Generate a similar practice question."""
    language = _check_choice(language, LANGUAGES, "--language")
    difficulty = _check_choice(difficulty, DIFFICULTIES, "--difficulty")
    adapter = _resolve_adapter(provider, model, config_file)
    language = language or adapter.settings.default_language
    difficulty = difficulty or adapter.settings.default_difficulty

    try:
        generated = adapter.generate_similar_question(
            question, tags or [], language=language, difficulty=difficulty
        )
    except AIServiceError as e:
        _fail(e)
        return

    _render_question(generated, f"Similar question ({difficulty})", as_json)


def _events_table(events: list[RecoveryEvent]) -> Table:
    table = Table(title="Recovery attempts")
    table.add_column("#", style="dim", width=3)
    table.add_column("Stage", style="cyan")
    table.add_column("Result")
    table.add_column("Length", justify="right")
    table.add_column("Detail", style="dim")

    for i, event in enumerate(events, 1):
        result = "[green]ok[/green]" if event.succeeded else "[red]failed[/red]"
        table.add_row(
            str(i),
            event.strategy.value,
            result,
            str(event.candidate_length),
            escape(event.detail),
        )
    return table


@app.command(name="recover")
def recover_cmd(
    source: str = typer.Argument(..., help="File with a raw model response, or - for stdin"),
    debug_log: Path = typer.Option(
        None, "--debug-log", help="Append failure diagnostics to this file"
    ),
    no_escapes: bool = typer.Option(
        False, "--no-escapes", help="Skip the escape-normalization stage"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the wire JSON"),
) -> None:
    """Run the recovery pipeline on a captured model response."""
    if source == "-":
        raw_text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            console.print(f"[red]Error: File not found: {source}[/red]")
            raise typer.Exit(1)
        raw_text = path.read_text(encoding="utf-8")

    sinks: list = [LoggingSink()]
    if debug_log is not None:
        sinks.append(FileSink(debug_log))
    pipeline = JsonRecoveryPipeline(normalize_escapes=not no_escapes, sinks=sinks)

    try:
        report = pipeline.recover_with_report(raw_text)
    except MalformedResponseError as e:
        if not as_json:
            console.print(_events_table(e.events))
        console.print(f"[red]{classify_error(e).value}[/red]: {escape(str(e))}")
        if debug_log is not None:
            console.print(f"[dim]Diagnostics appended to {debug_log}[/dim]")
        raise typer.Exit(1) from None

    if as_json:
        typer.echo(json.dumps(report.question.to_wire(), ensure_ascii=False, indent=2))
        return

    console.print(_events_table(report.events))
    console.print(
        f"[green]Recovered with '{report.strategy.value}' "
        f"after {report.attempts} attempt(s)[/green]"
    )
    _render_question(report.question, "Recovered question", as_json=False)


@app.command(name="providers")
def providers_cmd(
    config_file: str = typer.Option(None, "--config", "-c", help="Path to config file"),
) -> None:
    """List providers and whether an API key is configured."""
    config_path = Path(config_file) if config_file else find_config_file()
    config = load_config(config_path)
    for warning in validate_config(config, config_path):
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    active = get_provider_name(config)

    table = Table(title="Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Active")
    table.add_column("API key")
    table.add_column("Model")
    table.add_column("Base URL", style="dim")

    for name in available_providers():
        provider_config = get_provider_config(name, config)
        table.add_row(
            name,
            "*" if name == active else "",
            "[green]set[/green]" if provider_config.has_api_key else "[red]missing[/red]",
            provider_config.model or "(default)",
            provider_config.base_url or "",
        )

    console.print(table)

    if config_path:
        console.print(f"\n[dim]Config file: {config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")
