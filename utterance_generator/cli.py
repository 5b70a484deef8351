from __future__ import annotations

import json
import logging
import sys
from typing import Any

import typer

from utterance_generator.core.corpus.generate_corpus import build_corpus, intent_templates
from utterance_generator.core.errors import (
    IntentLoadError,
    InvalidInputError,
    UtteranceError,
    sort_errors,
)
from utterance_generator.core.expand.expand_template import count_expansions, expand
from utterance_generator.core.io.load_intents import load_intents
from utterance_generator.core.lint.lint_intents import lint_intents

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def _callback() -> None:
    """Utterance corpus generator CLI."""
    return


@app.command("generate")
def generate(
    path: str = typer.Argument(..., help="Path to an intents file (.yaml/.yml/.json)"),
    strict: bool = typer.Option(
        False,
        "--strict/--lenient",
        help="Fail on the first bad intent/template instead of skipping it",
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-intent progress to stderr"),
) -> None:
    """Expand every template and print the utterance corpus."""
    _configure_logging(verbose)
    _check_format("generate", format)

    try:
        intents = load_intents(path)
    except IntentLoadError as e:
        if format == "json":
            _emit_json("generate", ok=False, errors=[e], exit_code=1, corpus=None, line_count=0)
        _print_errors([e])
        raise typer.Exit(code=1)

    report = build_corpus(intents, file=path)
    failed = strict and bool(report.errors)

    if format == "json":
        _emit_json(
            "generate",
            ok=report.ok,
            errors=report.errors,
            exit_code=2 if failed else 0,
            corpus=None if failed else report.corpus,
            line_count=0 if failed else report.line_count,
        )

    _print_errors(report.errors)
    if failed:
        raise typer.Exit(code=2)
    typer.echo(report.corpus, nl=False)


@app.command("expand")
def expand_cmd(
    templates: list[str] = typer.Argument(..., help="One or more phrase templates"),
) -> None:
    """Print every phrase the given templates expand to, one per line."""
    for template in templates:
        try:
            phrases = expand(template)
        except UtteranceError as e:
            _print_errors([e])
            raise typer.Exit(code=2)
        for phrase in phrases:
            typer.echo(phrase)


@app.command("lint")
def lint(
    path: str = typer.Argument(..., help="Path to an intents file (.yaml/.yml/.json)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-intent progress to stderr"),
) -> None:
    """Check every template without printing the corpus."""
    _configure_logging(verbose)
    _check_format("lint", format)

    try:
        intents = load_intents(path)
    except IntentLoadError as e:
        if format == "json":
            _emit_json("lint", ok=False, errors=[e], exit_code=1)
        _print_errors([e])
        raise typer.Exit(code=1)

    report = build_corpus(intents, file=path)
    errors = sort_errors(report.errors + lint_intents(intents, file=path))

    if format == "json":
        _emit_json("lint", ok=not errors, errors=errors, exit_code=2 if errors else 0)

    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)
    typer.echo(f"OK: {len(intents)} intents, {report.line_count} phrases")


@app.command("stats")
def stats(
    path: str = typer.Argument(..., help="Path to an intents file (.yaml/.yml/.json)"),
) -> None:
    """Print how many phrases each intent expands to."""
    try:
        intents = load_intents(path)
    except IntentLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    total = 0
    errors: list[UtteranceError] = []
    for intent, value in intents.items():
        intent_path = f"intents.{intent}"
        templates = intent_templates(value)
        if not isinstance(intent, str) or templates is None:
            errors.append(
                InvalidInputError(
                    code="E_INVALID_INTENT_NAME" if not isinstance(intent, str) else "E_INVALID_TEMPLATES",
                    message="intent skipped: name must be a string and value a template or list of templates",
                    file=path,
                    path=intent_path,
                )
            )
            continue

        n = 0
        for j, template in enumerate(templates):
            try:
                n += count_expansions(template)
            except UtteranceError as e:
                errors.append(e.located(path, intent_path if isinstance(value, str) else f"{intent_path}[{j}]"))
        total += n
        typer.echo(f"- {intent}: {n}")
    typer.echo(f"Total: {total}")

    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)


def _check_format(command: str, format: str) -> None:
    if format in ("text", "json"):
        return
    _print_errors(
        [
            InvalidInputError(
                code=f"E_{command.upper()}_UNKNOWN_FORMAT",
                message=f"unknown format: {format} (choose one of: text, json)",
                file=None,
                path="format",
            )
        ]
    )
    raise typer.Exit(code=2)


def _emit_json(
    command: str,
    *,
    ok: bool,
    errors: list[UtteranceError],
    exit_code: int,
    **extra: Any,
) -> None:
    payload = {
        "tool": "utterances",
        "command": command,
        "ok": ok,
        "error_count": len(errors),
        "errors": [_to_item(e) for e in sort_errors(errors)],
        **extra,
    }
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    raise typer.Exit(code=exit_code)


def _to_item(e: UtteranceError) -> dict:
    return {
        "code": e.code,
        "message": e.message,
        "file": e.file,
        "path": e.path,
        "severity": "warning" if e.code.startswith("L_") else "error",
        "source": "load" if isinstance(e, IntentLoadError) else "lint" if e.code.startswith("L_") else "generate",
    }


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


def _print_errors(errors: list[UtteranceError]) -> None:
    for e in sort_errors(errors):
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="utterances")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
