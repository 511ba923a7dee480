from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import typer

from margin_shorthand.core.errors import ShorthandError, ShorthandLoadError, ShorthandValidationError
from margin_shorthand.core.expand.expand_margin import EXPANSION_TABLES, expand_margin
from margin_shorthand.core.expand.settings import OUTPUT_FORMATS, SettingsError, load_and_merge
from margin_shorthand.core.io.dump_declarations import (
    declarations_to_dicts,
    dump_declarations_yaml,
    dump_declarations_yaml_text,
)
from margin_shorthand.core.io.load_declarations import load_declarations
from margin_shorthand.core.model import ORIGINS, CssValue, Declaration
from margin_shorthand.core.observability import LOG_FORMATS, setup_logging
from margin_shorthand.core.validate.validate_declarations import (
    summarize_declarations,
    validate_declarations,
)

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def _callback(
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
    log_format: str = typer.Option("text", "--log-format", help="Log format: text|json"),
) -> None:
    """Margin shorthand CLI."""
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR") or log_format not in LOG_FORMATS:
        _print_errors(
            [
                ShorthandValidationError(
                    code="E_LOGGING_INVALID",
                    message=f"bad logging options: level={log_level} format={log_format}",
                    path="log",
                )
            ]
        )
        raise typer.Exit(code=2)
    setup_logging(log_level, log_format)


@app.command("expand")
def expand(
    values: list[str] = typer.Argument(..., help="Margin values, already tokenized (1 to 4); put -- before negative values"),
    important: bool | None = typer.Option(
        None,
        "--important/--no-important",
        help="Mark the longhands !important (default from settings)",
    ),
    origin: str | None = typer.Option(None, "--origin", help="Stylesheet origin: user-agent|user|author"),
    format: str | None = typer.Option(None, "--format", help="Output format: text|json|yaml"),
    config: str | None = typer.Option(None, "--config", help="Optional YAML settings file"),
) -> None:
    """Expand one margin shorthand into its four longhands."""
    settings = _load_settings(config)
    origin = origin if origin is not None else settings["origin"]
    important = important if important is not None else settings["important"]
    format = format if format is not None else settings["format"]

    errors: list[ShorthandError] = []
    if format not in OUTPUT_FORMATS:
        errors.append(
            ShorthandValidationError(
                code="E_EXPAND_UNKNOWN_FORMAT",
                message=f"unknown format: {format} (choose one of: {', '.join(OUTPUT_FORMATS)})",
                path="format",
            )
        )
    if origin not in ORIGINS:
        errors.append(
            ShorthandValidationError(
                code="E_INVALID_ENUM",
                message=f"unknown origin: {origin} (choose one of: {', '.join(ORIGINS)})",
                path="origin",
            )
        )
    if len(values) not in EXPANSION_TABLES:
        errors.append(
            ShorthandValidationError(
                code="E_INVALID_ARITY",
                message=f"margin takes 1 to 4 values, got {len(values)}",
                path="values",
            )
        )
    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)

    declarations = expand_margin(
        [CssValue(v) for v in values],
        important=bool(important),
        origin=origin,  # type: ignore[arg-type]
    )
    logger.info("expanded margin with %d values", len(values), extra={"arity": len(values)})
    _emit(declarations, format=format, command="expand")


@app.command("expand-file")
def expand_file(
    path: str = typer.Argument(..., help="Path to a shorthand file (.yaml/.yml/.json)"),
    out: str | None = typer.Option(None, "--out", help="Write expanded YAML here instead of stdout"),
    format: str | None = typer.Option(None, "--format", help="Stdout format: text|json|yaml"),
    config: str | None = typer.Option(None, "--config", help="Optional YAML settings file"),
) -> None:
    """Expand every margin shorthand in a file."""
    settings = _load_settings(config)
    format = format if format is not None else settings["format"]
    if format not in OUTPUT_FORMATS:
        _print_errors(
            [
                ShorthandValidationError(
                    code="E_EXPAND_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: {', '.join(OUTPUT_FORMATS)})",
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)

    try:
        doc = load_declarations(path)
    except ShorthandLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    shorthands, errors = validate_declarations(
        doc,
        default_origin=settings["origin"],
        default_important=settings["important"],
    )
    if errors or shorthands is None:
        _print_errors(errors)
        raise typer.Exit(code=2)

    declarations: list[Declaration] = []
    for s in shorthands:
        logger.debug(
            "declarations[%d]: margin with %d values",
            s.index,
            len(s.values),
            extra={"index": s.index, "arity": len(s.values)},
        )
        declarations.extend(
            expand_margin(
                [CssValue(v) for v in s.values],
                important=s.important,
                origin=s.origin,
            )
        )
    logger.info("expanded %d shorthands from %s", len(shorthands), path)

    if out is not None:
        _write_yaml(out, declarations)
        typer.echo(f"OK: wrote {len(declarations)} declarations to {out}")
        return

    _emit(declarations, format=format, command="expand-file")


@app.command("validate")
def validate(
    path: str = typer.Argument(..., help="Path to a shorthand file (.yaml/.yml/.json)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Validate a shorthand file without expanding it."""
    if format not in ("text", "json"):
        err = ShorthandValidationError(
            code="E_VALIDATE_UNKNOWN_FORMAT",
            message=f"unknown format: {format} (choose one of: text, json)",
            file=None,
            path="format",
        )
        _print_errors([err])
        raise typer.Exit(code=2)

    def _emit_json(ok: bool, *, exit_code: int, errors: list[ShorthandError], summary: dict | None) -> None:
        payload = {
            "tool": "shorthand",
            "command": "validate",
            "ok": ok,
            "error_count": len(errors),
            "errors": [e.to_item() for e in errors],
            "summary": summary,
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=exit_code)

    try:
        doc = load_declarations(path)
    except ShorthandLoadError as e:
        if format == "json":
            _emit_json(False, exit_code=1, errors=[e], summary=None)
        _print_errors([e])
        raise typer.Exit(code=1)

    shorthands, errors = validate_declarations(doc)
    if errors:
        if format == "json":
            _emit_json(False, exit_code=2, errors=list(errors), summary=None)
        _print_errors(list(errors))
        raise typer.Exit(code=2)

    assert shorthands is not None

    if format == "text":
        typer.echo(summarize_declarations(shorthands))
        return

    from collections import Counter

    counts = Counter(len(s.values) for s in shorthands)
    summary = {
        "declaration_count": len(shorthands),
        "arity_counts": {str(k): int(v) for k, v in sorted(counts.items())},
    }
    _emit_json(True, exit_code=0, errors=[], summary=summary)


@app.command("tables")
def tables() -> None:
    """List the expansion table for each supported arity."""
    typer.echo("Expansion tables:")
    for arity in sorted(EXPANSION_TABLES):
        pairs = [f"{name}=v{i + 1}" for name, i in EXPANSION_TABLES[arity]]
        typer.echo(f"- {arity}: {', '.join(pairs)}")


def _load_settings(config: str | None) -> dict[str, Any]:
    settings_file = config or os.getenv("SHORTHAND_CONFIG")
    try:
        return load_and_merge(settings_file)
    except FileNotFoundError:
        _print_errors(
            [
                ShorthandLoadError(
                    code="E_CONFIG_FILE_NOT_FOUND",
                    message=f"settings file not found: {settings_file}",
                    file=None,
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except OSError as e:
        _print_errors(
            [
                ShorthandLoadError(
                    code="E_CONFIG_FILE_READ",
                    message=str(e),
                    file=settings_file,
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except SettingsError as e:
        _print_errors(
            [
                ShorthandValidationError(
                    code="E_CONFIG_FILE_INVALID",
                    message=str(e),
                    file=settings_file,
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=2)


def _emit(declarations: list[Declaration], *, format: str, command: str) -> None:
    if format == "json":
        payload = {
            "tool": "shorthand",
            "command": command,
            "ok": True,
            "declarations": declarations_to_dicts(declarations),
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        return
    if format == "yaml":
        typer.echo(dump_declarations_yaml_text(declarations), nl=False)
        return
    for d in declarations:
        suffix = " !important" if d.important else ""
        typer.echo(f"{d.name}: {d.value.css_text}{suffix}")


def _write_yaml(path: str, declarations: list[Declaration]) -> None:
    p = Path(path)
    if str(p.parent) not in (".", ""):
        p.parent.mkdir(parents=True, exist_ok=True)
    dump_declarations_yaml(declarations, str(p))


def _print_errors(errors: list[ShorthandError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="shorthand")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
