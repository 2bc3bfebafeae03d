"""Check command: analyze Java files and report their verdicts."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..exceptions import JavaStyleError, StyleError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..pipeline import analyze_file
from ..verdict import Verdict
from . import app
from ._common import (
    EXIT_ERROR,
    EXIT_FAILED,
    EXIT_PASSED,
    collect_java_files,
    err_console,
    resolve_config,
)


@app.command()
def check(
    paths: List[Path] = typer.Argument(
        ...,
        help="Java files or directories to check",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich, json, github or quiet",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format (same as --format json)",
    ),
    min_length: Optional[int] = typer.Option(
        None,
        "--min-length",
        help="Shortest acceptable identifier",
        min=1,
    ),
    max_length: Optional[int] = typer.Option(
        None,
        "--max-length",
        help="Longest acceptable identifier",
        min=1,
    ),
    max_line_length: Optional[int] = typer.Option(
        None,
        "--max-line-length",
        help="Longest acceptable line, in columns",
        min=1,
    ),
    allowed_violations: Optional[int] = typer.Option(
        None,
        "--allowed-violations",
        help="Violations a file may have and still pass",
        min=0,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logs and per-category counts",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Check Java source files and report style violations.

    Exit code is 0 when every file passes, 1 when any file fails, and 2
    when a file cannot be read or parsed or the configuration is invalid.

    [bold cyan]Examples:[/bold cyan]

      javastyle check src/main/java/Example.java

      javastyle check src/ --max-line-length 120

      javastyle check Example.java --json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        style_config = resolve_config(
            config=config,
            min_length=min_length,
            max_length=max_length,
            max_line_length=max_line_length,
            allowed_violations=allowed_violations,
            verbose=verbose,
            quiet=quiet,
        )
        formatter = get_formatter("json" if json_output else output_format, verbose=verbose)
        files = collect_java_files(paths)
    except (JavaStyleError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_ERROR)

    verdicts: List[Verdict] = []
    errors = 0
    for path in files:
        try:
            verdicts.append(analyze_file(path, style_config))
        except JavaStyleError as e:
            errors += 1
            logger.debug(f"{e.__class__.__name__}: {e}")
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        except StyleError as e:
            errors += 1
            logger.error(f"Internal error in {path}: {e}", extra={"error": e.to_json()})
            err_console.print(f"[red]Internal error:[/red] {escape(str(path))}: {escape(str(e))}")

    formatter.render(verdicts)

    if errors:
        raise typer.Exit(EXIT_ERROR)
    if not all(v.passed for v in verdicts):
        raise typer.Exit(EXIT_FAILED)
    raise typer.Exit(EXIT_PASSED)
