"""CLI command implementations"""

from typing import Annotated, Optional

import typer

from litweave.config import Settings, load_config
from litweave.core.pipeline import collect_macros, run_weave
from litweave.util.logging import configure_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then set up logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging("INFO" if settings.verbose else "WARNING")
    return settings


def weave_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Input folder or single file (default: input_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", "-o", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", "-f", help="Output format: md or html")] = None,
    trim: Annotated[Optional[bool], typer.Option("--trim/--no-trim", help="Left-trim comment indentation")] = None,
    recursive: Annotated[Optional[bool], typer.Option("--recursive/--no-recursive", help="Search subfolders")] = None,
    filters: Annotated[Optional[list[str]], typer.Option("--filter", help="Wildcard selecting files; repeatable")] = None,
    language: Annotated[Optional[str], typer.Option("--language", help="Language name for code blocks")] = None,
    templates: Annotated[Optional[str], typer.Option("--templates-dir", help="Folder of page templates")] = None,
    verbose: Annotated[Optional[bool], typer.Option("--verbose", "-v", help="Log every processed file")] = None,
    ):
    """Weave source and markdown files into markdown or HTML documentation."""
    settings = _settings(overrides={
        "input_dir": path, "output_dir": out, "output_format": fmt, "trim": trim,
        "recursive": recursive, "filters": filters or None, "language": language,
        "templates_dir": templates, "verbose": verbose,
    })
    try:
        results = run_weave(settings)
    except (RuntimeError, ValueError) as e:
        _fail(str(e))
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Wove {len(results)} file(s) to {settings.output_dir}/")


def macros_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Input folder or single source file")] = None,
    recursive: Annotated[Optional[bool], typer.Option("--recursive/--no-recursive", help="Search subfolders")] = None,
    filters: Annotated[Optional[list[str]], typer.Option("--filter", help="Wildcard selecting files; repeatable")] = None,
    ):
    """List the regions (macros) defined in source files and how many blocks each spans."""
    settings = _settings(overrides={"input_dir": path, "recursive": recursive, "filters": filters or None})
    try:
        table = collect_macros(settings)
    except RuntimeError as e:
        _fail(str(e))
    if not len(table):
        typer.echo("No macros found.")
        raise typer.Exit(1)
    for name in table.names():
        typer.echo(f"{name}\t{len(table.get(name))} block(s)")
