"""CLI application entry point."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from elm_exposure import __version__
from elm_exposure.core.orchestrator import OutputFormat, create_orchestrator
from elm_exposure.utils.config import ConfigError, find_config_file, load_config

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="elmexpose",
    help="Elm Exposure - find Elm tests that their module does not expose",
    no_args_is_help=True,
    add_completion=False,
)

EXIT_UNEXPOSED = 1
EXIT_ERROR = 2


def _configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"Elm Exposure v{__version__}")


@app.command()
def check(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Test directories or module files to check (default: tests)",
        ),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option(
            "--output",
            "-o",
            help="Output format: table, json",
        ),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option(
            "--output-file",
            "-f",
            help="Write JSON results to file instead of stdout",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML configuration file (default: elmexpose.toml or [tool.elmexpose])",
        ),
    ] = None,
    show_passed: Annotated[
        bool,
        typer.Option(
            "--show-passed",
            help="List modules whose tests are all exposed",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show verbose output",
        ),
    ] = False,
) -> None:
    """Check that every test in each module is exposed by that module.

    Exits with 1 when tests are not exposed and 2 when a module could
    not be checked.

    Examples:
        elmexpose check
        elmexpose check tests/Unit tests/Integration
        elmexpose check tests/Example.elm --output json
    """
    try:
        settings = load_config(config_file or find_config_file(Path.cwd()))
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=EXIT_ERROR) from None

    _configure_logging("DEBUG" if verbose else settings.logging.level)

    output_name = (output or settings.output.format).lower()
    try:
        output_format = OutputFormat(output_name)
    except ValueError:
        typer.echo(f"Invalid output format: {output_name}", err=True)
        typer.echo("Valid formats: table, json", err=True)
        raise typer.Exit(code=EXIT_ERROR) from None

    orchestrator = create_orchestrator(
        output_format=output_format.value,
        verbose=verbose,
        show_passed=show_passed or settings.output.show_passed,
        max_concurrent=settings.checker.max_concurrent,
        file_extensions=settings.checker.file_extensions,
        skip_paths=settings.checker.skip_paths,
        max_file_size_kb=settings.checker.max_file_size_kb,
    )

    targets = paths or [Path("tests")]
    logger.debug("Checking %s", ", ".join(str(t) for t in targets))
    session = asyncio.run(orchestrator.check_targets(targets))

    if output_file:
        orchestrator.write_results(session, output_file)
        typer.echo(f"Results written to {output_file}")
    else:
        orchestrator.print_results(session)

    if session.error_count > 0:
        raise typer.Exit(code=EXIT_ERROR)
    if session.warning_count > 0:
        raise typer.Exit(code=EXIT_UNEXPOSED)


if __name__ == "__main__":
    app()
