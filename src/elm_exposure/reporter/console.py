"""Console output reporter using Rich.

This module provides rich console output functionality for
displaying module check results in formatted tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from elm_exposure.core.models import CheckSession, ModuleCheck


@dataclass
class ConsoleSummary:
    """Summary statistics for console output.

    Attributes:
        modules_checked: Number of modules that had candidate tests.
        modules_passed: Number of modules exposing all their tests.
        warning_count: Number of modules with unexposed tests.
        error_count: Number of modules or targets that failed.
        unexposed_count: Total number of unexposed tests.
        duration_seconds: How long the run took.
    """

    modules_checked: int = 0
    modules_passed: int = 0
    warning_count: int = 0
    error_count: int = 0
    unexposed_count: int = 0
    duration_seconds: float = 0.0

    @classmethod
    def from_session(cls, session: CheckSession) -> ConsoleSummary:
        """Build summary statistics from a finished session."""
        return cls(
            modules_checked=session.modules_checked,
            modules_passed=session.passed_count,
            warning_count=session.warning_count,
            error_count=session.error_count,
            unexposed_count=session.unexposed_count,
            duration_seconds=session.duration_seconds,
        )


class ConsoleReporter:
    """Rich console reporter for check results.

    Example:
        ```python
        reporter = ConsoleReporter()
        reporter.print_session(session)
        ```
    """

    STATUS_COLORS: ClassVar[dict[str, str]] = {
        "passed": "green",
        "unexposed": "yellow",
        "error": "red",
        "skipped": "dim",
    }

    def __init__(
        self,
        console: Console | None = None,
        verbose: bool = False,
        show_passed: bool = False,
    ) -> None:
        """Initialize the console reporter.

        Args:
            console: Rich Console instance (creates one if None).
            verbose: Whether to show verbose output.
            show_passed: Whether to list modules that passed.
        """
        self.console = console or Console()
        self.verbose = verbose
        self.show_passed = show_passed

    def print_header(self, title: str = "Elm Exposure Check") -> None:
        """Print a styled header."""
        self.console.print()
        self.console.print(
            Panel(
                f"[bold blue]{title}[/bold blue]",
                border_style="blue",
            )
        )
        self.console.print()

    def print_unexposed(self, modules: list[ModuleCheck]) -> None:
        """Print modules that define tests they do not expose.

        Args:
            modules: Module checks to display; only warnings are shown.
        """
        warnings = [m for m in modules if m.is_warning]
        if not warnings:
            return

        table = Table(
            title="Unexposed Tests",
            show_header=True,
            header_style="bold magenta",
            border_style="yellow",
        )

        table.add_column("Module", style="cyan", no_wrap=True)
        table.add_column("File", style="green")
        table.add_column("Not exposed", style="yellow")

        for module in warnings:
            table.add_row(
                module.module_name,
                self._shorten(module.file_path),
                ", ".join(module.unexposed),
            )

        self.console.print(table)
        self.console.print(
            "[dim]Add these tests to the module's exposing list "
            "or the test runner will not find them.[/dim]"
        )

    def print_errors(self, modules: list[ModuleCheck]) -> None:
        """Print modules that could not be checked."""
        errors = [m for m in modules if m.is_error]
        if not errors:
            return

        table = Table(
            title="Errors",
            show_header=True,
            header_style="bold",
            border_style="red",
        )

        table.add_column("Module", style="cyan", no_wrap=True)
        table.add_column("Problem", style="red")
        table.add_column("Message")

        for module in errors:
            table.add_row(
                module.module_name,
                module.problem_kind.value if module.problem_kind else "-",
                module.message or "",
            )

        self.console.print(table)

    def print_modules(self, modules: list[ModuleCheck]) -> None:
        """Print every module with its status."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Module", style="cyan", no_wrap=True)
        table.add_column("Status")
        table.add_column("Tests", justify="right", style="yellow")

        for module in modules:
            color = self.STATUS_COLORS.get(module.status.value, "white")
            table.add_row(
                module.module_name,
                Text(module.status.value, style=color),
                str(len(module.candidates)),
            )

        self.console.print(table)

    def print_summary(self, summary: ConsoleSummary) -> None:
        """Print summary statistics."""
        self.console.print()

        if summary.warning_count == 0 and summary.error_count == 0:
            self.console.print(
                Panel(
                    f"[green]✓ All tests exposed in {summary.modules_checked} "
                    f"module(s)[/green]",
                    title="Check Complete",
                    border_style="green",
                )
            )
            return

        table = Table(
            title="Check Summary",
            show_header=True,
            header_style="bold",
            border_style="yellow",
        )

        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="yellow")

        table.add_row("Modules Checked", str(summary.modules_checked))
        table.add_row("Modules Passed", str(summary.modules_passed))
        table.add_row(
            "Unexposed Tests",
            Text(str(summary.unexposed_count), style="bold yellow"),
        )
        table.add_row("Errors", Text(str(summary.error_count), style="bold red"))
        table.add_row("Duration", f"{summary.duration_seconds:.2f}s")

        self.console.print(table)

    def print_session(self, session: CheckSession) -> None:
        """Print the full report for a session."""
        self.print_header()
        self.print_info(f"Checked: {', '.join(session.targets)}")

        if self.show_passed or self.verbose:
            self.print_modules(session.modules)

        self.print_unexposed(session.modules)
        self.print_errors(session.modules)

        for error in session.errors:
            self.print_error(error)

        self.print_summary(ConsoleSummary.from_session(session))

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message when verbose."""
        if self.verbose:
            self.console.print(f"[dim]{message}[/dim]")

    @staticmethod
    def _shorten(file_path: str) -> str:
        """Truncate a file path if too long."""
        if len(file_path) > 40:
            return "..." + file_path[-37:]
        return file_path


def create_console_reporter(
    verbose: bool = False,
    show_passed: bool = False,
) -> ConsoleReporter:
    """Create a console reporter.

    Args:
        verbose: Whether to show verbose output.
        show_passed: Whether to list modules that passed.

    Returns:
        Configured ConsoleReporter instance.
    """
    return ConsoleReporter(verbose=verbose, show_passed=show_passed)
