"""Reporter module for output formatting."""

from elm_exposure.reporter.console import (
    ConsoleReporter,
    ConsoleSummary,
    create_console_reporter,
)
from elm_exposure.reporter.json_reporter import (
    JSONModule,
    JSONReport,
    JSONReporter,
    create_json_reporter,
)

__all__ = [
    "ConsoleReporter",
    "ConsoleSummary",
    "JSONModule",
    "JSONReport",
    "JSONReporter",
    "create_console_reporter",
    "create_json_reporter",
]
