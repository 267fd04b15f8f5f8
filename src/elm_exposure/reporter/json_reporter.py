"""JSON output reporter.

This module provides JSON serialization functionality for
exporting check results to files.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from elm_exposure import __version__

if TYPE_CHECKING:
    from pathlib import Path

    from elm_exposure.core.models import CheckSession, ModuleCheck


@dataclass
class JSONModule:
    """JSON representation of one module check.

    Attributes:
        module_name: Dot-qualified module name.
        file_path: Path to the module source.
        status: Outcome of the check.
        candidates: Candidate test names, sorted.
        accepted: Exported candidate tests, sorted.
        unexposed: Tests the module does not export, sorted.
        problem_kind: Kind of problem, if any.
        severity: Severity of the problem, if any.
        message: Problem message, if any.
    """

    module_name: str
    file_path: str
    status: str
    candidates: list[str] = field(default_factory=list)
    accepted: list[str] = field(default_factory=list)
    unexposed: list[str] = field(default_factory=list)
    problem_kind: str | None = None
    severity: str | None = None
    message: str | None = None


@dataclass
class JSONReport:
    """JSON report structure.

    Attributes:
        tool: Name of the tool.
        version: Tool version.
        timestamp: When the report was generated.
        targets: Paths that were checked.
        modules: Per-module results.
        errors: Target-level errors.
        summary: Summary statistics.
    """

    tool: str
    version: str
    timestamp: str
    targets: list[str]
    modules: list[JSONModule]
    errors: list[str] = field(default_factory=list)
    summary: dict[str, Any] = field(default_factory=dict)


class JSONReporter:
    """JSON reporter for check results.

    Example:
        ```python
        reporter = JSONReporter()
        json_output = reporter.generate_json(session)
        reporter.write(session, Path("exposure.json"))
        ```
    """

    def __init__(
        self,
        tool_name: str = "elm-exposure",
        tool_version: str = __version__,
        include_skipped: bool = False,
    ) -> None:
        """Initialize the JSON reporter.

        Args:
            tool_name: Name of the tool.
            tool_version: Version of the tool.
            include_skipped: Whether to list modules without candidate tests.
        """
        self.tool_name = tool_name
        self.tool_version = tool_version
        self.include_skipped = include_skipped

    def _module_to_json(self, module: ModuleCheck) -> JSONModule:
        """Convert a ModuleCheck to its JSON form."""
        return JSONModule(
            module_name=module.module_name,
            file_path=module.file_path,
            status=module.status.value,
            candidates=sorted(module.candidates),
            accepted=sorted(module.accepted),
            unexposed=sorted(module.unexposed),
            problem_kind=module.problem_kind.value if module.problem_kind else None,
            severity=module.severity.value if module.severity else None,
            message=module.message,
        )

    def _compute_summary(self, session: CheckSession) -> dict[str, Any]:
        """Compute summary statistics."""
        return {
            "modules_checked": session.modules_checked,
            "modules_passed": session.passed_count,
            "modules_with_unexposed_tests": session.warning_count,
            "unexposed_tests": session.unexposed_count,
            "errors": session.error_count,
            "duration_seconds": session.duration_seconds,
        }

    def generate(self, session: CheckSession) -> dict[str, Any]:
        """Generate JSON output from a check session.

        Args:
            session: The finished session to report.

        Returns:
            JSON structure as a dictionary.
        """
        modules = [
            self._module_to_json(m)
            for m in session.modules
            if self.include_skipped or m.status.value != "skipped"
        ]

        report = JSONReport(
            tool=self.tool_name,
            version=self.tool_version,
            timestamp=datetime.now(UTC).isoformat(),
            targets=list(session.targets),
            modules=modules,
            errors=list(session.errors),
            summary=self._compute_summary(session),
        )

        return asdict(report)

    def generate_json(self, session: CheckSession, pretty: bool = True) -> str:
        """Generate JSON output as a string.

        Args:
            session: The finished session to report.
            pretty: Whether to format the JSON with indentation.

        Returns:
            JSON string.
        """
        data = self.generate(session)
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)

    def write(self, session: CheckSession, output_path: Path, pretty: bool = True) -> None:
        """Write JSON output to a file.

        Args:
            session: The finished session to report.
            output_path: Path to write the JSON file.
            pretty: Whether to format the JSON with indentation.
        """
        output_path.write_text(self.generate_json(session, pretty), encoding="utf-8")


def create_json_reporter(include_skipped: bool = False) -> JSONReporter:
    """Create a JSON reporter.

    Args:
        include_skipped: Whether to list modules without candidate tests.

    Returns:
        Configured JSONReporter instance.
    """
    return JSONReporter(include_skipped=include_skipped)
