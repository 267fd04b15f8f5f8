"""Core data models for Elm Exposure.

The exposure sets produced by a header scan are small frozen dataclasses.
The per-module and per-session records used for reporting are Pydantic
models, mirroring how results are serialized by the reporters.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TypeAlias
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class Wildcard:
    """The module declares `exposing (..)` and exports everything."""

    def accept(self, candidates: Iterable[str]) -> frozenset[str]:
        """Every candidate is exported."""
        return frozenset(candidates)


@dataclass(frozen=True)
class Enumerated:
    """The module exports a finite set of value-level identifiers.

    Attributes:
        names: Exported value-level names, deduplicated.
    """

    names: frozenset[str] = field(default_factory=frozenset)

    def accept(self, candidates: Iterable[str]) -> frozenset[str]:
        """Return the candidates that appear in the export list."""
        return self.names.intersection(candidates)


ExposureSet: TypeAlias = Wildcard | Enumerated


@dataclass(frozen=True)
class ExposureResult:
    """Successful reconciliation of a module's exports with its tests.

    Attributes:
        module_name: Dot-qualified module name used for labeling.
        accepted: Candidate test names the module exports.
    """

    module_name: str
    accepted: frozenset[str]


class ProblemKind(str, Enum):
    """Kinds of problem a module check can report."""

    UNEXPOSED_TESTS = "unexposed_tests"
    MISSING_MODULE_DECLARATION = "missing_module_declaration"
    OPEN_FILE = "open_file"
    READ_FILE = "read_file"
    PARSE_ERROR = "parse_error"


class Severity(str, Enum):
    """How a problem affects the overall run."""

    WARNING = "warning"
    ERROR = "error"


class ModuleStatus(str, Enum):
    """Outcome of checking one module."""

    PASSED = "passed"
    UNEXPOSED = "unexposed"
    ERROR = "error"
    SKIPPED = "skipped"


class ModuleCheck(BaseModel):
    """Result of checking a single test module.

    Holds the candidate tests found in the file, the ones the module
    exports, and the problem reported for it if any.
    """

    module_name: str = Field(..., description="Dot-qualified module name")
    file_path: str = Field(..., description="Path to the module source")
    status: ModuleStatus = Field(..., description="Outcome of the check")
    candidates: list[str] = Field(default_factory=list, description="Candidate test names")
    accepted: list[str] = Field(default_factory=list, description="Exported candidate tests")
    unexposed: list[str] = Field(default_factory=list, description="Tests the module does not export")
    problem_kind: ProblemKind | None = Field(default=None, description="Kind of problem reported")
    severity: Severity | None = Field(default=None, description="Severity of the problem")
    message: str | None = Field(default=None, description="Human-readable problem message")

    @property
    def is_error(self) -> bool:
        """Whether the check failed with a hard error."""
        return self.status == ModuleStatus.ERROR

    @property
    def is_warning(self) -> bool:
        """Whether the module has tests it does not expose."""
        return self.status == ModuleStatus.UNEXPOSED


class CheckSession(BaseModel):
    """A complete checking session over one or more targets."""

    session_id: UUID = Field(default_factory=uuid4, description="Unique session identifier")
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the session started",
    )
    completed_at: datetime | None = Field(
        default=None,
        description="When the session completed",
    )
    targets: list[str] = Field(default_factory=list, description="Paths that were checked")
    modules: list[ModuleCheck] = Field(default_factory=list, description="Per-module results")
    errors: list[str] = Field(default_factory=list, description="Target-level errors")

    @property
    def modules_checked(self) -> int:
        """Number of modules that had candidate tests."""
        return sum(1 for m in self.modules if m.status != ModuleStatus.SKIPPED)

    @property
    def passed_count(self) -> int:
        """Number of modules exposing all their tests."""
        return sum(1 for m in self.modules if m.status == ModuleStatus.PASSED)

    @property
    def warning_count(self) -> int:
        """Number of modules with unexposed tests."""
        return sum(1 for m in self.modules if m.is_warning)

    @property
    def error_count(self) -> int:
        """Number of modules and targets that failed with a hard error."""
        return sum(1 for m in self.modules if m.is_error) + len(self.errors)

    @property
    def unexposed_count(self) -> int:
        """Total number of unexposed tests across all modules."""
        return sum(len(m.unexposed) for m in self.modules)

    @property
    def duration_seconds(self) -> float:
        """Calculate total session duration in seconds."""
        if self.completed_at and self.started_at:
            return (self.completed_at - self.started_at).total_seconds()
        return 0.0
