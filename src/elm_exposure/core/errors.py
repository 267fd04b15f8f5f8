"""Problems reported while checking a module's exposed tests.

Each problem kind is an exception class. The checker raises them to its
immediate caller; batch code catches `ExposureProblem` and records the
problem against the module instead of aborting the run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from elm_exposure.core.models import ProblemKind, Severity

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class ExposureProblem(Exception):
    """Base class for all module check problems.

    Attributes:
        kind: The problem kind.
        severity: Whether the problem is a warning or a hard error.
        message: Human-readable description, suitable for standalone display.
    """

    kind: ClassVar[ProblemKind]
    severity: ClassVar[Severity] = Severity.ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnexposedTestsError(ExposureProblem):
    """Candidate tests exist in the source but the module does not export them."""

    kind = ProblemKind.UNEXPOSED_TESTS
    severity = Severity.WARNING

    def __init__(
        self,
        module_name: str,
        unexposed: Iterable[str],
        accepted: Iterable[str] = (),
    ) -> None:
        self.module_name = module_name
        self.unexposed = frozenset(unexposed)
        self.accepted = frozenset(accepted)
        names = ", ".join(sorted(self.unexposed))
        super().__init__(
            f"{module_name} defines tests it does not expose: {names}"
        )


class FileProblem(ExposureProblem):
    """A problem tied to a module file rather than a module name."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class MissingModuleDeclarationError(FileProblem):
    """The first real content of the file is not a module declaration."""

    kind = ProblemKind.MISSING_MODULE_DECLARATION

    def __init__(self, path: Path, first_line: str | None = None) -> None:
        self.first_line = first_line
        message = f"{path} does not start with a module declaration"
        if first_line:
            message += f" (found: {first_line!r})"
        super().__init__(path, message)


class OpenFileError(FileProblem):
    """The module file could not be opened."""

    kind = ProblemKind.OPEN_FILE

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Could not open {path} to read its exports")


class ReadFileError(FileProblem):
    """The module file could not be read to the end of its header."""

    kind = ProblemKind.READ_FILE

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Error while reading {path} for its exports")


class HeaderParseError(FileProblem):
    """The input ended before the exposing clause was complete."""

    kind = ProblemKind.PARSE_ERROR

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Could not parse the module declaration in {path}")
