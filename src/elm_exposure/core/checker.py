"""Exposure checking for a single module file.

Reads a module's header, works out which candidate tests it exports and
reports the ones it does not. Nothing here logs or keeps state between
calls, so many modules can be checked concurrently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from elm_exposure.core.comments import CommentStripper
from elm_exposure.core.errors import (
    ExposureProblem,
    OpenFileError,
    ReadFileError,
    UnexposedTestsError,
)
from elm_exposure.core.header import HeaderScanner
from elm_exposure.core.models import ExposureResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from elm_exposure.core.models import ExposureSet


def read_exposing(path: Path) -> ExposureSet:
    """Read a module file's header and return what it exposes.

    Reading stops as soon as the exposing clause is complete.

    Args:
        path: Path to the Elm module source.

    Returns:
        `Wildcard` or `Enumerated` exposure set.

    Raises:
        OpenFileError: If the file cannot be opened.
        ReadFileError: If reading fails part-way or a header line is not UTF-8.
        MissingModuleDeclarationError: If content precedes the module line.
        HeaderParseError: If the file ends before the clause is complete.
    """
    scanner = HeaderScanner(path)
    stripper = CommentStripper()

    try:
        handle = path.open("rb")
    except OSError as e:
        raise OpenFileError(path) from e

    # Lines are decoded one at a time so bytes past the header are never decoded
    with handle:
        try:
            for raw_line in handle:
                line = raw_line.decode("utf-8").rstrip("\r\n")
                exposure = scanner.feed(stripper.strip(line))
                if exposure is not None:
                    return exposure
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFileError(path) from e

    return scanner.finish()


def filter_exposing(
    path: Path,
    candidate_names: Iterable[str],
    module_name: str,
) -> ExposureResult:
    """Keep the candidate tests that a module exports.

    Args:
        path: Path to the Elm module source.
        candidate_names: Test names discovered in the module.
        module_name: Dot-qualified module name, used for labeling.

    Returns:
        ExposureResult with every candidate, when all are exported.

    Raises:
        UnexposedTestsError: If some candidates are not exported. The
            error lists exactly the missing names.
        ExposureProblem: Any of the file or header problems raised by
            `read_exposing`.
    """
    candidates = frozenset(candidate_names)
    accepted = read_exposing(path).accept(candidates)

    if accepted < candidates:
        raise UnexposedTestsError(module_name, candidates - accepted, accepted)

    return ExposureResult(module_name=module_name, accepted=accepted)


def filter_exposing_safe(
    path: Path,
    candidate_names: Iterable[str],
    module_name: str,
) -> tuple[ExposureResult | None, ExposureProblem | None]:
    """Check a module, returning the problem instead of raising it.

    Returns:
        Tuple of (result, problem). Exactly one of them is None.
    """
    try:
        return filter_exposing(path, candidate_names, module_name), None
    except ExposureProblem as problem:
        return None, problem
