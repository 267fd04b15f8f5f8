"""Core module containing the exposure checker and its data models."""

from elm_exposure.core.checker import (
    filter_exposing,
    filter_exposing_safe,
    read_exposing,
)
from elm_exposure.core.comments import CommentStripper, strip_comments
from elm_exposure.core.errors import (
    ExposureProblem,
    FileProblem,
    HeaderParseError,
    MissingModuleDeclarationError,
    OpenFileError,
    ReadFileError,
    UnexposedTestsError,
)
from elm_exposure.core.header import HeaderScanner, advance, parse_exposed_names
from elm_exposure.core.models import (
    CheckSession,
    Enumerated,
    ExposureResult,
    ExposureSet,
    ModuleCheck,
    ModuleStatus,
    ProblemKind,
    Severity,
    Wildcard,
)

__all__ = [
    "CheckSession",
    "CommentStripper",
    "Enumerated",
    "ExposureProblem",
    "ExposureResult",
    "ExposureSet",
    "FileProblem",
    "HeaderParseError",
    "HeaderScanner",
    "MissingModuleDeclarationError",
    "ModuleCheck",
    "ModuleStatus",
    "OpenFileError",
    "ProblemKind",
    "ReadFileError",
    "Severity",
    "UnexposedTestsError",
    "Wildcard",
    "advance",
    "filter_exposing",
    "filter_exposing_safe",
    "parse_exposed_names",
    "read_exposing",
    "strip_comments",
]
