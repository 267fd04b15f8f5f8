"""Module header scanning.

Drives a small state machine over comment-stripped lines until the
module's exposing clause is complete. The state is a tagged union of
frozen dataclasses and `advance` is a pure transition function, so a
scan is just a fold over the file's lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from elm_exposure.core.errors import HeaderParseError, MissingModuleDeclarationError
from elm_exposure.core.models import Enumerated, ExposureSet, Wildcard

if TYPE_CHECKING:
    from pathlib import Path


MODULE_PREFIXES: tuple[str, ...] = ("module", "port module", "effect module")
EXPOSING_KEYWORD = "exposing"
WILDCARD_TOKEN = ".."
TYPE_WILDCARD = "(..)"


@dataclass(frozen=True)
class AwaitingModuleKeyword:
    """No real content has been seen yet."""


@dataclass(frozen=True)
class ReadingModuleName:
    """Skipping the dotted module name until `exposing` appears."""


@dataclass(frozen=True)
class AwaitingOpenBracket:
    """Looking for the parenthesis that opens the exposing clause."""


@dataclass(frozen=True)
class AccumulatingExposedNames:
    """Collecting the text of the exposing clause.

    Attributes:
        depth: Number of unclosed parentheses, including the opening one.
        buffer: Clause text collected so far.
    """

    depth: int = 1
    buffer: str = ""


@dataclass(frozen=True)
class ModuleDeclarationMissing:
    """Terminal: content appeared before any module declaration.

    Attributes:
        first_line: The offending line.
    """

    first_line: str


@dataclass(frozen=True)
class Done:
    """Terminal: the exposing clause has been read.

    Attributes:
        exposure: What the module exports.
    """

    exposure: ExposureSet


ScanState: TypeAlias = (
    AwaitingModuleKeyword
    | ReadingModuleName
    | AwaitingOpenBracket
    | AccumulatingExposedNames
    | ModuleDeclarationMissing
    | Done
)


def is_value_identifier(name: str) -> bool:
    """Check whether an exported item is a value rather than a type or constructor."""
    return bool(name) and name[0].islower() and TYPE_WILDCARD not in name


def parse_exposed_names(clause: str) -> ExposureSet:
    """Turn the text between the exposing parentheses into an exposure set.

    Args:
        clause: Text inside the outermost parentheses of the clause.

    Returns:
        `Wildcard` for `..`, otherwise the value-level names listed.
    """
    if clause.strip() == WILDCARD_TOKEN:
        return Wildcard()

    names = {piece.strip() for piece in clause.split(",")}
    return Enumerated(frozenset(name for name in names if is_value_identifier(name)))


def _strip_module_prefix(line: str) -> str | None:
    """Return the text after a module prefix, or None if the line has none."""
    for prefix in MODULE_PREFIXES:
        if not line.startswith(prefix):
            continue
        rest = line[len(prefix) :]
        if not rest or rest[0].isspace():
            return rest
    return None


def advance(state: ScanState, line: str) -> tuple[ScanState, ExposureSet | None]:
    """Feed one comment-stripped line into the header state machine.

    A single line may move the machine through several states, for
    example `module Main exposing (main)` goes from the initial state
    straight to `Done`.

    Args:
        state: Current scan state.
        line: Next line with comments already removed.

    Returns:
        Tuple of (new_state, exposure). `exposure` is set once the
        machine reaches `Done` and None otherwise.
    """
    text = line

    while True:
        if isinstance(state, Done):
            return state, state.exposure

        if isinstance(state, ModuleDeclarationMissing):
            return state, None

        if isinstance(state, AwaitingModuleKeyword):
            stripped = text.strip()
            if not stripped:
                return state, None
            rest = _strip_module_prefix(stripped)
            if rest is None:
                return ModuleDeclarationMissing(first_line=stripped), None
            state, text = ReadingModuleName(), rest

        elif isinstance(state, ReadingModuleName):
            index = text.find(EXPOSING_KEYWORD)
            if index == -1:
                return state, None
            state, text = AwaitingOpenBracket(), text[index + len(EXPOSING_KEYWORD) :]

        elif isinstance(state, AwaitingOpenBracket):
            index = text.find("(")
            if index == -1:
                return state, None
            state, text = AccumulatingExposedNames(), text[index + 1 :]

        else:
            depth = state.depth
            for index, char in enumerate(text):
                if char == "(":
                    depth += 1
                elif char == ")":
                    depth -= 1
                    if depth == 0:
                        exposure = parse_exposed_names(state.buffer + text[:index])
                        return Done(exposure), exposure
            return AccumulatingExposedNames(depth, state.buffer + text + "\n"), None


class HeaderScanner:
    """Stateful wrapper around `advance` for scanning one file.

    Example:
        >>> scanner = HeaderScanner(Path("tests/Example.elm"))
        >>> scanner.feed("module Example exposing (suite)")
        Enumerated(names=frozenset({'suite'}))
    """

    def __init__(self, path: Path) -> None:
        """Initialize the scanner.

        Args:
            path: File being scanned, used to label problems.
        """
        self.path = path
        self.state: ScanState = AwaitingModuleKeyword()

    @property
    def is_done(self) -> bool:
        """Whether the exposing clause has been fully read."""
        return isinstance(self.state, Done)

    def feed(self, line: str) -> ExposureSet | None:
        """Advance the scan by one comment-stripped line.

        Returns:
            The exposure set once the clause is complete, otherwise None.

        Raises:
            MissingModuleDeclarationError: If content precedes the module line.
        """
        self.state, exposure = advance(self.state, line)
        if isinstance(self.state, ModuleDeclarationMissing):
            raise MissingModuleDeclarationError(self.path, self.state.first_line)
        return exposure

    def finish(self) -> ExposureSet:
        """Signal end of input.

        Raises:
            HeaderParseError: If the exposing clause was never completed.
        """
        if isinstance(self.state, Done):
            return self.state.exposure
        raise HeaderParseError(self.path)
