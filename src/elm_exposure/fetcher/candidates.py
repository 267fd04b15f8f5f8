"""Discovery of candidate test names in Elm modules.

A candidate is any top-level value annotated with the type `Test`:

    suite : Test
    suite =
        describe "..." [ ... ]

Discovery only looks at annotations, so a test whose annotation is
missing is not a candidate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from elm_exposure.core.comments import CommentStripper
from elm_exposure.core.errors import OpenFileError, ReadFileError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from elm_exposure.fetcher.file_walker import ModuleWalker


# Top-level annotation: `name : Type`, starting in column 0
ANNOTATION_PATTERN = re.compile(r"^([a-z][A-Za-z0-9_]*)\s*:(?!:)(.*)$")

TEST_TYPES: frozenset[str] = frozenset({"Test", "Test.Test"})


@dataclass
class TestModule:
    """A module file together with the tests found in it.

    Attributes:
        path: Path to the module source.
        module_name: Dot-qualified module name.
        candidates: Names of top-level values annotated as `Test`.
    """

    __test__ = False

    path: Path
    module_name: str
    candidates: frozenset[str] = field(default_factory=frozenset)


def module_name_from_path(path: Path, root: Path) -> str:
    """Derive the dot-qualified module name from a file's location.

    Args:
        path: Path to the module source.
        root: Source directory the module name is relative to.

    Returns:
        Module name, e.g. `Foo.Bar` for `root/Foo/Bar.elm`.
    """
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path.relative_to(path.parent)
    return ".".join(relative.with_suffix("").parts)


def find_candidate_tests(source: str) -> frozenset[str]:
    """Find top-level values annotated with the `Test` type.

    Annotations may continue on indented lines. Comments are ignored.

    Args:
        source: Full module source text.

    Returns:
        Set of candidate test names.
    """
    stripper = CommentStripper()
    names: set[str] = set()
    pending_name: str | None = None
    pending_type: list[str] = []

    def flush() -> None:
        if pending_name is not None and " ".join(pending_type).strip() in TEST_TYPES:
            names.add(pending_name)

    for raw_line in source.splitlines():
        line = stripper.strip(raw_line)

        if not line.strip() or line[0].isspace():
            if pending_name is not None:
                pending_type.append(line.strip())
            continue

        flush()
        pending_name, pending_type = None, []

        match = ANNOTATION_PATTERN.match(line)
        if match:
            pending_name = match.group(1)
            pending_type = [match.group(2).strip()]

    flush()
    return frozenset(names)


def load_candidates(path: Path) -> frozenset[str]:
    """Read a module file and find its candidate tests.

    Raises:
        OpenFileError: If the file cannot be opened.
        ReadFileError: If the file cannot be read or is not UTF-8.
    """
    try:
        handle = path.open(encoding="utf-8")
    except OSError as e:
        raise OpenFileError(path) from e

    with handle:
        try:
            source = handle.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFileError(path) from e

    return find_candidate_tests(source)


def iter_module_files(walker: ModuleWalker) -> Iterator[TestModule]:
    """Yield every module under the walker's root, without candidates.

    Candidates are filled in later by whoever reads the files, so that
    read failures are reported per module.
    """
    for module_file in walker.walk():
        yield TestModule(
            path=module_file.path,
            module_name=module_name_from_path(module_file.path, walker.root),
        )
