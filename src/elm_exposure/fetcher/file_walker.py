"""Finding the Elm module files under a tests directory.

Excluded directories such as `elm-stuff` are pruned before they are
entered, so generated code and installed packages are never listed.
Files are yielded directory by directory, each directory's files in
sorted order before its subdirectories.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


DEFAULT_MODULE_EXTENSIONS: frozenset[str] = frozenset({".elm"})

# Directory names never walked into
DEFAULT_SKIP_DIRS: frozenset[str] = frozenset(
    {
        # Elm compiler output and installed packages
        "elm-stuff",
        "node_modules",
        # Version control
        ".git",
        ".hg",
        ".svn",
    }
)


@dataclass
class ModuleFilter:
    """Rules deciding which directories and files are walked.

    Attributes:
        extensions: Lowercase file extensions of module files, with dot.
        skip_dirs: Directory names that are not entered.
        max_file_size_bytes: Larger files are skipped.
        skip_hidden: Whether dot-files and dot-directories are skipped.
    """

    extensions: frozenset[str] = DEFAULT_MODULE_EXTENSIONS
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS
    max_file_size_bytes: int = 1024 * 1024
    skip_hidden: bool = True

    @classmethod
    def from_config(
        cls,
        file_extensions: Iterable[str] | None = None,
        skip_paths: Iterable[str] | None = None,
        max_file_size_kb: int = 1024,
    ) -> ModuleFilter:
        """Build a filter from configuration values, falling back to defaults."""
        extensions = frozenset(ext.lower() for ext in file_extensions or ())
        skip_dirs = frozenset(skip_paths or ())
        return cls(
            extensions=extensions or DEFAULT_MODULE_EXTENSIONS,
            skip_dirs=skip_dirs or DEFAULT_SKIP_DIRS,
            max_file_size_bytes=max_file_size_kb * 1024,
        )

    def accepts_directory(self, name: str) -> bool:
        """Whether a directory with this name is walked into."""
        if name in self.skip_dirs:
            return False
        return not (self.skip_hidden and name.startswith("."))

    def accepts_file(self, path: Path) -> bool:
        """Whether a file is a module to check.

        Symlinks, hidden files, empty files and files over the size limit
        are rejected, as is anything with another extension.
        """
        if path.suffix.lower() not in self.extensions:
            return False
        if self.skip_hidden and path.name.startswith("."):
            return False
        if path.is_symlink() or not path.is_file():
            return False
        try:
            size = path.stat().st_size
        except OSError:
            return False
        return 0 < size <= self.max_file_size_bytes


@dataclass(frozen=True)
class ModuleFile:
    """A module file found by the walker.

    Attributes:
        path: Absolute path to the file.
        relative_path: Path relative to the walk root.
    """

    path: Path
    relative_path: Path


@dataclass
class ModuleWalker:
    """Walks a directory tree and yields the module files in it.

    Example:
        >>> walker = ModuleWalker(Path("tests"))
        >>> [f.relative_path.as_posix() for f in walker.walk()]
        ['Example.elm', 'Page/Home.elm']
    """

    root: Path
    module_filter: ModuleFilter = field(default_factory=ModuleFilter)
    files_found: int = field(default=0, init=False)
    files_skipped: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    def walk(self) -> Iterator[ModuleFile]:
        """Yield every accepted module file under the root.

        Raises:
            FileNotFoundError: If the root does not exist.
            NotADirectoryError: If the root is not a directory.
        """
        if not self.root.exists():
            raise FileNotFoundError(f"Directory not found: {self.root}")
        if not self.root.is_dir():
            raise NotADirectoryError(f"Not a directory: {self.root}")

        self.files_found = 0
        self.files_skipped = 0

        for dirpath, dirnames, filenames in os.walk(self.root):
            # Pruned in place so os.walk does not descend into them
            dirnames[:] = sorted(d for d in dirnames if self.module_filter.accepts_directory(d))
            directory = Path(dirpath)

            for name in sorted(filenames):
                path = directory / name
                if not self.module_filter.accepts_file(path):
                    self.files_skipped += 1
                    continue
                self.files_found += 1
                yield ModuleFile(path=path, relative_path=path.relative_to(self.root))


def create_module_walker(
    root: Path,
    file_extensions: Iterable[str] | None = None,
    skip_paths: Iterable[str] | None = None,
    max_file_size_kb: int = 1024,
) -> ModuleWalker:
    """Create a walker from configuration values.

    Args:
        root: Directory to walk.
        file_extensions: Extensions of module files, defaults to `.elm`.
        skip_paths: Directory names to prune, replacing the defaults.
        max_file_size_kb: Maximum module file size in KB.

    Returns:
        Configured ModuleWalker.
    """
    module_filter = ModuleFilter.from_config(
        file_extensions=file_extensions,
        skip_paths=skip_paths,
        max_file_size_kb=max_file_size_kb,
    )
    return ModuleWalker(root, module_filter)
