"""Unit tests for the module file walker."""

from __future__ import annotations

from pathlib import Path

import pytest

from elm_exposure.fetcher.file_walker import (
    DEFAULT_MODULE_EXTENSIONS,
    DEFAULT_SKIP_DIRS,
    ModuleFilter,
    ModuleWalker,
    create_module_walker,
)


def touch_module(path: Path, content: str = "module M exposing (..)\n") -> Path:
    """Write a small module, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def walked(walker: ModuleWalker) -> list[str]:
    """Relative posix paths yielded by a walker."""
    return [f.relative_path.as_posix() for f in walker.walk()]


class TestDefaults:
    """Tests for default constants."""

    def test_extensions(self) -> None:
        """Only Elm sources are checked by default."""
        assert DEFAULT_MODULE_EXTENSIONS == frozenset({".elm"})

    def test_skip_dirs(self) -> None:
        """Build output and packages are never walked."""
        assert {"elm-stuff", "node_modules", ".git"} <= DEFAULT_SKIP_DIRS


class TestModuleFilter:
    """Tests for ModuleFilter."""

    def test_from_config_defaults(self) -> None:
        """Missing values fall back to the defaults."""
        module_filter = ModuleFilter.from_config()
        assert module_filter.extensions == DEFAULT_MODULE_EXTENSIONS
        assert module_filter.skip_dirs == DEFAULT_SKIP_DIRS
        assert module_filter.max_file_size_bytes == 1024 * 1024

    def test_from_config_custom(self) -> None:
        """Extensions are lowercased and skip paths replace the defaults."""
        module_filter = ModuleFilter.from_config(
            file_extensions=[".ELM"], skip_paths=["Fixtures"], max_file_size_kb=2
        )
        assert module_filter.extensions == frozenset({".elm"})
        assert module_filter.skip_dirs == frozenset({"Fixtures"})
        assert module_filter.max_file_size_bytes == 2048

    @pytest.mark.parametrize("name", ["elm-stuff", "node_modules", ".git", ".cache"])
    def test_rejects_directories(self, name: str) -> None:
        """Skipped and hidden directories are not entered."""
        assert ModuleFilter().accepts_directory(name) is False

    def test_accepts_ordinary_directory(self) -> None:
        """Module namespace directories are entered."""
        assert ModuleFilter().accepts_directory("Page") is True

    def test_accepts_module(self, tmp_path: Path) -> None:
        """An Elm file passes."""
        assert ModuleFilter().accepts_file(touch_module(tmp_path / "Example.elm")) is True

    def test_rejects_other_extension(self, tmp_path: Path) -> None:
        """Non-Elm files are rejected."""
        assert ModuleFilter().accepts_file(touch_module(tmp_path / "runner.js")) is False

    def test_rejects_empty_file(self, tmp_path: Path) -> None:
        """Empty files are rejected."""
        assert ModuleFilter().accepts_file(touch_module(tmp_path / "Empty.elm", "")) is False

    def test_rejects_large_file(self, tmp_path: Path) -> None:
        """Files over the size limit are rejected."""
        module_filter = ModuleFilter.from_config(max_file_size_kb=1)
        path = touch_module(tmp_path / "Large.elm", "x" * 2000)
        assert module_filter.accepts_file(path) is False

    def test_rejects_hidden_file(self, tmp_path: Path) -> None:
        """Dot-files are rejected."""
        assert ModuleFilter().accepts_file(touch_module(tmp_path / ".Scratch.elm")) is False

    def test_rejects_symlink(self, tmp_path: Path) -> None:
        """Symlinked modules are not followed."""
        target = touch_module(tmp_path / "Real.elm")
        link = tmp_path / "Link.elm"
        link.symlink_to(target)
        assert ModuleFilter().accepts_file(link) is False


class TestModuleWalker:
    """Tests for ModuleWalker."""

    def test_root_is_resolved(self, tmp_path: Path) -> None:
        """The root is stored as an absolute path."""
        assert ModuleWalker(tmp_path).root == tmp_path.resolve()

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Nothing is yielded for an empty directory."""
        assert walked(ModuleWalker(tmp_path)) == []

    def test_order(self, tmp_path: Path) -> None:
        """A directory's files come sorted, before its subdirectories."""
        touch_module(tmp_path / "Zeta.elm")
        touch_module(tmp_path / "Alpha.elm")
        touch_module(tmp_path / "Page" / "Home.elm")
        touch_module(tmp_path / "Api" / "User.elm")

        assert walked(ModuleWalker(tmp_path)) == [
            "Alpha.elm",
            "Zeta.elm",
            "Api/User.elm",
            "Page/Home.elm",
        ]

    def test_prunes_elm_stuff(self, tmp_path: Path) -> None:
        """Generated code under elm-stuff is not walked or counted."""
        touch_module(tmp_path / "elm-stuff" / "generated-code" / "Main.elm")
        touch_module(tmp_path / "Example.elm")

        walker = ModuleWalker(tmp_path)

        assert walked(walker) == ["Example.elm"]
        assert walker.files_skipped == 0

    def test_paths_are_absolute(self, tmp_path: Path) -> None:
        """Yielded paths are absolute and point at the file."""
        touch_module(tmp_path / "Page" / "Home.elm")
        (module_file,) = list(ModuleWalker(tmp_path).walk())

        assert module_file.path.is_absolute()
        assert module_file.path == (tmp_path / "Page" / "Home.elm").resolve()
        assert module_file.relative_path == Path("Page/Home.elm")

    def test_counters(self, tmp_path: Path) -> None:
        """Found and skipped files are counted."""
        touch_module(tmp_path / "Included.elm")
        touch_module(tmp_path / "notes.md", "# notes")

        walker = ModuleWalker(tmp_path)
        _ = list(walker.walk())

        assert walker.files_found == 1
        assert walker.files_skipped == 1

    def test_nonexistent_directory(self, tmp_path: Path) -> None:
        """A missing root raises."""
        with pytest.raises(FileNotFoundError):
            list(ModuleWalker(tmp_path / "nonexistent").walk())

    def test_file_instead_of_directory(self, tmp_path: Path) -> None:
        """A file root raises."""
        path = touch_module(tmp_path / "Example.elm")
        with pytest.raises(NotADirectoryError):
            list(ModuleWalker(path).walk())


class TestCreateModuleWalker:
    """Tests for the factory function."""

    def test_defaults(self, tmp_path: Path) -> None:
        """The default walker uses the default filter."""
        walker = create_module_walker(tmp_path)
        assert walker.module_filter == ModuleFilter()

    def test_skip_paths_match_whole_names(self, tmp_path: Path) -> None:
        """Skip paths prune directories by exact name."""
        touch_module(tmp_path / "Fixtures" / "A.elm")
        touch_module(tmp_path / "MyFixtures" / "B.elm")

        walker = create_module_walker(tmp_path, skip_paths=["Fixtures"])

        assert walked(walker) == ["MyFixtures/B.elm"]
