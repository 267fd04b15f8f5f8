"""Pytest configuration and shared fixtures."""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_module(temp_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes an Elm module under the temp directory."""

    def _write(relative_path: str, content: str) -> Path:
        path = temp_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mock_tests_dir(temp_dir: Path) -> Path:
    """Create a mock Elm tests directory."""
    tests = temp_dir / "tests"
    (tests / "Page").mkdir(parents=True)
    (tests / "elm-stuff").mkdir()

    # Every test exposed
    (tests / "Example.elm").write_text(
        '''module Example exposing (suite)

import Expect
import Test exposing (..)


suite : Test
suite =
    test "adds" <| \\_ -> Expect.equal 2 (1 + 1)
'''
    )

    # One test missing from the exposing list
    (tests / "Page" / "Home.elm").write_text(
        '''module Page.Home exposing (viewTests)

import Test exposing (Test, describe)


viewTests : Test
viewTests =
    describe "view" []


updateTests : Test
updateTests =
    describe "update" []
'''
    )

    # Helper module without tests
    (tests / "Helpers.elm").write_text(
        '''module Helpers exposing (fuzzName)

fuzzName : String
fuzzName =
    "name"
'''
    )

    # Build artifact that must not be walked
    (tests / "elm-stuff" / "Generated.elm").write_text(
        '''module Generated exposing (main)

hidden : Test
hidden =
    todo "never checked"
'''
    )

    return tests
