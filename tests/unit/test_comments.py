"""Unit tests for comment stripping."""

from __future__ import annotations

import pytest

from elm_exposure.core.comments import CommentStripper, strip_comments


class TestStripCommentsOutsideBlock:
    """Tests for lines that start outside a block comment."""

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "module Main exposing (main)",
            "x = a - b",
            "y = { a | b = 1 }",
            "    indented text",
        ],
    )
    def test_no_markers_is_identity(self, line: str) -> None:
        """Lines without comment markers come back unchanged."""
        assert strip_comments(line, False) == (line, False)

    def test_line_comment_truncates(self) -> None:
        """A line comment consumes the rest of the line."""
        assert strip_comments("x = 1 -- the answer", False) == ("x = 1 ", False)

    def test_line_comment_at_start(self) -> None:
        """A line that is only a comment becomes empty."""
        assert strip_comments("-- just a comment", False) == ("", False)

    def test_block_comment_on_one_line(self) -> None:
        """A complete block comment is removed in place."""
        assert strip_comments("a {- b -} c", False) == ("a  c", False)

    def test_multiple_block_comments_on_one_line(self) -> None:
        """Several block comments on one line are all removed."""
        assert strip_comments("a {- b -} c {- d -} e", False) == ("a  c  e", False)

    def test_block_comment_then_line_comment(self) -> None:
        """A line comment after a closed block comment still truncates."""
        assert strip_comments("a {- b -} c -- d", False) == ("a  c ", False)

    def test_line_comment_inside_block_comment(self) -> None:
        """A line comment marker inside a block comment does not truncate it."""
        cleaned, inside = strip_comments("{- comment -- not a line comment -}", False)
        assert cleaned == ""
        assert inside is False

    def test_line_comment_before_block_comment(self) -> None:
        """A line comment hides a block opener that follows it."""
        assert strip_comments("x -- {- not a block", False) == ("x ", False)

    def test_open_without_close(self) -> None:
        """An unclosed block comment truncates and sets the flag."""
        assert strip_comments("module Main {- starts here", False) == ("module Main ", True)

    def test_close_without_open_is_text(self) -> None:
        """A stray close marker outside a comment is left alone."""
        assert strip_comments("a -} b", False) == ("a -} b", False)

    def test_doc_comment(self) -> None:
        """Doc comments are block comments."""
        assert strip_comments("{-| Docs -}", False) == ("", False)


class TestStripCommentsInsideBlock:
    """Tests for lines that start inside a block comment."""

    def test_no_markers_is_empty(self) -> None:
        """The whole line is comment text."""
        assert strip_comments("still a comment", True) == ("", True)

    def test_close_keeps_text_after_marker(self) -> None:
        """Only the text after the close marker survives."""
        assert strip_comments("end of comment -} x = 1", True) == (" x = 1", False)

    def test_line_comment_marker_has_no_effect(self) -> None:
        """A line comment marker inside a block comment is ignored."""
        assert strip_comments("-- still in the block", True) == ("", True)

    def test_close_then_new_block(self) -> None:
        """A comment can close and a new one open on the same line."""
        assert strip_comments("a -} b {- c", True) == (" b ", True)

    def test_nested_open_is_not_tracked(self) -> None:
        """The first close marker ends the comment even after a nested open."""
        assert strip_comments("{- outer {- inner -} rest -}", False) == (" rest -}", False)


class TestCommentStripper:
    """Tests for the stateful CommentStripper."""

    def test_carries_flag_across_lines(self) -> None:
        """A block comment spanning several lines is removed."""
        stripper = CommentStripper()
        lines = [
            "{- A module comment",
            "   module Fake exposing (..)",
            "-} module Real exposing (real)",
        ]

        cleaned = [stripper.strip(line) for line in lines]

        assert cleaned == ["", "", " module Real exposing (real)"]
        assert stripper.inside_block_comment is False

    def test_starts_outside_comment(self) -> None:
        """A fresh stripper is not inside a comment."""
        assert CommentStripper().inside_block_comment is False

    def test_unclosed_comment_stays_open(self) -> None:
        """The flag stays set until a close marker is seen."""
        stripper = CommentStripper()
        stripper.strip("{- open")
        stripper.strip("more")
        assert stripper.inside_block_comment is True
