"""Comment stripping for Elm source lines.

Removes `--` line comments and `{- ... -}` block comments from one line at
a time, threading an "inside block comment" flag from line to line.

Nested block comments are not tracked: the first `-}` ends the comment no
matter how many `{-` markers preceded it.
"""

from __future__ import annotations

LINE_COMMENT = "--"
BLOCK_COMMENT_OPEN = "{-"
BLOCK_COMMENT_CLOSE = "-}"


def strip_comments(line: str, inside_block_comment: bool = False) -> tuple[str, bool]:
    """Remove comment text from a single line.

    Markers are consumed left to right. Outside a block comment only `--`
    and `{-` are significant and whichever comes first wins; inside a
    block comment only `-}` is. A stray `-}` outside a comment is kept as
    plain text.

    Args:
        line: Raw source line, without its line terminator.
        inside_block_comment: Whether the previous line ended inside a
            block comment.

    Returns:
        Tuple of (cleaned_line, still_inside_block_comment).

    Example:
        >>> strip_comments("x = 1 {- one -} + 2 -- two")
        ('x = 1  + 2 ', False)
    """
    kept: list[str] = []
    rest = line
    inside = inside_block_comment

    while True:
        if inside:
            close_index = rest.find(BLOCK_COMMENT_CLOSE)
            if close_index == -1:
                return "".join(kept), True
            rest = rest[close_index + len(BLOCK_COMMENT_CLOSE) :]
            inside = False
            continue

        open_index = rest.find(BLOCK_COMMENT_OPEN)
        line_comment_index = rest.find(LINE_COMMENT)

        if line_comment_index != -1 and (
            open_index == -1 or line_comment_index < open_index
        ):
            kept.append(rest[:line_comment_index])
            return "".join(kept), False

        if open_index == -1:
            kept.append(rest)
            return "".join(kept), False

        kept.append(rest[:open_index])
        rest = rest[open_index + len(BLOCK_COMMENT_OPEN) :]
        inside = True


class CommentStripper:
    """Strips comments from successive lines of one file.

    Example:
        >>> stripper = CommentStripper()
        >>> stripper.strip("{- start")
        ''
        >>> stripper.strip("end -} module Main exposing (main)")
        ' module Main exposing (main)'
    """

    def __init__(self) -> None:
        self.inside_block_comment = False

    def strip(self, line: str) -> str:
        """Strip comments from the next line of the file."""
        cleaned, self.inside_block_comment = strip_comments(
            line, self.inside_block_comment
        )
        return cleaned
