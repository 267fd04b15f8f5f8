"""Elm Exposure - checks that Elm test modules expose the tests they define."""

__version__ = "0.1.0"
