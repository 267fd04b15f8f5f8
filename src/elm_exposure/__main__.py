"""Entry point for running Elm Exposure as a module.

Usage:
    python -m elm_exposure [OPTIONS] COMMAND [ARGS]...
"""

from elm_exposure.cli.app import app

if __name__ == "__main__":
    app()
