"""Main entry point for the Game Asset Browser.

This allows the package to be run as:
    python -m asset_browser
"""

from .cli.main import cli

if __name__ == "__main__":
    cli()
