"""Entry point for running Chronicle as a module.

Usage:
    python -m chronicle [command] [options]

Example:
    python -m chronicle render releases.yaml --output CHANGELOG.md
    python -m chronicle validate changelog.md.j2
"""

from chronicle.cli import app

if __name__ == "__main__":
    app()
