"""Chronicle utility modules.

- logging: stderr logging in human, verbose and JSON modes
"""

from chronicle.utils.logging import configure_from_cli, get_logger

__all__ = [
    "configure_from_cli",
    "get_logger",
]
