# mirrorsync Output Module
# Rich console output

from mirrorsync.output.console import Console

__all__ = [
    "Console",
]
