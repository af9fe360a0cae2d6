"""CLI commands for liveorder."""

from . import (
    reorder,
    check,
    detect,
    config_cmd,
)

__all__ = [
    "reorder",
    "check",
    "detect",
    "config_cmd",
]
