"""CLI commands for cryptoplug."""

from . import (
    features,
    flags,
    config_cmd,
)

__all__ = [
    "features",
    "flags",
    "config_cmd",
]
