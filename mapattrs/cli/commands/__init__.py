"""CLI commands for mapattrs."""

from . import (
    chain,
    resolve,
    validate,
    config_cmd,
)

__all__ = [
    "chain",
    "resolve",
    "validate",
    "config_cmd",
]
