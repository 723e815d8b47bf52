"""CLI module for bun-lockb.

This module provides the command-line interface for printing a binary
lockfile as yarn lockfile v1 text. It supports both CLI arguments and
environment variables for configuration.
"""

from .main import (
    Config,
    build_config,
    cli,
    main,
    run,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "run",
]
