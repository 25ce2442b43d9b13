"""CLI module for eolcheck.

This module provides the command-line interfaces for EOL lookups and HTML
reports. Options fall back to environment variables.
"""

from .main import (
    Config,
    build_config,
    cli,
    main,
    report_cli,
    report_main,
    run_lookup,
)

__all__ = [
    "cli",
    "main",
    "report_cli",
    "report_main",
    "Config",
    "build_config",
    "run_lookup",
]
