"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

from argparse import Namespace

from merkle_cli.config import CLIConfig


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def get_config(args: Namespace) -> CLIConfig:
    """Config attached by main(), or defaults when a command is called directly."""
    return getattr(args, "cli_config", None) or CLIConfig()


def leaf_encoding(args: Namespace) -> str:
    """--hex wins over the configured encoding."""
    if getattr(args, "hex", False):
        return "hex"
    return get_config(args).leaf_encoding


def wants_json(args: Namespace) -> bool:
    """--json wins over the configured output format."""
    if getattr(args, "json", False):
        return True
    return get_config(args).default_output_format == "json"
