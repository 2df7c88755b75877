"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli root <leaves_file> [--hex] [--json]
    python -m merkle_cli prove <leaves_file> --index N [--out PATH] [--hex] [--json]
    python -m merkle_cli verify <proof_file> --leaves <leaves_file> [--hex] [--json]
    python -m merkle_cli verify <proof_file> --leaf VALUE [--root HEX] [--hex] [--json]
    python -m merkle_cli config --init | --show

Environment Variables:
    MERKLE_LOG_LEVEL            Log level (default: WARNING)
    MERKLE_LOG_FILE             Also log to this file
    MERKLE_LEAF_ENCODING        Leaf encoding: utf-8 or hex (default: utf-8)
    MERKLE_OUTPUT_FORMAT        Output format: human or json (default: human)
    MERKLE_PROOF_INDENT         JSON indent for proof documents (default: 2)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkle_cli import __version__
from merkle_cli.commands import prove, root, verify
from merkle_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from merkle_cli.config import LOG_LEVELS, get_default_config_template, load_config


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Leaves are 0x-prefixed hex strings (default: from config, else raw utf-8 lines)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Compute Merkle roots, generate inclusion proofs and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.json or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=list(LOG_LEVELS),
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a leaves file",
        description="Read one leaf per line and print the root digest.",
    )
    root_parser.add_argument(
        "leaves_file",
        type=str,
        help="File with one leaf per line",
    )
    _add_common_flags(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one leaf",
        description="Build the audit path for the leaf at --index and emit it as a JSON proof document.",
    )
    prove_parser.add_argument(
        "leaves_file",
        type=str,
        help="File with one leaf per line",
    )
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based index of the leaf to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document here instead of stdout",
    )
    _add_common_flags(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof document",
        description="Verify a proof against the full leaf set, or against one leaf and a trusted root.",
    )
    verify_parser.add_argument(
        "proof_file",
        type=str,
        help="Proof document produced by 'merkle prove'",
    )
    target = verify_parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "--leaves",
        type=str,
        default=None,
        help="File with the full leaf set; the root is recomputed from it",
    )
    target.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="The proven leaf value",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root (0x-hex) to check a --leaf against",
    )
    _add_common_flags(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.json",
        help="Path for config file (default: merkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: merkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    if args.command == "verify" and args.root is not None and args.leaf is None:
        print("Error: --root can only be used with --leaf", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
