"""
CLI command modules.
"""

from merkle_cli.commands import root, prove, verify

__all__ = ["root", "prove", "verify"]
