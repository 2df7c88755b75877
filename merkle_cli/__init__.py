"""
Merkle CLI

Command-line interface for computing Merkle roots, generating inclusion
proofs and verifying them.

Usage:
    python -m merkle_cli root leaves.txt
    python -m merkle_cli prove leaves.txt --index 2 --out proof.json
    python -m merkle_cli verify proof.json --leaves leaves.txt
    python -m merkle_cli verify proof.json --leaf c --root 0x...
    python -m merkle_cli config --init
"""

__version__ = "0.1.0"
