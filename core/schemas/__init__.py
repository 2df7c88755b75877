"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    ConfigException,
    ErrorCodes,
    IndexOutOfBoundsException,
    MerkleError,
    MerkleException,
    MerkleVerificationException,
    ProofDecodingException,
)

# Proof schemas
from .proof import (
    SCHEMA_VERSION,
    AuditHash,
    AuditPath,
    InclusionProof,
    Side,
)

__all__ = [
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "IndexOutOfBoundsException",
    "MerkleVerificationException",
    "ProofDecodingException",
    "ConfigException",
    # Proofs
    "SCHEMA_VERSION",
    "Side",
    "AuditHash",
    "AuditPath",
    "InclusionProof",
]
