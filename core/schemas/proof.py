"""
Schemas
File: proof.py

Purpose: Audit path and inclusion proof schemas.

Wire format (JSON):
- Digests are lowercase hex strings with a 0x prefix
- Sides are "left" / "right"
- Audit paths are ordered bottom-up: the leaf's sibling first,
  the root's child last
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from core.crypto.hashing import DIGEST_SIZE, from_hex, to_hex

from .errors import ProofDecodingException


SCHEMA_VERSION = "v1"


def _coerce_digest(value: Any) -> Any:
    """Accept 0x-hex strings in place of raw digest bytes."""
    if isinstance(value, str):
        return from_hex(value)
    return value


def _check_digest(value: bytes) -> bytes:
    if len(value) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(value)}")
    return value


class Side(str, Enum):
    """
    Operand position of an audit digest when recombined with the running hash.

    RIGHT: running hash is the left operand, the audit digest the right one.
    LEFT:  audit digest is the left operand, the running hash the right one.
    """

    LEFT = "left"
    RIGHT = "right"


class AuditHash(BaseModel):
    """
    One step of an audit path: a sibling digest and the side it goes on.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    val: bytes = Field(..., description="Sibling subtree digest")
    side: Side = Field(..., description="Side the digest occupies when combined")

    @field_validator("val", mode="before")
    @classmethod
    def _decode_val(cls, v: Any) -> Any:
        return _coerce_digest(v)

    @field_validator("val", mode="after")
    @classmethod
    def _validate_val(cls, v: bytes) -> bytes:
        return _check_digest(v)

    @field_serializer("val", when_used="json")
    def _serialize_val(self, v: bytes) -> str:
        return to_hex(v)

    def __repr__(self) -> str:
        return f"AuditHash(val={to_hex(self.val)[:18]}..., side={self.side.value})"


# Ordered bottom-up, immutable once built
AuditPath = tuple[AuditHash, ...]


class InclusionProof(BaseModel):
    """
    Self-contained inclusion proof for the leaf at `index`.

    Carries the audit path together with the tree size and the root it was
    generated against, so it can be stored or sent and checked later
    against a trusted root.

    Attributes:
        index: 0-based index of the proven leaf
        leaf_count: Number of leaves in the tree the proof was built from
        path: Audit path, bottom-up
        root: Root digest of the tree
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    index: int = Field(..., ge=0, description="0-based leaf index")
    leaf_count: int = Field(..., ge=1, description="Number of leaves in the tree")
    path: AuditPath = Field(default=(), description="Audit path, bottom-up")
    root: bytes = Field(..., description="Root digest the proof was built against")

    @field_validator("root", mode="before")
    @classmethod
    def _decode_root(cls, v: Any) -> Any:
        return _coerce_digest(v)

    @field_validator("root", mode="after")
    @classmethod
    def _validate_root(cls, v: bytes) -> bytes:
        return _check_digest(v)

    @field_serializer("root", when_used="json")
    def _serialize_root(self, v: bytes) -> str:
        return to_hex(v)

    @model_validator(mode="after")
    def _index_within_tree(self) -> "InclusionProof":
        if self.index >= self.leaf_count:
            raise ValueError(
                f"index {self.index} must be less than leaf_count {self.leaf_count}"
            )
        return self

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to the JSON wire format."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> "InclusionProof":
        """
        Parse a proof from its JSON wire format.

        Raises:
            ProofDecodingException: If the document is not valid JSON or does
                not describe a well-formed proof.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            first = e.errors()[0] if e.errors() else {}
            loc = ".".join(str(p) for p in first.get("loc", ()))
            raise ProofDecodingException(
                message=f"Invalid inclusion proof: {first.get('msg', str(e))}",
                field_path=loc or None,
                details={"error_count": e.error_count()},
            ) from e


__all__ = [
    "SCHEMA_VERSION",
    "Side",
    "AuditHash",
    "AuditPath",
    "InclusionProof",
]
