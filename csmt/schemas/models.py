"""
Module 01 - Schemas & Canonicalization
File: models.py

Purpose: Result records returned by the tree engine and consumed by
proof verification, plus the empty-subtree sentinel they refer to.
"""

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmptyNode(Enum):
    """
    Marker for an empty subtree.

    A separate type rather than a reserved digest string, so it can never
    be confused with a real hash. Renders as JSON null.
    """

    EMPTY = None

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = EmptyNode.EMPTY

# A node reference: hex digest of a stored node, or EMPTY
NodeHash = Union[str, EmptyNode]


def _none_to_empty(value: Any) -> Any:
    return EMPTY if value is None else value


class Entry(BaseModel):
    """
    A key as seen by the tree.

    Attributes:
        key: Canonical hex rendering of the key bytes
        value: Hex digest of the stored value, or None when the key
               holds no value (absence)
    """

    model_config = ConfigDict(extra="forbid")

    key: str = Field(..., description="Hex-encoded key")
    value: str | None = Field(default=None, description="Hex digest of the value")

    @property
    def has_value(self) -> bool:
        return self.value is not None


class EntryResponse(BaseModel):
    """
    Outcome of walking the tree along a key's path.

    Attributes:
        entry: The queried key, with its value digest when present
        matching_entry: A different leaf found at the position the key's
                        path leads to, if any
        side_nodes: Sibling hashes collected from the root down to the
                    point where the walk stopped
    """

    model_config = ConfigDict(extra="forbid")

    entry: Entry
    matching_entry: Entry | None = Field(default=None)
    side_nodes: list[NodeHash] = Field(default_factory=list)

    @field_validator("side_nodes", mode="before")
    @classmethod
    def _side_nodes_from_json(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_none_to_empty(v) for v in value]
        return value


class Proof(EntryResponse):
    """
    Membership or non-membership proof for a single key.

    A proof is self-contained: verification needs nothing but the proof.
    `membership` is True when the entry carries a value.
    """

    root: NodeHash = Field(default=EMPTY)
    membership: bool = Field(default=False)

    @field_validator("root", mode="before")
    @classmethod
    def _root_from_json(cls, value: Any) -> Any:
        return _none_to_empty(value)


class BatchEntry(BaseModel):
    """One element of a batch insert, after shape validation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: bytes = Field(..., strict=True, description="Key bytes")
    value: Any = Field(..., description="Value to be digested")
