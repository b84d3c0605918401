"""
Module 03 - Tree Nodes
Tagged node variants held by the node store.

Every node carries an explicit `kind`; callers dispatch on it rather
than on the node's shape.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from csmt.crypto.hashing import hash_internal, hash_leaf
from csmt.schemas.models import Entry, NodeHash


class NodeKind(str, Enum):
    LEAF = "leaf"
    INTERNAL = "internal"


@dataclass(frozen=True)
class LeafNode:
    """A stored key and the digest of its value."""

    key: str
    value_digest: str

    kind: ClassVar[NodeKind] = NodeKind.LEAF

    @property
    def hash(self) -> str:
        return hash_leaf(self.key, self.value_digest)

    def to_entry(self) -> Entry:
        return Entry(key=self.key, value=self.value_digest)

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "key": self.key, "value": self.value_digest}


@dataclass(frozen=True)
class InternalNode:
    """A branching point with two child references (either may be EMPTY)."""

    left: NodeHash
    right: NodeHash

    kind: ClassVar[NodeKind] = NodeKind.INTERNAL

    @property
    def hash(self) -> str:
        return hash_internal(self.left, self.right)

    def child(self, direction: int) -> NodeHash:
        return self.right if direction else self.left

    def sibling(self, direction: int) -> NodeHash:
        return self.left if direction else self.right

    def describe(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "left": self.left, "right": self.right}


Node = Union[LeafNode, InternalNode]


def join_children(node: NodeHash, side_node: NodeHash, direction: int) -> InternalNode:
    """Place `node` on the side given by `direction` and its sibling opposite."""
    if direction:
        return InternalNode(left=side_node, right=node)
    return InternalNode(left=node, right=side_node)
