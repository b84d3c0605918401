"""
Module 03 - Node Store
Content-addressed mapping from node hash to node, owned by one tree.
"""
from __future__ import annotations

from collections.abc import Iterator

from csmt.schemas.models import EMPTY, NodeHash
from csmt.tree.nodes import Node, NodeKind


class NodeStore:
    """
    In-memory content-addressed node map.

    EMPTY is implicit and never stored. Nothing outside the owning tree
    holds references into the map.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}

    def put(self, node_hash: NodeHash, node: Node) -> None:
        if node_hash is EMPTY:
            raise ValueError("The empty-subtree marker cannot be stored")
        self._nodes[node_hash] = node

    def get(self, node_hash: NodeHash) -> Node | None:
        if node_hash is EMPTY:
            return None
        return self._nodes.get(node_hash)

    def remove(self, node_hash: NodeHash) -> None:
        if node_hash is not EMPTY:
            self._nodes.pop(node_hash, None)

    def is_leaf(self, node_hash: NodeHash) -> bool:
        node = self.get(node_hash)
        return node is not None and node.kind is NodeKind.LEAF

    def items(self) -> Iterator[tuple[str, Node]]:
        return iter(list(self._nodes.items()))

    def snapshot(self) -> dict[str, Node]:
        # Nodes are immutable, a shallow copy is a full snapshot
        return dict(self._nodes)

    def restore(self, snapshot: dict[str, Node]) -> None:
        self._nodes = dict(snapshot)

    def __contains__(self, node_hash: object) -> bool:
        return node_hash in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
