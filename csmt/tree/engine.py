"""
Module 03 - Tree Engine
Compact sparse Merkle tree: insertion, lookup, deletion and proofs.

The tree commits a key set to one root hash. Empty subtrees are never
materialized: internal nodes exist only where two leaves diverge and
along the chain between that divergence and the root. A lone key sits
as a leaf directly under the deepest internal node on its path (or is
the root itself).

Mutation is single-version: every add/delete prunes the nodes it
supersedes, so no earlier root can be reconstructed afterwards.

Usage:
    from csmt import CompactSparseMerkleTree

    tree = CompactSparseMerkleTree()
    tree.insert([{"id": [25, 35, 239], "value": "abc"}])
    proof = tree.create_proof([25, 35, 239])
    assert tree.verify_proof(proof)
"""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from csmt.config.runtime import TreeConfig
from csmt.crypto.hashing import digest_value, hash_leaf
from csmt.schemas.errors import (
    DuplicateKeyException,
    KeyNotFoundException,
    KeyPathCollisionException,
    ValidationException,
)
from csmt.schemas.models import EMPTY, BatchEntry, Entry, EntryResponse, NodeHash, Proof
from csmt.tree.nodes import LeafNode, NodeKind, join_children
from csmt.tree.paths import (
    TreePath,
    key_to_hex,
    key_to_path,
    last_non_empty_index,
    normalize_key,
)
from csmt.tree.proofs import verify_proof
from csmt.tree.store import NodeStore


logger = logging.getLogger(__name__)


class CompactSparseMerkleTree:
    """
    Authenticated key/value set with membership and non-membership proofs.

    Not thread-safe: callers must serialize add/delete/insert against
    every other operation on the same instance.
    """

    def __init__(self, config: TreeConfig | None = None, debug: bool | None = None) -> None:
        config = config or TreeConfig()
        if debug is not None:
            config = dataclasses.replace(config, debug=debug)
        self.config = config
        self._store = NodeStore()
        self._root: NodeHash = EMPTY
        self._leaf_count = 0

    @property
    def root(self) -> NodeHash:
        """Current commitment: a hex digest, or EMPTY for an empty tree."""
        return self._root

    @property
    def node_count(self) -> int:
        """Number of nodes (leaves and internal) held in the store."""
        return len(self._store)

    def __len__(self) -> int:
        return self._leaf_count

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def insert(self, entries: Sequence[Mapping[str, Any] | BatchEntry]) -> None:
        """
        Add a batch of {"id": key, "value": value} entries in order.

        The whole batch is validated before anything is added. Unless
        the tree was configured with atomic_inserts, entries added
        before a failing one stay in the tree.

        Raises:
            ValidationException: If the batch is malformed
            DuplicateKeyException: If an entry's key is already present
            KeyPathCollisionException: If an entry's key shares a path
                with a present key
        """
        batch = self._validate(entries)

        snapshot = None
        if self.config.atomic_inserts:
            snapshot = (self._store.snapshot(), self._root, self._leaf_count)

        try:
            for item in batch:
                self.add(item.id, item.value)
        except Exception:
            if snapshot is not None:
                nodes, self._root, self._leaf_count = snapshot
                self._store.restore(nodes)
                logger.warning("Batch insert failed, tree restored to root %r", self._root)
            raise

        logger.info("Inserted %d entries, root=%r", len(batch), self._root)
        if self.config.debug:
            logger.debug("Node store: %s", self.dump_nodes())

    def add(self, key: Any, value: Any) -> None:
        """
        Add a key with a value.

        Raises:
            ValidationException: If the key is not a byte sequence of at
                most 32 bytes
            DuplicateKeyException: If the key already holds a value
            KeyPathCollisionException: If another key encodes to the
                same path
        """
        key_hex = key_to_hex(key)
        path = key_to_path(key_hex)
        value_digest = digest_value(value)

        found = self._retrieve_entry(key_hex, path)
        if found.entry.has_value:
            raise DuplicateKeyException(key_hex)

        matching = found.matching_entry
        side_nodes = list(found.side_nodes)

        anchor: NodeHash = EMPTY
        matching_path: TreePath | None = None
        if matching is not None:
            matching_path = key_to_path(matching.key)
            if matching_path == path:
                raise KeyPathCollisionException(key_hex, matching.key)
            anchor = hash_leaf(matching.key, matching.value)

        if side_nodes:
            self._delete_old_nodes(anchor, path, side_nodes)

        if matching_path is not None:
            # Materialize the elided levels down to where the paths split
            depth = len(side_nodes)
            while matching_path[depth] == path[depth]:
                side_nodes.append(EMPTY)
                depth += 1
            side_nodes.append(anchor)

        leaf = LeafNode(key=key_hex, value_digest=value_digest)
        leaf_hash = leaf.hash
        self._store.put(leaf_hash, leaf)
        self._root = self._add_new_nodes(leaf_hash, path, side_nodes)
        self._leaf_count += 1

        logger.debug("Added key %s at depth %d, root=%s", key_hex, len(side_nodes), self._root)

    def get(self, key: Any) -> str | None:
        """Return the hex digest of the key's value, or None if absent."""
        key_hex = key_to_hex(key)
        return self._retrieve_entry(key_hex).entry.value

    def delete(self, key: Any) -> None:
        """
        Remove a key, re-compacting the tree around it.

        Raises:
            ValidationException: If the key is malformed
            KeyNotFoundException: If the key is not present
        """
        key_hex = key_to_hex(key)
        path = key_to_path(key_hex)

        found = self._retrieve_entry(key_hex, path)
        if not found.entry.has_value:
            raise KeyNotFoundException(key_hex)

        leaf_hash = hash_leaf(key_hex, found.entry.value)
        self._store.remove(leaf_hash)
        self._leaf_count -= 1

        side_nodes = list(found.side_nodes)
        if not side_nodes:
            self._root = EMPTY
            logger.debug("Deleted key %s, tree is empty", key_hex)
            return

        self._delete_old_nodes(leaf_hash, path, side_nodes)

        if not self._store.is_leaf(side_nodes[-1]):
            # Sibling subtree holds several leaves and stays where it is
            self._root = self._add_new_nodes(EMPTY, path, side_nodes)
        else:
            # Lone sibling leaf moves up past the now-empty levels
            promoted = side_nodes.pop()
            last = last_non_empty_index(side_nodes)
            self._root = self._add_new_nodes(promoted, path, side_nodes[: last + 1])

        logger.debug("Deleted key %s, root=%s", key_hex, self._root)

    def create_proof(self, key: Any) -> Proof:
        """Build a membership (key present) or non-membership proof."""
        key_hex = key_to_hex(key)
        found = self._retrieve_entry(key_hex)
        return Proof(
            entry=found.entry,
            matching_entry=found.matching_entry,
            side_nodes=found.side_nodes,
            root=self._root,
            membership=found.entry.has_value,
        )

    def verify_proof(self, proof: Proof | dict[str, Any]) -> bool:
        """Check a proof against the root it carries. Never raises."""
        return verify_proof(proof)

    def dump_nodes(self) -> list[dict[str, Any]]:
        """Debug view of every stored node."""
        return [{"hash": node_hash, **node.describe()} for node_hash, node in self._store.items()]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _retrieve_entry(self, key: str, path: TreePath | None = None) -> EntryResponse:
        if path is None:
            path = key_to_path(key)

        side_nodes: list[NodeHash] = []
        node = self._root
        depth = 0

        while node is not EMPTY:
            stored = self._store.get(node)
            if stored is None:
                raise RuntimeError(f"Node {node} is referenced but not stored")

            if stored.kind is NodeKind.LEAF:
                if stored.key == key:
                    return EntryResponse(entry=stored.to_entry(), side_nodes=side_nodes)
                return EntryResponse(
                    entry=Entry(key=key),
                    matching_entry=stored.to_entry(),
                    side_nodes=side_nodes,
                )

            direction = path[depth]
            side_nodes.append(stored.sibling(direction))
            node = stored.child(direction)
            depth += 1

        return EntryResponse(entry=Entry(key=key), side_nodes=side_nodes)

    def _add_new_nodes(self, node: NodeHash, path: TreePath, side_nodes: Sequence[NodeHash]) -> NodeHash:
        for i in range(len(side_nodes) - 1, -1, -1):
            parent = join_children(node, side_nodes[i], path[i])
            node = parent.hash
            self._store.put(node, parent)
        return node

    def _delete_old_nodes(self, node: NodeHash, path: TreePath, side_nodes: Sequence[NodeHash]) -> None:
        for i in range(len(side_nodes) - 1, -1, -1):
            node = join_children(node, side_nodes[i], path[i]).hash
            self._store.remove(node)

    def _validate(self, entries: Any) -> list[BatchEntry]:
        if isinstance(entries, (str, bytes, bytearray)) or not isinstance(entries, Sequence):
            raise ValidationException(
                f"Entries must be a sequence, got {type(entries).__name__}",
                field_path="entries",
            )

        batch: list[BatchEntry] = []
        for i, element in enumerate(entries):
            if isinstance(element, BatchEntry):
                normalize_key(element.id, field_path=f"entries[{i}].id")
                batch.append(element)
                continue
            if not isinstance(element, Mapping) or "id" not in element or "value" not in element:
                raise ValidationException(
                    "Entries must have 'id' and 'value' properties",
                    field_path=f"entries[{i}]",
                )
            key = normalize_key(element["id"], field_path=f"entries[{i}].id")
            batch.append(BatchEntry(id=key, value=element["value"]))
        return batch


__all__ = [
    "CompactSparseMerkleTree",
]
