"""
Module 04 - Proof Verification
Recompute a root from a proof and check it.

A proof without a matching entry is checked by folding the entry's own
leaf hash (or EMPTY for an absent key) up through the side nodes. A
proof with a matching entry folds the matching leaf instead, then
checks the claimed divergence depth against the common path prefix of
the two keys.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from csmt.crypto.hashing import hash_internal, hash_leaf
from csmt.schemas.models import EMPTY, NodeHash, Proof
from csmt.tree.paths import PATH_LENGTH, common_prefix_length, key_to_path


logger = logging.getLogger(__name__)


def compute_root(node: NodeHash, path: Sequence[int], side_nodes: Sequence[NodeHash]) -> NodeHash:
    """
    Fold `node` upward through `side_nodes`, deepest first.

    Direction 0 puts the running node on the left, 1 on the right.
    """
    for i in range(len(side_nodes) - 1, -1, -1):
        if path[i]:
            node = hash_internal(side_nodes[i], node)
        else:
            node = hash_internal(node, side_nodes[i])
    return node


def _check(proof: Proof) -> bool:
    if len(proof.side_nodes) > PATH_LENGTH or proof.membership != proof.entry.has_value:
        return False

    if proof.matching_entry is None:
        path = key_to_path(proof.entry.key)
        if proof.entry.has_value:
            node: NodeHash = hash_leaf(proof.entry.key, proof.entry.value)
        else:
            node = EMPTY
        return compute_root(node, path, proof.side_nodes) == proof.root

    matching = proof.matching_entry
    if not matching.has_value or matching.key == proof.entry.key:
        return False

    matching_path = key_to_path(matching.key)
    root = compute_root(hash_leaf(matching.key, matching.value), matching_path, proof.side_nodes)
    if root != proof.root:
        return False

    path = key_to_path(proof.entry.key)
    return len(proof.side_nodes) <= common_prefix_length(path, matching_path)


def verify_proof(proof: Proof | dict[str, Any], expected_root: NodeHash | None = None) -> bool:
    """
    Verify a membership or non-membership proof.

    Args:
        proof: A Proof, or its JSON-shaped dict
        expected_root: If given, the proof must also be against this root

    Returns:
        True if the proof is valid. Malformed or tampered proofs return
        False; this function does not raise.
    """
    try:
        if not isinstance(proof, Proof):
            proof = Proof.model_validate(proof)
        if expected_root is not None and proof.root != expected_root:
            logger.debug("Proof root %r does not match expected root %r", proof.root, expected_root)
            return False
        return _check(proof)
    except (ValidationError, ValueError, TypeError) as e:
        logger.debug("Rejecting malformed proof: %s", e)
        return False


__all__ = [
    "compute_root",
    "verify_proof",
]
