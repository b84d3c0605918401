"""
Modules 03/04 - Compact Sparse Merkle Tree

This package provides:
- CompactSparseMerkleTree: the tree engine
- NodeStore, LeafNode, InternalNode: content-addressed node storage
- key_to_path and helpers: key normalization and path encoding
- compute_root, verify_proof: standalone proof verification
"""
from .paths import (
    MAX_KEY_BYTES,
    PATH_LENGTH,
    common_prefix_length,
    key_to_hex,
    key_to_path,
    last_non_empty_index,
    normalize_key,
)
from .nodes import InternalNode, LeafNode, Node, NodeKind, join_children
from .store import NodeStore
from .proofs import compute_root, verify_proof
from .engine import CompactSparseMerkleTree


__all__ = [
    "MAX_KEY_BYTES",
    "PATH_LENGTH",
    "common_prefix_length",
    "key_to_hex",
    "key_to_path",
    "last_non_empty_index",
    "normalize_key",
    "InternalNode",
    "LeafNode",
    "Node",
    "NodeKind",
    "join_children",
    "NodeStore",
    "compute_root",
    "verify_proof",
    "CompactSparseMerkleTree",
]
