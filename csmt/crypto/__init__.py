"""
Core cryptographic utilities.

Module 02 provides the hashing used by the tree.
"""
from .hashing import (
    INTERNAL_TAG,
    LEAF_TAG,
    digest_value,
    hash_internal,
    hash_leaf,
    sha256,
    to_hex,
)

__all__ = [
    "INTERNAL_TAG",
    "LEAF_TAG",
    "digest_value",
    "hash_internal",
    "hash_leaf",
    "sha256",
    "to_hex",
]
