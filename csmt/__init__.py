"""
Compact Sparse Merkle Tree.

Commits a key/value set to a single root hash and produces proofs of
membership and non-membership.
"""

__version__ = "0.1.0"

from csmt.schemas import (
    EMPTY,
    CSMTException,
    DuplicateKeyException,
    EmptyNode,
    Entry,
    EntryResponse,
    KeyNotFoundException,
    KeyPathCollisionException,
    Proof,
    ValidationException,
)
from csmt.config import RuntimeConfig, TreeConfig
from csmt.tree import CompactSparseMerkleTree, verify_proof

__all__ = [
    "__version__",
    "EMPTY",
    "CSMTException",
    "DuplicateKeyException",
    "EmptyNode",
    "Entry",
    "EntryResponse",
    "KeyNotFoundException",
    "KeyPathCollisionException",
    "Proof",
    "ValidationException",
    "RuntimeConfig",
    "TreeConfig",
    "CompactSparseMerkleTree",
    "verify_proof",
]
