"""
Module 02 - Hashing Utilities
Leaf, internal-node and value digests for the tree.

This module provides:
- SHA-256 hashing for raw bytes
- Value digests (bytes as-is, text as UTF-8, anything else as sorted-key JSON)
- Domain-separated leaf and internal-node hashing

Encoding Rules (Hard Contracts):
1. Leaf:     sha256(0x00 || len32(key) || key || len32(value) || value)
2. Internal: sha256(0x01 || child(left) || child(right))
   child(EMPTY) = 0x00, child(h) = 0x01 || len32(h) || h
3. len32 is a 4-byte big-endian length; hex fields are hashed as raw bytes
4. All digests are returned as lowercase hex without prefix

The leading tag byte keeps leaf and internal encodings disjoint, and the
length prefixes make every encoding uniquely decodable.
"""
from __future__ import annotations

import hashlib
import json
import math
from typing import Any

from pydantic import BaseModel

from csmt.schemas.canonical import CANONICAL_JSON_SEPARATORS
from csmt.schemas.errors import CanonicalizationException
from csmt.schemas.models import EMPTY, NodeHash

LEAF_TAG = b"\x00"
INTERNAL_TAG = b"\x01"

_EMPTY_CHILD = b"\x00"
_PRESENT_CHILD = b"\x01"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def to_hex(data: bytes) -> str:
    """Convert bytes to a lowercase hexadecimal string (no prefix)."""
    return data.hex()


def _length_prefixed(field: bytes) -> bytes:
    return len(field).to_bytes(4, "big") + field


def _hex_field(value: str, name: str) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a hex string, got {type(value).__name__}")
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise ValueError(f"Invalid hex in {name}: {e}") from e


def _digest_form(value: Any, path: str = "value") -> Any:
    """
    Reduce a structured value to plain JSON types for digesting.

    Unlike the proof-file canonical form, nothing is dropped or
    rewritten: None entries stay, and types without a single JSON
    spelling (bytes inside containers, non-str dict keys, datetimes,
    sets) are rejected so distinct values never share a digest.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationException(
                message=f"Non-finite float value encountered: {value}",
                details={"path": path, "value": str(value)},
            )
        return value

    if isinstance(value, BaseModel):
        return _digest_form(value.model_dump(mode="json", by_alias=True), path)

    if isinstance(value, dict):
        form = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise CanonicalizationException(
                    message=f"Dict keys must be str, got {type(k).__name__}",
                    details={"path": path, "type": type(k).__name__},
                )
            form[k] = _digest_form(v, f"{path}.{k}")
        return form

    if isinstance(value, (list, tuple)):
        return [_digest_form(item, f"{path}[{i}]") for i, item in enumerate(value)]

    raise CanonicalizationException(
        message=f"Cannot digest value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def digest_value(value: Any) -> str:
    """
    Digest a value for storage in a leaf.

    Args:
        value: bytes are hashed as-is, str as UTF-8, everything else
               as sorted-key compact JSON of its plain JSON form

    Returns:
        Hex SHA-256 digest

    Raises:
        CanonicalizationException: If a structured value holds a type
            with no unambiguous JSON form (e.g. nested bytes)

    Example:
        >>> digest_value("abc")
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    if isinstance(value, (bytes, bytearray)):
        data = bytes(value)
    elif isinstance(value, str):
        data = value.encode("utf-8")
    else:
        data = json.dumps(
            _digest_form(value),
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        ).encode("utf-8")
    return to_hex(sha256(data))


def hash_leaf(key: str, value_digest: str) -> str:
    """
    Hash a leaf node.

    Args:
        key: Hex-encoded key
        value_digest: Hex digest of the value

    Returns:
        Hex digest of the leaf

    Raises:
        ValueError: If either field is not valid hex
    """
    encoded = (
        LEAF_TAG
        + _length_prefixed(_hex_field(key, "key"))
        + _length_prefixed(_hex_field(value_digest, "value digest"))
    )
    return to_hex(sha256(encoded))


def _encode_child(node: NodeHash) -> bytes:
    if node is EMPTY:
        return _EMPTY_CHILD
    return _PRESENT_CHILD + _length_prefixed(_hex_field(node, "child hash"))


def hash_internal(left: NodeHash, right: NodeHash) -> str:
    """
    Hash an internal node from its two children.

    Either child may be EMPTY; the sentinel has its own encoding and is
    never treated as a digest.

    Raises:
        ValueError: If a non-empty child is not valid hex
    """
    return to_hex(sha256(INTERNAL_TAG + _encode_child(left) + _encode_child(right)))


__all__ = [
    "LEAF_TAG",
    "INTERNAL_TAG",
    "sha256",
    "to_hex",
    "digest_value",
    "hash_leaf",
    "hash_internal",
]
