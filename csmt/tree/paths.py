"""
Module 03 - Key Paths
Key normalization and key-to-path encoding.

A path is 256 directions (0 = left, 1 = right). Direction i is read at
depth i. The path is the key's big-endian integer value, least
significant bit first:

    d_i = (int.from_bytes(key, "big") >> i) & 1

This is a direct bit encoding, not a rehash: keys sharing low-order
bits share long path prefixes.
"""
from __future__ import annotations

from collections.abc import Sequence

from csmt.schemas.errors import ValidationException
from csmt.schemas.models import EMPTY, NodeHash

PATH_LENGTH = 256
MAX_KEY_BYTES = PATH_LENGTH // 8

TreePath = tuple[int, ...]


def normalize_key(key: object, field_path: str = "key") -> bytes:
    """
    Validate a caller-supplied key and return its bytes.

    Accepts bytes, bytearray, or a list/tuple of ints in 0..255.

    Raises:
        ValidationException: If the key is not a byte sequence or is
            wider than 256 bits
    """
    if isinstance(key, (bytes, bytearray)):
        data = bytes(key)
    elif isinstance(key, (list, tuple)):
        for i, byte in enumerate(key):
            if isinstance(byte, bool) or not isinstance(byte, int) or not 0 <= byte <= 255:
                raise ValidationException(
                    f"Key element {i} must be an int in 0..255, got {byte!r}",
                    field_path=f"{field_path}[{i}]",
                )
        data = bytes(key)
    else:
        raise ValidationException(
            f"Key must be a byte sequence, got {type(key).__name__}",
            field_path=field_path,
        )

    if len(data) > MAX_KEY_BYTES:
        raise ValidationException(
            f"Key must be at most {MAX_KEY_BYTES} bytes, got {len(data)}",
            field_path=field_path,
            details={"length": len(data)},
        )
    return data


def key_to_hex(key: object) -> str:
    """Canonical hex rendering of a key."""
    return normalize_key(key).hex()


def key_to_path(key: str) -> TreePath:
    """
    Encode a hex key as its 256-direction path.

    Raises:
        ValueError: If the key is not hex or is wider than 256 bits
    """
    value = int.from_bytes(bytes.fromhex(key), "big")
    if value.bit_length() > PATH_LENGTH:
        raise ValueError(f"Key {key!r} is wider than {PATH_LENGTH} bits")
    return tuple((value >> i) & 1 for i in range(PATH_LENGTH))


def common_prefix_length(a: Sequence[int], b: Sequence[int]) -> int:
    """Number of leading directions two paths share."""
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


def last_non_empty_index(side_nodes: Sequence[NodeHash]) -> int:
    """Index of the deepest side node that is not EMPTY, or -1."""
    for i in range(len(side_nodes) - 1, -1, -1):
        if side_nodes[i] is not EMPTY:
            return i
    return -1
