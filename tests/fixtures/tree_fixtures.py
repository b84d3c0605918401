"""
Tree fixtures: entry batches and tree builders shared across tests.
"""

import random
from typing import Any, Sequence

from csmt.config.runtime import TreeConfig
from csmt.tree.engine import CompactSparseMerkleTree


SAMPLE_ENTRIES: list[dict[str, Any]] = [
    {"id": [25, 35, 239], "value": "abc"},
    {"id": [26, 18, 220], "value": "xyz"},
    {"id": [35, 7, 170], "value": "rst"},
]


def make_sample_entries() -> list[dict[str, Any]]:
    """Fresh copy of the three-entry sample batch."""
    return [dict(e, id=list(e["id"])) for e in SAMPLE_ENTRIES]


def make_tree(
    entries: Sequence[Any] | None = None,
    config: TreeConfig | None = None,
) -> CompactSparseMerkleTree:
    """Build a tree, optionally pre-populated with a batch."""
    tree = CompactSparseMerkleTree(config)
    if entries:
        tree.insert(list(entries))
    return tree


def make_random_keys(count: int, seed: int = 7, length: int = 8) -> list[bytes]:
    """Distinct fixed-length keys from a seeded generator."""
    rng = random.Random(seed)
    keys: list[bytes] = []
    seen: set[bytes] = set()
    while len(keys) < count:
        key = bytes(rng.randrange(256) for _ in range(length))
        if key not in seen:
            seen.add(key)
            keys.append(key)
    return keys
