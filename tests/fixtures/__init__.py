"""
Test fixtures package for CSMT tests.

Factory functions for entry batches, keys and populated trees.

Usage:
    from fixtures import make_sample_entries, make_tree

    def test_something():
        tree = make_tree(make_sample_entries())
"""

from .tree_fixtures import (
    SAMPLE_ENTRIES,
    make_random_keys,
    make_sample_entries,
    make_tree,
)

__all__ = [
    "SAMPLE_ENTRIES",
    "make_random_keys",
    "make_sample_entries",
    "make_tree",
]
