"""
Module 03 - Node Store Unit Tests
Tests for csmt/tree/nodes.py and csmt/tree/store.py
"""
import pytest

from csmt.crypto.hashing import digest_value, hash_internal, hash_leaf
from csmt.schemas.models import EMPTY
from csmt.tree.nodes import InternalNode, LeafNode, NodeKind, join_children
from csmt.tree.store import NodeStore


@pytest.fixture
def leaf():
    return LeafNode(key="1923ef", value_digest=digest_value("abc"))


class TestNodes:
    """Tests for the tagged node variants."""

    def test_kinds_are_explicit(self, leaf):
        assert leaf.kind is NodeKind.LEAF
        assert InternalNode(left=EMPTY, right=leaf.hash).kind is NodeKind.INTERNAL

    def test_leaf_hash(self, leaf):
        assert leaf.hash == hash_leaf("1923ef", digest_value("abc"))

    def test_leaf_to_entry(self, leaf):
        entry = leaf.to_entry()
        assert entry.key == "1923ef"
        assert entry.value == digest_value("abc")
        assert entry.has_value

    def test_internal_child_and_sibling(self, leaf):
        node = InternalNode(left=leaf.hash, right=EMPTY)
        assert node.child(0) == leaf.hash
        assert node.sibling(0) is EMPTY
        assert node.child(1) is EMPTY
        assert node.sibling(1) == leaf.hash
        assert node.hash == hash_internal(leaf.hash, EMPTY)

    def test_join_children_by_direction(self):
        assert join_children("aa", "bb", 0) == InternalNode(left="aa", right="bb")
        assert join_children("aa", "bb", 1) == InternalNode(left="bb", right="aa")


class TestNodeStore:
    """Tests for NodeStore."""

    def test_put_get_remove(self, leaf):
        store = NodeStore()
        store.put(leaf.hash, leaf)

        assert store.get(leaf.hash) == leaf
        assert leaf.hash in store
        assert len(store) == 1

        store.remove(leaf.hash)
        assert store.get(leaf.hash) is None
        assert len(store) == 0

    def test_remove_absent_is_noop(self):
        store = NodeStore()
        store.remove("00" * 32)
        store.remove(EMPTY)
        assert len(store) == 0

    def test_empty_never_stored(self, leaf):
        store = NodeStore()
        with pytest.raises(ValueError):
            store.put(EMPTY, leaf)
        assert store.get(EMPTY) is None
        assert EMPTY not in store

    def test_is_leaf_dispatches_on_kind(self, leaf):
        store = NodeStore()
        internal = InternalNode(left=leaf.hash, right=EMPTY)
        store.put(leaf.hash, leaf)
        store.put(internal.hash, internal)

        assert store.is_leaf(leaf.hash)
        assert not store.is_leaf(internal.hash)
        assert not store.is_leaf(EMPTY)
        assert not store.is_leaf("ff" * 32)

    def test_snapshot_restore(self, leaf):
        store = NodeStore()
        store.put(leaf.hash, leaf)
        snapshot = store.snapshot()

        store.remove(leaf.hash)
        assert len(store) == 0

        store.restore(snapshot)
        assert store.get(leaf.hash) == leaf
