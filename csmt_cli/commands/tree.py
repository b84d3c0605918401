"""
CLI Tree Commands

Build a tree from an entry file and inspect it.

Usage:
    csmt root entries.json [--json]
    csmt get entries.json KEY_HEX [--json]
    csmt dump entries.json
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from csmt.schemas.models import EMPTY, NodeHash
from csmt_cli.io import build_tree, parse_key


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NOT_FOUND = 2


def format_hash(node: NodeHash) -> str:
    return "EMPTY" if node is EMPTY else node


def root_cmd(args: Namespace) -> int:
    """Print the root of the tree built from the entry file."""
    tree = build_tree(args.entries, args.runtime_config.tree)

    if args.json:
        print(json.dumps({
            "root": None if tree.root is EMPTY else tree.root,
            "entries": len(tree),
            "nodes": tree.node_count,
        }, indent=2))
    else:
        print(f"root: {format_hash(tree.root)}")
        print(f"entries: {len(tree)}")
        print(f"nodes: {tree.node_count}")
    return EXIT_SUCCESS


def get_cmd(args: Namespace) -> int:
    """Print the value digest stored under a key."""
    tree = build_tree(args.entries, args.runtime_config.tree)
    key = parse_key(args.key)
    value = tree.get(key)

    if args.json:
        print(json.dumps({"key": key.hex(), "value": value}, indent=2))
    elif value is None:
        print(f"key {key.hex()} not found")
    else:
        print(value)
    return EXIT_SUCCESS if value is not None else EXIT_NOT_FOUND


def dump_cmd(args: Namespace) -> int:
    """Print every stored node."""
    tree = build_tree(args.entries, args.runtime_config.tree)
    nodes = [
        {k: (None if v is EMPTY else v) for k, v in node.items()}
        for node in tree.dump_nodes()
    ]
    print(json.dumps(nodes, indent=2))
    return EXIT_SUCCESS
