"""
CLI Prove Command

Build a tree from an entry file and produce a proof for one key.

Usage:
    csmt prove entries.json KEY_HEX [--out proof.json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from csmt.schemas.canonical import dumps_canonical
from csmt_cli.io import build_tree, parse_key, write_proof


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def prove_cmd(args: Namespace) -> int:
    """Create a membership or non-membership proof."""
    tree = build_tree(args.entries, args.runtime_config.tree)
    proof = tree.create_proof(parse_key(args.key))
    kind = "membership" if proof.membership else "non-membership"

    if args.out:
        path = write_proof(proof, args.out)
        logger.info("Wrote %s proof to %s", kind, path)
        print(f"{kind} proof written to {path}")
    else:
        print(dumps_canonical(proof))
    return EXIT_SUCCESS
