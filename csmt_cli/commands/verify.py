"""
CLI Verify Command

Verify a proof file offline.

Usage:
    csmt verify proof.json [--root HEX|EMPTY] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from csmt.tree.proofs import verify_proof
from csmt_cli.io import load_proof, parse_root


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


def verify_cmd(args: Namespace) -> int:
    """Verify a proof, optionally pinning the expected root."""
    logger.info("Verifying proof: %s", args.proof)
    expected_root = parse_root(args.root) if args.root is not None else None
    data = load_proof(args.proof)
    ok = verify_proof(data, expected_root=expected_root)

    membership = data.get("membership") if isinstance(data, dict) else None
    if args.json:
        print(json.dumps({"proof": args.proof, "ok": ok, "membership": membership}, indent=2))
    else:
        print(f"proof: {args.proof}")
        print(f"ok: {str(ok).lower()}")
        if ok:
            print(f"membership: {str(bool(membership)).lower()}")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
