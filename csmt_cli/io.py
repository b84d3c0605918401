"""
CLI file helpers.

Entry files are JSON arrays of {"id": ..., "value": ...} objects. An id
is either a list of byte values or a "0x"-prefixed hex string.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from csmt.config.runtime import TreeConfig
from csmt.schemas.canonical import dumps_canonical
from csmt.schemas.models import EMPTY, NodeHash, Proof
from csmt.tree.engine import CompactSparseMerkleTree


class CLIInputError(Exception):
    """Raised when a CLI input file or argument cannot be used."""


def _read_json(path: str | Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise CLIInputError(f"File not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CLIInputError(f"Invalid JSON in {path}: {e}") from e


def parse_key(text: str) -> bytes:
    """Parse a key given on the command line as hex (0x prefix optional)."""
    hex_content = text[2:] if text.lower().startswith("0x") else text
    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise CLIInputError(f"Key must be hex, got {text!r}") from e


def parse_root(text: str) -> NodeHash:
    """
    Parse a root given on the command line.

    "EMPTY" or "null" (any case) names the empty-tree root; anything else
    must be hex (0x prefix optional) and is lower-cased.
    """
    if text.strip().lower() in ("empty", "null"):
        return EMPTY
    hex_content = text.strip()
    if hex_content.lower().startswith("0x"):
        hex_content = hex_content[2:]
    try:
        return bytes.fromhex(hex_content).hex()
    except ValueError as e:
        raise CLIInputError(f"Root must be hex or EMPTY, got {text!r}") from e


def load_entries(path: str | Path) -> list[Any]:
    """Load an entry file, decoding hex-string ids into bytes."""
    data = _read_json(path)
    if not isinstance(data, list):
        raise CLIInputError(f"Entry file must hold a JSON array: {path}")

    entries = []
    for item in data:
        if isinstance(item, dict) and isinstance(item.get("id"), str):
            item = {**item, "id": parse_key(item["id"])}
        entries.append(item)
    return entries


def build_tree(path: str | Path, config: TreeConfig | None = None) -> CompactSparseMerkleTree:
    """Build a tree from an entry file."""
    tree = CompactSparseMerkleTree(config)
    tree.insert(load_entries(path))
    return tree


def load_proof(path: str | Path) -> Any:
    """Load a proof file as raw JSON; verification decides if it is valid."""
    return _read_json(path)


def write_proof(proof: Proof, path: str | Path) -> Path:
    """Write a proof as canonical JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_canonical(proof) + "\n", encoding="utf-8")
    return path
