"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m csmt_cli root <entries.json> [--json]
    python -m csmt_cli get <entries.json> <key_hex> [--json]
    python -m csmt_cli prove <entries.json> <key_hex> [--out PATH]
    python -m csmt_cli verify <proof.json> [--root HEX|EMPTY] [--json]
    python -m csmt_cli dump <entries.json>
    python -m csmt_cli config --show

Environment Variables:
    CSMT_DEBUG              Log the node store after each batch insert
    CSMT_ATOMIC_INSERTS     Roll back a batch insert when an entry fails
    CSMT_LOG_LEVEL          Log level (default: INFO)
    CSMT_LOG_FILE           Additional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from csmt.config.runtime import RuntimeConfig
from csmt.schemas.errors import CSMTException
from csmt_cli.commands import prove, tree, verify
from csmt_cli.io import CLIInputError


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def load_runtime_config(path: Path | None) -> RuntimeConfig:
    """Load config from an optional YAML file, then overlay CSMT_* env vars."""
    if path is None:
        return RuntimeConfig.from_env()
    return RuntimeConfig.from_yaml(path).with_env_overrides()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="csmt",
        description="Compact Sparse Merkle Tree CLI - build trees, create and verify proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--atomic",
        action="store_true",
        default=None,
        help="Roll back the whole entry file if one entry fails",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root of a tree built from an entry file",
    )
    root_parser.add_argument("entries", type=str, help="JSON file of {id, value} entries")
    root_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    root_parser.set_defaults(func=tree.root_cmd)

    # --- get command ---
    get_parser = subparsers.add_parser(
        "get",
        help="Print the value digest stored under a key",
    )
    get_parser.add_argument("entries", type=str, help="JSON file of {id, value} entries")
    get_parser.add_argument("key", type=str, help="Key as hex")
    get_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    get_parser.set_defaults(func=tree.get_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Create a membership or non-membership proof",
    )
    prove_parser.add_argument("entries", type=str, help="JSON file of {id, value} entries")
    prove_parser.add_argument("key", type=str, help="Key as hex")
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof to this path instead of stdout",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof file offline",
    )
    verify_parser.add_argument("proof", type=str, help="Proof JSON file")
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Require the proof to be against this root (hex, or EMPTY for the empty tree)",
    )
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.add_argument("--debug", action="store_true", default=False, help="Print tracebacks")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- dump command ---
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print every node of a tree built from an entry file",
    )
    dump_parser.add_argument("entries", type=str, help="JSON file of {id, value} entries")
    dump_parser.set_defaults(func=tree.dump_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: csmt config --show")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed or key absent)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_runtime_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.atomic:
        config.tree.atomic_inserts = True

    setup_logging(level=args.log_level or config.logging.level, log_file=config.logging.file)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except CSMTException as e:
        if getattr(args, "json", False):
            print(e.to_error_model().model_dump_json(indent=2), file=sys.stderr)
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (CLIInputError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
