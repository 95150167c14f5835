"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli demo [ELEMENT ...] [--insert VALUE] [--index N] [--json]
    python -m hashtree_cli root ELEMENT [ELEMENT ...] [--file PATH] [--json]
    python -m hashtree_cli prove ELEMENT [ELEMENT ...] --index N [--json]
    python -m hashtree_cli verify --root HEX --index N --element VALUE --proof HEX [HEX ...]
    python -m hashtree_cli config --show

Environment Variables:
    HASHTREE_HASH_ALGORITHM     Hash algorithm (default: sha256)
    HASHTREE_CONCAT_ENCODING    Digest concatenation: decimal or binary (default: decimal)
    HASHTREE_LOG_LEVEL          Log level (default: INFO)
    HASHTREE_LOG_FILE           Optional log file
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree.config import TreeConfig
from hashtree.crypto.hashing import SUPPORTED_ALGORITHMS, SUPPORTED_CONCAT_ENCODINGS
from hashtree.schemas.errors import MerkleException
from hashtree_cli import __version__
from hashtree_cli.commands import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    demo,
    proofs,
)


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


def _add_elements_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "elements",
        nargs="*",
        help="Elements to commit to, in order",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional elements from a file, one per line",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="Merkle tree CLI - build trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
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
        "--hash",
        dest="hash_algorithm",
        type=str,
        default=None,
        choices=list(SUPPORTED_ALGORITHMS),
        help="Hash algorithm (overrides config)",
    )
    parser.add_argument(
        "--concat",
        dest="concat_encoding",
        type=str,
        default=None,
        choices=list(SUPPORTED_CONCAT_ENCODINGS),
        help="Digest concatenation encoding (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Build, insert, prove and verify in one go",
        description="Build a tree, insert one element, then prove and verify a leaf.",
    )
    demo_parser.add_argument(
        "elements",
        nargs="*",
        help=f"Initial elements (default: {' '.join(demo.DEFAULT_ELEMENTS)})",
    )
    demo_parser.add_argument(
        "--insert",
        type=str,
        default=None,
        help=f"Element to insert after building (default: {demo.DEFAULT_INSERT})",
    )
    demo_parser.add_argument(
        "--index",
        type=int,
        default=0,
        help="Leaf index to prove and verify (default: 0)",
    )
    demo_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root of a tree built over the elements",
    )
    _add_elements_args(root_parser)
    root_parser.set_defaults(func=proofs.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one element",
    )
    _add_elements_args(prove_parser)
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="Index of the element to prove",
    )
    prove_parser.set_defaults(func=proofs.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a trusted root",
    )
    verify_parser.add_argument("--root", type=str, required=True, help="Trusted root (0x hex)")
    verify_parser.add_argument("--index", "-i", type=int, required=True, help="Claimed leaf index")
    verify_parser.add_argument("--element", "-e", type=str, required=True, help="Claimed element")
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        nargs="*",
        default=[],
        help="Sibling digests, bottom-up (0x hex)",
    )
    verify_parser.add_argument("--json", action="store_true", help="JSON output")
    verify_parser.set_defaults(func=proofs.verify_cmd)

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


def load_config(args: argparse.Namespace) -> TreeConfig:
    """Config file (if any), then environment, then command-line flags."""
    if args.config:
        config = TreeConfig.from_yaml(args.config).with_env_overrides()
    else:
        config = TreeConfig.from_env()

    overrides = {
        "hash_algorithm": args.hash_algorithm,
        "concat_encoding": args.concat_encoding,
        "log_level": args.log_level,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.tree_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: hashtree config --show")
    print("  --show  Show the effective configuration (file, then env, then flags)")
    return EXIT_SUCCESS


def report_error(args: argparse.Namespace, error: MerkleException, prefix: str = "Error") -> None:
    """
    Print a MerkleException for the user.

    With --json the structured MerkleError goes to stdout so scripts can
    read it; otherwise a one-line message goes to stderr.
    """
    if getattr(args, "json", False):
        print(json.dumps({"error": error.to_error_model().model_dump(mode="json")}, indent=2))
    else:
        print(f"{prefix}: {error}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args)
        config.make_hasher()
    except MerkleException as e:
        report_error(args, e, prefix="Error loading configuration")
        return EXIT_RUNTIME_ERROR

    setup_logging(level=config.log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.tree_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleException as e:
        if config.log_level.upper() == "DEBUG":
            traceback.print_exc()
        report_error(args, e)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if config.log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
