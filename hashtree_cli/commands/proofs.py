"""
CLI Root / Prove / Verify Commands

Usage:
    hashtree root ELEMENT [ELEMENT ...] [--json]
    hashtree prove ELEMENT [ELEMENT ...] --index N [--json]
    hashtree verify --root HEX --index N --element VALUE --proof HEX [HEX ...] [--json]

Digests are printed and parsed as 0x-prefixed, 16-digit hex strings.
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from hashtree.crypto.hashing import from_hex, to_hex
from hashtree.merkle import MerkleTree, MerkleVerifier
from hashtree.schemas.errors import InvalidInputException
from hashtree_cli.commands import EXIT_SUCCESS, EXIT_VERIFICATION_FAILED


logger = logging.getLogger(__name__)


def read_elements(args: Namespace) -> list[str]:
    """
    Elements from the command line, then one per line from --file.

    Raises:
        InvalidInputException: If neither source yields an element
    """
    elements = list(args.elements)
    if getattr(args, "file", None):
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
        elements.extend(line for line in lines if line)
    if not elements:
        raise InvalidInputException("At least one element is required")
    return elements


def root_cmd(args: Namespace) -> int:
    """Handle root command."""
    elements = read_elements(args)

    tree = MerkleTree(elements, hasher=args.tree_config.make_hasher())
    logger.info(f"Built tree: width={tree.width} depth={tree.depth}")

    if args.json:
        print(json.dumps({
            "root": to_hex(tree.root),
            "elements": len(tree),
            "width": tree.width,
            "depth": tree.depth,
        }, indent=2))
    else:
        print(to_hex(tree.root))
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Handle prove command."""
    elements = read_elements(args)

    tree = MerkleTree(elements, hasher=args.tree_config.make_hasher())
    proof = tree.prove(args.index)

    if args.json:
        print(json.dumps({
            "index": proof.index,
            "leaf": to_hex(proof.leaf),
            "siblings": [to_hex(s) for s in proof.siblings],
            "root": to_hex(proof.root),
        }, indent=2))
    else:
        print(f"root: {to_hex(proof.root)}")
        print(f"leaf: {to_hex(proof.leaf)}")
        for sibling in proof.siblings:
            print(f"  {to_hex(sibling)}")
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    try:
        root = from_hex(args.root)
        siblings = [from_hex(p) for p in args.proof]
    except ValueError as e:
        raise InvalidInputException(f"Invalid digest: {e}") from e

    ok = MerkleVerifier.verify_element_in_root(
        args.element,
        args.index,
        siblings,
        root,
        hasher=args.tree_config.make_hasher(),
    )
    logger.info(f"Verification of index {args.index} against {args.root}: {ok}")

    if args.json:
        print(json.dumps({"verified": ok}))
    else:
        print(f"verified: {str(ok).lower()}")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
