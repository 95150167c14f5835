"""
CLI Demo Command

Build a tree, insert one element, prove the first leaf and verify it.

Usage:
    hashtree demo [ELEMENT ...] [--insert VALUE] [--index N] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree
from hashtree_cli.commands import EXIT_SUCCESS, EXIT_VERIFICATION_FAILED


logger = logging.getLogger(__name__)

DEFAULT_ELEMENTS = ["Crypto", "Merkle", "Rust"]
DEFAULT_INSERT = "Test"


@dataclass
class DemoSummary:
    """Summary of a demo run for CLI output."""
    elements: list[str] = field(default_factory=list)
    inserted: str = ""
    index: int = 0
    width: int = 0
    depth: int = 0
    root: str = ""
    proof: list[str] = field(default_factory=list)
    verified: bool = False


def demo_cmd(args: Namespace) -> int:
    """Handle demo command."""
    elements = list(args.elements) or list(DEFAULT_ELEMENTS)
    inserted = args.insert if args.insert is not None else DEFAULT_INSERT

    tree = MerkleTree(elements, hasher=args.tree_config.make_hasher())
    logger.info(f"Built tree over {len(elements)} elements")
    tree.insert(inserted)
    logger.info(f"Inserted {inserted!r}")

    all_elements = elements + [inserted]
    proof = tree.generate_proof(args.index)
    verified = tree.verify(proof, args.index, tree.hash_element(all_elements[args.index]))

    summary = DemoSummary(
        elements=elements,
        inserted=inserted,
        index=args.index,
        width=tree.width,
        depth=tree.depth,
        root=to_hex(tree.root),
        proof=[to_hex(p) for p in proof],
        verified=verified,
    )

    if args.json:
        print(json.dumps(asdict(summary), indent=2))
    else:
        print(f"Verification was successful: {str(verified).lower()}")

    return EXIT_SUCCESS if verified else EXIT_VERIFICATION_FAILED
