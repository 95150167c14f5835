"""
Tree fixtures shared by all test modules.

Provides factory functions for element sequences and trees, plus a
hand-rolled level builder used to cross-check MerkleTree internals.
"""

from typing import Any, Optional, Sequence

from hashtree.crypto.hashing import DEFAULT_HASHER, Hasher
from hashtree.merkle import MerkleTree


# Elements of the reference four-leaf scenario
SCENARIO_ELEMENTS = ["Crypto", "Merkle", "Rust", "Tree"]


def make_elements(count: int, prefix: str = "elem") -> list[str]:
    """Create `count` distinct string elements."""
    return [f"{prefix}{i}" for i in range(count)]


def make_tree(
    count: int = 4,
    hasher: Optional[Hasher] = None,
    prefix: str = "elem",
) -> MerkleTree:
    """Create a tree over `count` distinct elements."""
    return MerkleTree(make_elements(count, prefix), hasher=hasher)


def manual_levels(
    leaves: Sequence[Any],
    hasher: Hasher = DEFAULT_HASHER,
) -> list[list[int]]:
    """
    Compute levels the slow, obvious way from already padded elements.

    The caller supplies the padded element list so that tests spell out
    the expected padding explicitly.
    """
    level = [hasher.hash_element(e) for e in leaves]
    levels = [level]
    while len(level) > 1:
        level = [hasher.hash_pair(level[i], level[i + 1]) for i in range(0, len(level), 2)]
        levels.append(level)
    return levels
