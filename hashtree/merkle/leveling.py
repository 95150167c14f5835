"""
Merkle Leveling
Turns a flat element sequence into the padded leaf level, then folds it
upward into the full list of levels.

Levels are plain lists indexed bottom-up: levels[0] holds the leaves and
levels[-1] holds the root as its only entry.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

from hashtree.crypto.hashing import Hasher
from hashtree.merkle.padding import is_power_of_two, pad_to_power_of_two
from hashtree.schemas.errors import InvalidInputException


logger = logging.getLogger(__name__)

Level = list[int]
Levels = list[Level]


def build_leaf_level(elements: Sequence[Any], hasher: Hasher) -> Level:
    """
    Pad elements to a power-of-two count and hash each one.

    Padding copies are byte-identical to their sources, so they hash to
    the same digests.

    Raises:
        InvalidInputException: If elements is empty
    """
    if len(elements) == 0:
        raise InvalidInputException("Cannot build a Merkle tree from an empty sequence")
    return [hasher.hash_element(element) for element in pad_to_power_of_two(elements)]


def fold_level(level: Sequence[int], hasher: Hasher) -> Level:
    """Pair adjacent digests (2k, 2k+1) and hash each pair into one parent."""
    return [hasher.hash_pair(level[i], level[i + 1]) for i in range(0, len(level), 2)]


def build_levels(leaves: Sequence[int], hasher: Hasher) -> Levels:
    """
    Fold a power-of-two leaf level upward until a single root remains.

    Args:
        leaves: Leaf digests; length must be a power of two
        hasher: Hashing primitive for parent nodes

    Returns:
        All levels, leaves first, root last. A single leaf yields one level.

    Raises:
        InvalidInputException: If the leaf count is not a power of two
    """
    if not is_power_of_two(len(leaves)):
        raise InvalidInputException(
            f"Leaf level length must be a power of two, got {len(leaves)}",
            details={"length": len(leaves)},
        )

    levels: Levels = [list(leaves)]
    while len(levels[-1]) > 1:
        levels.append(fold_level(levels[-1], hasher))

    logger.debug(f"Built {len(levels)} levels over {len(leaves)} leaves")
    return levels


__all__ = [
    "Level",
    "Levels",
    "build_leaf_level",
    "fold_level",
    "build_levels",
]
