"""
Merkle Padding Policy
Power-of-two sizing rule shared by tree construction and insertion.

Padding Rule:
    A leaf sequence of length n is widened to W = next_power_of_two(n) by
    appending copies of its trailing W - n entries, in order.

    Example: [a, b, c, d, e] -> W = 8, deficit 3 -> [a, b, c, d, e, c, d, e]

    Since W < 2n for every n >= 1, the deficit never exceeds n and the
    trailing slice always exists.
"""
from __future__ import annotations

from typing import Sequence, TypeVar

from hashtree.schemas.errors import InvalidInputException


T = TypeVar("T")


def _require_positive(n: int) -> None:
    if n < 1:
        raise InvalidInputException(
            f"Size must be positive, got {n}",
            details={"size": n},
        )


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ... and False for everything else."""
    return n >= 1 and n & (n - 1) == 0


def next_power_of_two(n: int) -> int:
    """
    Smallest power of two greater than or equal to n.

    Raises:
        InvalidInputException: If n < 1
    """
    _require_positive(n)
    return 1 << (n - 1).bit_length()


def padding_deficit(n: int) -> int:
    """Number of padding entries needed to bring n up to a power of two."""
    return next_power_of_two(n) - n


def pad_to_power_of_two(items: Sequence[T]) -> list[T]:
    """
    Return a copy of items widened to a power-of-two length.

    Args:
        items: Non-empty sequence (elements or leaf hashes)

    Returns:
        New list; the input sequence is not modified

    Raises:
        InvalidInputException: If items is empty
    """
    deficit = padding_deficit(len(items))
    padded = list(items)
    if deficit:
        padded.extend(items[len(items) - deficit:])
    return padded


def tree_depth(num_elements: int) -> int:
    """
    Number of levels a freshly built tree over num_elements has.

    A single element has depth 1 (leaf == root); otherwise
    log2(W) + 1 where W is the padded width. Returns 0 for no elements.
    """
    if num_elements == 0:
        return 0
    return next_power_of_two(num_elements).bit_length()


__all__ = [
    "is_power_of_two",
    "next_power_of_two",
    "padding_deficit",
    "pad_to_power_of_two",
    "tree_depth",
]
