"""
Merkle Tree Implementation
Level-based Merkle tree with power-of-two padding, inclusion proofs and
incremental single-element insertion.

This module provides:
- MerkleTree: the tree engine (build, prove, verify, is_root, insert)
- MerkleProof: a detached inclusion proof record
- compute_root_from_proof / verify_merkle_proof: tree-free verification

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = hasher.hash_element(element)
2. Parent hashing: parent = hasher.hash_pair(left, right)
3. Padding: the leaf level is widened to a power of two W by copying the
   trailing W - n elements (see hashtree.merkle.padding)
4. Empty input: rejected with InvalidInputException
5. Single element: one level, root = leaf

Structure:
    levels[0] is the leaf level of width W, levels[i + 1] has half the
    entries of levels[i], levels[-1] == [root]. Positions
    [diff_elements, W) of the leaf level are padding.

Insertion:
    diff_elements == W  -> grow: a width-W subtree holding the new element
                           (plus W - 1 copies of it) is attached on the
                           right and a new root level is pushed.
    diff_elements <  W  -> replace: the first padding leaf is overwritten
                           and its path to the root is recomputed.

Thread Safety:
    None. insert computes every new value before writing any of them, so
    a failed hash leaves the tree untouched, but concurrent readers still
    need an external lock.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from hashtree.config.runtime import TreeConfig, get_default_config
from hashtree.crypto.hashing import MAX_DIGEST, Hasher
from hashtree.merkle.leveling import Levels, build_leaf_level, build_levels
from hashtree.schemas.errors import IndexOutOfRangeException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf, detached from its tree.

    Attributes:
        leaf: The leaf digest being proven
        index: The 0-based position of the leaf in the leaf level
        siblings: Sibling digests from bottom to top (root excluded)
        root: The root this proof was generated against
    """
    leaf: int
    index: int
    siblings: list[int]
    root: int

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def _is_digest(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_DIGEST


def resolve_hasher(hasher: Hasher | None = None) -> Hasher:
    """
    The given hasher, or the one described by the default TreeConfig.

    The default config is read from HASHTREE_* environment variables on
    first use and can be replaced with set_default_config().
    """
    if hasher is not None:
        return hasher
    return get_default_config().make_hasher()


def compute_root_from_proof(
    leaf: int,
    index: int,
    siblings: Sequence[int],
    hasher: Hasher | None = None,
) -> int:
    """
    Replay a proof from a leaf up to the root it implies.

    Even index: the running hash is the left child, concat(hash, sibling).
    Odd index: the running hash is the right child, concat(sibling, hash).
    """
    hasher = resolve_hasher(hasher)
    current_hash = leaf
    current_index = index
    for sibling in siblings:
        if current_index % 2 == 0:
            current_hash = hasher.hash_pair(current_hash, sibling)
        else:
            current_hash = hasher.hash_pair(sibling, current_hash)
        current_index //= 2
    return current_hash


def verify_merkle_proof(proof: MerkleProof, hasher: Hasher | None = None) -> bool:
    """
    Verify a detached proof against the root it carries.

    Unlike MerkleTree.verify this cannot reject indices that point at
    padding, since the real element count lives only in the tree.
    Malformed digests yield False rather than an exception.
    """
    if not all(_is_digest(d) for d in (proof.leaf, proof.root, *proof.siblings)):
        return False
    return compute_root_from_proof(proof.leaf, proof.index, proof.siblings, hasher) == proof.root


class MerkleTree:
    """
    Merkle tree over an ordered element collection.

    Example:
        >>> tree = MerkleTree(["Crypto", "Merkle", "Rust"])
        >>> tree.insert("Tree")
        >>> proof = tree.generate_proof(0)
        >>> tree.verify(proof, 0, tree.hash_element("Crypto"))
        True
    """

    def __init__(self, elements: Sequence[Any], hasher: Hasher | None = None) -> None:
        """
        Build a tree from a non-empty element sequence.

        Args:
            elements: Elements in leaf order
            hasher: Hashing primitive; None uses get_default_config().make_hasher()

        Raises:
            InvalidInputException: If elements is empty
            CanonicalizationException: If an element cannot be encoded
        """
        self._hasher = resolve_hasher(hasher)
        leaves = build_leaf_level(elements, self._hasher)
        self._levels: Levels = build_levels(leaves, self._hasher)
        self._diff_elements = len(elements)
        logger.debug(
            f"Built tree: {self._diff_elements} elements, width {self.width}, depth {self.depth}"
        )

    @classmethod
    def build(cls, elements: Sequence[Any], hasher: Hasher | None = None) -> "MerkleTree":
        """Alias for the constructor."""
        return cls(elements, hasher=hasher)

    @classmethod
    def from_config(cls, elements: Sequence[Any], config: TreeConfig) -> "MerkleTree":
        """Build a tree using the hasher described by a TreeConfig."""
        return cls(elements, hasher=config.make_hasher())

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def diff_elements(self) -> int:
        """Number of real (non-padding) elements."""
        return self._diff_elements

    @property
    def width(self) -> int:
        """Leaf level size W, always a power of two."""
        return len(self._levels[0])

    @property
    def depth(self) -> int:
        """Number of levels, leaves and root included."""
        return len(self._levels)

    @property
    def root(self) -> int:
        return self._levels[-1][0]

    @property
    def levels(self) -> tuple[tuple[int, ...], ...]:
        """Immutable snapshot of every level, leaves first."""
        return tuple(tuple(level) for level in self._levels)

    def __len__(self) -> int:
        return self._diff_elements

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(diff_elements={self._diff_elements}, "
            f"width={self.width}, depth={self.depth}, root={self.root:#018x})"
        )

    def hash_element(self, element: Any) -> int:
        """Hash an element exactly as this tree hashes its leaves."""
        return self._hasher.hash_element(element)

    def leaf_hash(self, leaf_index: int) -> int:
        """
        Digest stored for a real element.

        Raises:
            IndexOutOfRangeException: If leaf_index is not in [0, diff_elements)
        """
        self._check_index(leaf_index)
        return self._levels[0][leaf_index]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_root(self, candidate: int) -> bool:
        """True iff candidate equals the current root."""
        if not self._levels:
            return False
        return self._levels[-1][0] == candidate

    def generate_proof(self, leaf_index: int) -> list[int]:
        """
        Collect the sibling digests from a leaf up to (excluding) the root.

        Args:
            leaf_index: Position of a real element, in [0, diff_elements)

        Returns:
            log2(W) sibling digests, bottom-up

        Raises:
            IndexOutOfRangeException: If leaf_index refers to padding or
                                      lies outside the leaf level
        """
        self._check_index(leaf_index)

        proof: list[int] = []
        index = leaf_index
        for level in self._levels:
            # The root never goes into the proof
            if len(level) == 1:
                break
            sibling = index + 1 if index % 2 == 0 else index - 1
            proof.append(level[sibling])
            index //= 2
        return proof

    def prove(self, leaf_index: int) -> MerkleProof:
        """Generate a detached MerkleProof for a real element."""
        siblings = self.generate_proof(leaf_index)
        return MerkleProof(
            leaf=self._levels[0][leaf_index],
            index=leaf_index,
            siblings=siblings,
            root=self.root,
        )

    def verify(self, proof: Sequence[int], leaf_index: int, leaf_hash: int) -> bool:
        """
        Check that leaf_hash sits at leaf_index under the current root.

        Fails closed: an index pointing at padding, a malformed digest or a
        wrong proof all give False. Never raises, never mutates the tree.
        """
        if not isinstance(leaf_index, int) or not 0 <= leaf_index < self._diff_elements:
            return False
        if not _is_digest(leaf_hash) or not all(_is_digest(p) for p in proof):
            return False
        return self.is_root(compute_root_from_proof(leaf_hash, leaf_index, proof, self._hasher))

    def verify_element(self, proof: Sequence[int], leaf_index: int, element: Any) -> bool:
        """Like verify, hashing the element first."""
        return self.verify(proof, leaf_index, self.hash_element(element))

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def insert(self, element: Any) -> None:
        """
        Add one element, consuming padding or doubling the width.

        Existing real elements never move. diff_elements grows by one.
        """
        new_hash = self._hasher.hash_element(element)
        if self._diff_elements == self.width:
            self._grow(new_hash)
        else:
            self._replace_padding(new_hash)

    def extend(self, elements: Iterable[Any]) -> None:
        """Insert elements one at a time, in order."""
        for element in elements:
            self.insert(element)

    def _grow(self, new_hash: int) -> None:
        width = self.width
        subtree = build_levels([new_hash] * width, self._hasher)
        new_root = self._hasher.hash_pair(self.root, subtree[-1][0])

        levels = [level + sub_level for level, sub_level in zip(self._levels, subtree)]
        levels.append([new_root])

        self._levels = levels
        self._diff_elements += 1
        logger.debug(f"Insert grew tree: width {width} -> {self.width}, depth {self.depth}")

    def _replace_padding(self, new_hash: int) -> None:
        index = self._diff_elements
        value = new_hash
        updates: list[tuple[int, int, int]] = []

        for depth, level in enumerate(self._levels):
            updates.append((depth, index, value))
            if len(level) == 1:
                break
            if index % 2 == 0:
                value = self._hasher.hash_pair(value, level[index + 1])
            else:
                value = self._hasher.hash_pair(level[index - 1], value)
            index //= 2

        for depth, index, value in updates:
            self._levels[depth][index] = value
        self._diff_elements += 1
        logger.debug(f"Insert replaced padding at leaf {updates[0][1]}, {len(updates)} nodes rewritten")

    def _check_index(self, leaf_index: int) -> None:
        if not isinstance(leaf_index, int) or not 0 <= leaf_index < self._diff_elements:
            raise IndexOutOfRangeException(
                f"Leaf index {leaf_index} out of range for {self._diff_elements} elements",
                leaf_index=leaf_index,
                details={"diff_elements": self._diff_elements},
            )


__all__ = [
    "MerkleProof",
    "MerkleTree",
    "compute_root_from_proof",
    "resolve_hasher",
    "verify_merkle_proof",
]
