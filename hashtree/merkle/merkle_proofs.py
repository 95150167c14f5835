"""
Merkle Proofs Convenience Wrappers
Thin class-based wrappers around MerkleTree and the tree-free verifier.

This module provides:
- MerkleProver: Build trees from raw elements and produce detached proofs
- MerkleVerifier: Verify detached proofs, from leaf digests or raw elements

A detached proof is checked against the root it carries, so a verifier
only needs the root it trusts, not the tree.

A hasher of None means the one the default TreeConfig describes.
"""
from __future__ import annotations

from typing import Any, Sequence

from hashtree.crypto.hashing import Hasher
from hashtree.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    resolve_hasher,
    verify_merkle_proof,
)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(["a", "b", "c"], index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(
        elements: Sequence[Any],
        index: int,
        hasher: Hasher | None = None,
    ) -> MerkleProof:
        """
        Build a tree over elements and prove the element at index.

        Raises:
            InvalidInputException: If elements is empty
            IndexOutOfRangeException: If index is out of range
        """
        return MerkleTree(elements, hasher=hasher).prove(index)

    @staticmethod
    def prove_all(
        elements: Sequence[Any],
        hasher: Hasher | None = None,
    ) -> list[MerkleProof]:
        """Build one tree and prove every element in it."""
        tree = MerkleTree(elements, hasher=hasher)
        return [tree.prove(i) for i in range(len(tree))]

    @staticmethod
    def compute_root(elements: Sequence[Any], hasher: Hasher | None = None) -> int:
        """Root of the tree built over elements."""
        return MerkleTree(elements, hasher=hasher).root


class MerkleVerifier:
    """Convenience class for verifying detached Merkle proofs."""

    @staticmethod
    def verify(proof: MerkleProof, hasher: Hasher | None = None) -> bool:
        return verify_merkle_proof(proof, hasher)

    @staticmethod
    def verify_leaf_in_root(
        leaf: int,
        index: int,
        siblings: list[int],
        root: int,
        hasher: Hasher | None = None,
    ) -> bool:
        """
        Verify a leaf digest is included in a root using raw components.

        Args:
            leaf: The leaf digest to verify
            index: The claimed index of the leaf
            siblings: Sibling digests (bottom-up)
            root: The trusted root
            hasher: Must match the hasher the proof was generated with

        Returns:
            True if the proof is valid, False otherwise
        """
        if index < 0:
            return False
        proof = MerkleProof(leaf=leaf, index=index, siblings=siblings, root=root)
        return verify_merkle_proof(proof, hasher)

    @staticmethod
    def verify_element_in_root(
        element: Any,
        index: int,
        siblings: list[int],
        root: int,
        hasher: Hasher | None = None,
    ) -> bool:
        """Same as verify_leaf_in_root, hashing the raw element first."""
        hasher = resolve_hasher(hasher)
        leaf = hasher.hash_element(element)
        return MerkleVerifier.verify_leaf_in_root(leaf, index, siblings, root, hasher)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
