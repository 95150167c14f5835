"""
Merkle Tree and Commitments
Level-based Merkle tree construction, proofs and incremental insertion.

This module provides:
- MerkleTree: build, generate_proof, verify, is_root, insert
- MerkleProof: detached inclusion proof
- verify_merkle_proof: verify a detached proof against its root
- Padding helpers shared by construction and insertion

Usage:
    from hashtree.merkle import MerkleTree

    tree = MerkleTree(["Crypto", "Merkle", "Rust"])
    tree.insert("Tree")

    proof = tree.generate_proof(0)
    assert tree.verify(proof, 0, tree.hash_element("Crypto"))
"""
from .padding import (
    is_power_of_two,
    next_power_of_two,
    pad_to_power_of_two,
    padding_deficit,
    tree_depth,
)

from .leveling import (
    build_leaf_level,
    build_levels,
    fold_level,
)

from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    compute_root_from_proof,
    resolve_hasher,
    verify_merkle_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    # Verification
    "compute_root_from_proof",
    "resolve_hasher",
    "verify_merkle_proof",
    # Padding policy
    "is_power_of_two",
    "next_power_of_two",
    "padding_deficit",
    "pad_to_power_of_two",
    "tree_depth",
    # Leveling
    "build_leaf_level",
    "build_levels",
    "fold_level",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
