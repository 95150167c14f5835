"""
hashtree - Merkle hash trees with inclusion proofs and incremental insertion.

Usage:
    from hashtree import MerkleTree

    tree = MerkleTree(["Crypto", "Merkle", "Rust", "Tree"])
    proof = tree.generate_proof(0)
    tree.verify(proof, 0, tree.hash_element("Crypto"))
"""

from hashtree.config import TreeConfig
from hashtree.crypto import Hasher, LeafEncodable
from hashtree.merkle import MerkleProof, MerkleTree, verify_merkle_proof
from hashtree.schemas import (
    IndexOutOfRangeException,
    InvalidInputException,
    MerkleException,
)

__version__ = "0.1.0"

__all__ = [
    "MerkleTree",
    "MerkleProof",
    "verify_merkle_proof",
    "Hasher",
    "LeafEncodable",
    "TreeConfig",
    "MerkleException",
    "InvalidInputException",
    "IndexOutOfRangeException",
]
