"""
Hashing Utilities
The hashing primitive boundary for Merkle trees.

This module provides:
- Element encoding: any leaf element -> stable byte sequence
- 64-bit digests: first 8 bytes (big-endian) of a hashlib algorithm
- Concatenation encodings for combining two child digests
- Hasher: the collaborator the tree calls for every hash it computes
- Hex encoding/decoding of digests with 0x prefix

Concatenation Encodings:
1. "decimal": str(left) + str(right), ASCII encoded. This is the historical
   rule and existing roots depend on it. It is ambiguous: (12, 3) and
   (1, 23) both render as "123" and therefore share a parent hash.
2. "binary": left and right as 8-byte big-endian integers laid end-to-end.
   Fixed width, so distinct pairs never encode identically.

Determinism Notes:
- Equal elements always encode to identical bytes, and elements of
  different kinds never do (see encode_element)
- Digests never depend on process state (no PYTHONHASHSEED involvement)
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from hashtree.schemas.canonical import dumps_canonical
from hashtree.schemas.errors import UnsupportedHashException


# Width of every digest handled by the tree
DIGEST_SIZE: int = 8
MAX_DIGEST: int = (1 << (DIGEST_SIZE * 8)) - 1

SUPPORTED_ALGORITHMS: tuple[str, ...] = ("sha256", "blake2b", "sha3_256", "sha512")

CONCAT_DECIMAL = "decimal"
CONCAT_BINARY = "binary"
SUPPORTED_CONCAT_ENCODINGS: tuple[str, ...] = (CONCAT_DECIMAL, CONCAT_BINARY)


# One-byte prefix per element kind, so "1", b"1" and 1 get distinct leaf bytes
TAG_BYTES = b"\x00"
TAG_STR = b"\x01"
TAG_ENCODABLE = b"\x02"
TAG_CANONICAL = b"\x03"


@runtime_checkable
class LeafEncodable(Protocol):
    """Anything that knows its own stable byte representation."""

    def leaf_bytes(self) -> bytes:
        ...


def encode_element(element: Any) -> bytes:
    """
    Convert an element into the bytes that get hashed as a leaf.

    Rules (checked in order), each body prefixed by its kind's tag:
    1. bytes / bytearray: TAG_BYTES + the bytes
    2. str: TAG_STR + UTF-8
    3. LeafEncodable: TAG_ENCODABLE + element.leaf_bytes()
    4. Anything else: TAG_CANONICAL + canonical JSON, UTF-8 encoded
       (ints, floats, dicts, lists, Pydantic models, ...)

    Raises:
        CanonicalizationException: If the element cannot be canonically serialized
    """
    if isinstance(element, (bytes, bytearray)):
        return TAG_BYTES + bytes(element)
    if isinstance(element, str):
        return TAG_STR + element.encode("utf-8")
    if isinstance(element, LeafEncodable):
        return TAG_ENCODABLE + element.leaf_bytes()
    return TAG_CANONICAL + dumps_canonical(element).encode("utf-8")


def digest64(data: bytes, algorithm: str = "sha256") -> int:
    """
    Compute a 64-bit unsigned digest of raw bytes.

    Args:
        data: Raw bytes to hash
        algorithm: hashlib algorithm name, one of SUPPORTED_ALGORITHMS

    Returns:
        Integer in [0, 2**64) built from the first 8 digest bytes (big-endian)

    Example:
        >>> hex(digest64(b"hello"))
        '0x2cf24dba5fb0a30e'
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise UnsupportedHashException(
            f"Unsupported hash algorithm: {algorithm}",
            details={"algorithm": algorithm, "supported": list(SUPPORTED_ALGORITHMS)},
        )
    full = hashlib.new(algorithm, data).digest()
    return int.from_bytes(full[:DIGEST_SIZE], "big")


def concat_decimal(left: int, right: int) -> bytes:
    """Render both digests in decimal and join them: (12, 3) -> b"123"."""
    return (str(left) + str(right)).encode("ascii")


def concat_binary(left: int, right: int) -> bytes:
    """Lay both digests end-to-end as fixed-width big-endian bytes."""
    return left.to_bytes(DIGEST_SIZE, "big") + right.to_bytes(DIGEST_SIZE, "big")


_CONCATENATORS = {
    CONCAT_DECIMAL: concat_decimal,
    CONCAT_BINARY: concat_binary,
}


def to_hex(digest: int) -> str:
    """
    Render a digest as a zero-padded hex string with 0x prefix.

    Example:
        >>> to_hex(255)
        '0x00000000000000ff'
    """
    return f"0x{digest:0{DIGEST_SIZE * 2}x}"


def from_hex(hex_string: str) -> int:
    """
    Parse a 0x-prefixed hex string into a digest.

    Raises:
        ValueError: If the prefix is missing, the string holds invalid hex
                    characters, or the value does not fit in DIGEST_SIZE bytes
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    try:
        value = int(hex_string[2:], 16)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e

    if value > MAX_DIGEST:
        raise ValueError(f"Digest does not fit in {DIGEST_SIZE} bytes: {hex_string}")
    return value


@dataclass(frozen=True)
class Hasher:
    """
    Hashing primitive used by MerkleTree.

    Leaves are digest(encode_element(element)); parents are
    digest(concatenate(left, right)). Generation, verification and
    insertion must share one Hasher or every proof fails.

    Attributes:
        algorithm: hashlib algorithm name
        concat_encoding: "decimal" (historical, ambiguous) or "binary"
    """
    algorithm: str = "sha256"
    concat_encoding: str = CONCAT_DECIMAL

    def __post_init__(self) -> None:
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise UnsupportedHashException(
                f"Unsupported hash algorithm: {self.algorithm}",
                details={"algorithm": self.algorithm, "supported": list(SUPPORTED_ALGORITHMS)},
            )
        if self.concat_encoding not in SUPPORTED_CONCAT_ENCODINGS:
            raise UnsupportedHashException(
                f"Unsupported concatenation encoding: {self.concat_encoding}",
                details={
                    "concat_encoding": self.concat_encoding,
                    "supported": list(SUPPORTED_CONCAT_ENCODINGS),
                },
            )

    def digest(self, data: bytes) -> int:
        return digest64(data, self.algorithm)

    def hash_element(self, element: Any) -> int:
        """Hash one leaf element."""
        return self.digest(encode_element(element))

    def concatenate(self, left: int, right: int) -> bytes:
        return _CONCATENATORS[self.concat_encoding](left, right)

    def hash_pair(self, left: int, right: int) -> int:
        """Hash two child digests into their parent digest, left first."""
        return self.digest(self.concatenate(left, right))


DEFAULT_HASHER = Hasher()


__all__ = [
    "DIGEST_SIZE",
    "MAX_DIGEST",
    "SUPPORTED_ALGORITHMS",
    "CONCAT_DECIMAL",
    "CONCAT_BINARY",
    "SUPPORTED_CONCAT_ENCODINGS",
    "TAG_BYTES",
    "TAG_STR",
    "TAG_ENCODABLE",
    "TAG_CANONICAL",
    "LeafEncodable",
    "encode_element",
    "digest64",
    "concat_decimal",
    "concat_binary",
    "to_hex",
    "from_hex",
    "Hasher",
    "DEFAULT_HASHER",
]
