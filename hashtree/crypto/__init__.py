"""
Core cryptographic utilities.

Provides the hashing primitive used by the Merkle tree.
"""
from .hashing import (
    CONCAT_BINARY,
    CONCAT_DECIMAL,
    DEFAULT_HASHER,
    DIGEST_SIZE,
    SUPPORTED_ALGORITHMS,
    SUPPORTED_CONCAT_ENCODINGS,
    TAG_BYTES,
    TAG_CANONICAL,
    TAG_ENCODABLE,
    TAG_STR,
    Hasher,
    LeafEncodable,
    concat_binary,
    concat_decimal,
    digest64,
    encode_element,
    from_hex,
    to_hex,
)

__all__ = [
    "CONCAT_BINARY",
    "CONCAT_DECIMAL",
    "DEFAULT_HASHER",
    "DIGEST_SIZE",
    "SUPPORTED_ALGORITHMS",
    "SUPPORTED_CONCAT_ENCODINGS",
    "TAG_BYTES",
    "TAG_CANONICAL",
    "TAG_ENCODABLE",
    "TAG_STR",
    "Hasher",
    "LeafEncodable",
    "concat_binary",
    "concat_decimal",
    "digest64",
    "encode_element",
    "from_hex",
    "to_hex",
]
