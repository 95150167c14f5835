"""
Schemas & Canonicalization

Error taxonomy and deterministic element serialization.
"""

from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
)
from .errors import (
    CanonicalizationException,
    ConfigException,
    ErrorCodes,
    IndexOutOfRangeException,
    InvalidInputException,
    MerkleError,
    MerkleException,
    UnsupportedHashException,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "InvalidInputException",
    "IndexOutOfRangeException",
    "UnsupportedHashException",
    "CanonicalizationException",
    "ConfigException",
]
