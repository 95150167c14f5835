"""
Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic serialization of structured elements into the
byte sequences that become Merkle leaves.

Elements that are neither bytes, str nor LeafEncodable (ints, floats,
dicts, lists, pydantic models) are hashed through dumps_canonical, so
two equal elements must always render to the same text.
"""

import json
import math
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def _validate_float(value: float, path: str) -> None:
    """Reject NaN and Infinity, which have no JSON form."""
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float in leaf element: {value}",
            details={"path": path, "value": str(value)},
        )


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Reduce a leaf element to plain JSON types.

    Pydantic models are dumped in JSON mode (by alias, None fields
    dropped), dict keys become strings, tuples become lists and bytes
    become hex. path locates the offending value in error details.

    Raises:
        CanonicalizationException: For NaN/Infinity or an unsupported type
    """
    # bool is a subclass of int, so both pass through here unchanged
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        _validate_float(value, path)
        return value

    if isinstance(value, BaseModel):
        dumped = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        return canonicalize_value(dumped, path)

    if isinstance(value, dict):
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Cannot encode leaf element of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Render a leaf element as canonical JSON: sorted keys, no whitespace,
    None fields dropped, non-ASCII kept as-is.

    Raises:
        CanonicalizationException: If the element cannot be rendered

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    canonicalized = canonicalize_value(obj)
    try:
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize leaf element: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def canonical_equals(obj1: Any, obj2: Any) -> bool:
    """True if both elements render to the same canonical JSON, i.e. hash to the same leaf."""
    try:
        return dumps_canonical(obj1) == dumps_canonical(obj2)
    except CanonicalizationException:
        return False
