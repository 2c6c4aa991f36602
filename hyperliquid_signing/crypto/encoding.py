"""
Canonical MessagePack encoding of action values

The action hash is computed over these bytes, so the output must be identical
for the same logical value regardless of which MessagePack implementation
produced it. Key order of mappings is significant and is never changed.
"""

from typing import Any, Mapping

import msgpack

from ..constants import (
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
    THIRTY_ONE_BITS,
    THIRTY_TWO_BITS,
)
from ..errors import EncodingError


def is_large_integral_float(value: Any) -> bool:
    """
    Check whether a float must be promoted to an integer before encoding.

    True for integral floats inside the safe-integer range whose value is
    >= 2**32 or < -2**31. Smaller integral floats are left alone.
    """
    if not isinstance(value, float) or not value.is_integer():
        return False
    if value > MAX_SAFE_INTEGER or value < MIN_SAFE_INTEGER:
        return False
    return value >= THIRTY_TWO_BITS or value < -THIRTY_ONE_BITS


def normalize_integers(value: Any) -> Any:
    """
    Recursively promote large integral floats to int.

    Mappings keep their insertion order; tuples become lists (both encode
    as MessagePack arrays). Every other value is returned unchanged.
    """
    if is_large_integral_float(value):
        return int(value)
    if isinstance(value, Mapping):
        return {key: normalize_integers(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_integers(item) for item in value]
    return value


def encode_action(action: Any) -> bytes:
    """
    Encode an action value into canonical MessagePack bytes.

    Args:
        action: JSON-like value (dict, list, str, bool, None, int, float)

    Returns:
        Packed bytes

    Raises:
        EncodingError: If the value tree holds a type MessagePack cannot represent
    """
    try:
        return msgpack.packb(normalize_integers(action), use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise EncodingError(
            f"Failed to encode action: {e}",
            {"type": type(action).__name__},
        ) from e
