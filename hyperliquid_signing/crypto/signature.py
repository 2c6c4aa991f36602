"""Splitting of raw 65-byte signatures into r, s, v."""

from typing import Union

from ..constants import SIGNATURE_HEX_LENGTH
from ..errors import InvalidSignatureError
from ..types import Hex, Signature


def to_hex_signature(raw: Union[str, bytes, bytearray]) -> Hex:
    """Normalize wallet output to a 0x-prefixed hex string."""
    if isinstance(raw, (bytes, bytearray)):
        return "0x" + bytes(raw).hex()
    if isinstance(raw, str):
        return raw if raw.startswith(("0x", "0X")) else "0x" + raw
    raise InvalidSignatureError(
        f"Wallet returned a {type(raw).__name__} instead of a hex signature"
    )


def split_signature(signature: Union[str, bytes, bytearray]) -> Signature:
    """
    Split a 65-byte signature into its components.

    Bytes [0, 32) are r, [32, 64) are s and byte 64 is v.

    Raises:
        InvalidSignatureError: If the input is not exactly 65 bytes of hex
    """
    clean = to_hex_signature(signature)[2:]
    if len(clean) != SIGNATURE_HEX_LENGTH:
        raise InvalidSignatureError(
            f"Signature must be {SIGNATURE_HEX_LENGTH} hex characters, got {len(clean)}"
        )
    try:
        bytes.fromhex(clean)
    except ValueError as e:
        raise InvalidSignatureError("Signature is not valid hex") from e

    clean = clean.lower()
    return Signature(
        r="0x" + clean[0:64],
        s="0x" + clean[64:128],
        v=int(clean[128:130], 16),
    )
