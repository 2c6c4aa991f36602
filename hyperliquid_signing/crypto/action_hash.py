"""
L1 action hashing

Preimage layout (byte-exact, order is part of the wire contract):

    msgpack(action) | nonce u64 BE | vault marker | [vault 20 bytes] | [0x00 | expires u64 BE]

The vault marker is always present (0x01 with an address, 0x00 without).
The expiry block is omitted entirely when no expiry is given.
"""

import logging
from typing import Any, Optional

from eth_hash.auto import keccak

from ..constants import ADDRESS_LENGTH, MAX_UINT64
from ..errors import DecodingError, EncodingError
from ..types import Hex
from .encoding import encode_action

logger = logging.getLogger(__name__)


def to_uint64_bytes(value: int, name: str = "value") -> bytes:
    """Pack an unsigned 64-bit integer as 8 big-endian bytes."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > MAX_UINT64:
        raise EncodingError(f"{name} must fit in an unsigned 64-bit integer: {value}")
    return value.to_bytes(8, "big")


def address_to_bytes(address: str) -> bytes:
    """
    Decode a 20-byte hex address.

    Raises:
        DecodingError: If the address is not 40 hex characters (0x prefix optional)
    """
    if not isinstance(address, str):
        raise DecodingError(f"Address must be a hex string, got {type(address).__name__}")
    clean = address[2:] if address.startswith(("0x", "0X")) else address
    try:
        raw = bytes.fromhex(clean)
    except ValueError as e:
        raise DecodingError(f"Invalid hex address: {address}") from e
    if len(raw) != ADDRESS_LENGTH:
        raise DecodingError(
            f"Address must be {ADDRESS_LENGTH} bytes, got {len(raw)}: {address}"
        )
    return raw


def action_hash_preimage(
    action: Any,
    nonce: int,
    vault_address: Optional[Hex] = None,
    expires_after: Optional[int] = None,
) -> bytes:
    """Build the exact byte string that is hashed into the action hash."""
    chunks = [encode_action(action), to_uint64_bytes(nonce, "nonce")]

    if vault_address:
        chunks.append(b"\x01")
        chunks.append(address_to_bytes(vault_address))
    else:
        chunks.append(b"\x00")

    if expires_after is not None:
        chunks.append(b"\x00")
        chunks.append(to_uint64_bytes(expires_after, "expires_after"))

    return b"".join(chunks)


def create_l1_action_hash(
    action: Any,
    nonce: int,
    vault_address: Optional[Hex] = None,
    expires_after: Optional[int] = None,
) -> Hex:
    """
    Create the Keccak-256 hash of an L1 action.

    Args:
        action: Action value (hash depends on key order)
        nonce: Current timestamp in ms
        vault_address: Optional vault address the action is executed for
        expires_after: Optional expiry time in ms since the epoch

    Returns:
        0x-prefixed lowercase hex digest (66 characters)

    Example:
        >>> create_l1_action_hash({"type": "cancel", "cancels": [{"a": 0, "o": 12345}]}, 1234567890)
        '0x...'
    """
    preimage = action_hash_preimage(action, nonce, vault_address, expires_after)
    action_hash = "0x" + keccak(preimage).hex()
    logger.debug("Computed action hash %s (nonce=%s)", action_hash, nonce)
    return action_hash
