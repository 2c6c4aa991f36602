"""
Convenience wallets backed by a local private key.

Example:
    from hyperliquid_signing import PrivateKeySigner, sign_l1_action

    wallet = PrivateKeySigner("0x...")
    signature = await sign_l1_action(wallet, action, nonce)

    # or wrap an existing eth_account account as an ethers-style signer
    from eth_account import Account
    wallet = create_signer_from_eth_account(Account.from_key("0x..."))
"""

from __future__ import annotations

import re
from typing import Any, Dict

from eth_account import Account
from eth_account.messages import encode_typed_data

from ..types import Hex, Signature, TypedDataDomain, TypedDataTypes
from .signature import to_hex_signature

_FIXED_BYTES = re.compile(r"^bytes([1-9]|[12][0-9]|3[0-2])$")


def _bytes_fields_to_bytes(
    types: TypedDataTypes,
    primary_type: str,
    message: Dict[str, Any],
) -> Dict[str, Any]:
    """Decode hex string values of ``bytes``/``bytesN`` fields of the primary type."""
    byte_fields = {
        field["name"]
        for field in types.get(primary_type, [])
        if field["type"] == "bytes" or _FIXED_BYTES.match(field["type"])
    }
    converted = dict(message)
    for name in byte_fields:
        value = converted.get(name)
        if isinstance(value, str):
            clean = value[2:] if value.startswith(("0x", "0X")) else value
            converted[name] = bytes.fromhex(clean)
    return converted


class PrivateKeySigner:
    """
    Viem-style local account: ``sign_typed_data(typed_data)``.

    ``typed_data`` carries ``domain``, ``types`` (including EIP712Domain),
    ``primaryType`` and ``message``.
    """

    def __init__(self, private_key: str):
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> Hex:
        return self._account.address

    async def sign_typed_data(self, typed_data: Dict[str, Any]) -> Hex:
        full_message = dict(typed_data)
        full_message["message"] = _bytes_fields_to_bytes(
            typed_data["types"], typed_data["primaryType"], typed_data["message"]
        )
        signed = self._account.sign_message(encode_typed_data(full_message=full_message))
        return to_hex_signature(bytes(signed.signature))

    def __repr__(self) -> str:
        return f"PrivateKeySigner(address={self.address!r})"


def create_signer_from_eth_account(account: Any) -> Any:
    """
    Create an ethers-style wallet from an eth_account account.

    The returned object signs with ``sign_typed_data(domain, types, value)``
    where ``types`` excludes EIP712Domain, and exposes ``get_address()``.

    Args:
        account: eth_account LocalAccount (from ``Account.from_key()``)

    Example:
        from eth_account import Account
        acct = Account.from_key("0x...")
        wallet = create_signer_from_eth_account(acct)
        signature = await sign_l1_action(wallet, action, nonce)
    """

    class EthAccountSigner:
        async def get_address(self) -> str:
            return account.address

        async def sign_typed_data(
            self,
            domain: TypedDataDomain,
            types: TypedDataTypes,
            value: Dict[str, Any],
        ) -> Hex:
            primary_type = next(iter(types.keys()))
            signable = encode_typed_data(
                domain_data=domain,
                message_types=types,
                message_data=_bytes_fields_to_bytes(types, primary_type, value),
            )
            signed = account.sign_message(signable)
            return to_hex_signature(bytes(signed.signature))

    return EthAccountSigner()


def recover_signer(
    domain: TypedDataDomain,
    types: TypedDataTypes,
    message: Dict[str, Any],
    signature: Signature,
) -> Hex:
    """
    Recover the checksummed address that produced a typed-data signature.

    ``types`` excludes EIP712Domain; the primary type is its first key.
    """
    from eth_hash.auto import keccak
    from eth_keys import keys as eth_keys  # type: ignore[attr-defined]

    primary_type = next(iter(types.keys()))
    signable = encode_typed_data(
        domain_data=domain,
        message_types=types,
        message_data=_bytes_fields_to_bytes(types, primary_type, message),
    )
    digest = keccak(b"\x19" + signable.version + signable.header + signable.body)
    vrs = (
        signature.v - 27 if signature.v >= 27 else signature.v,
        int(signature.r, 16),
        int(signature.s, 16),
    )
    public_key = eth_keys.Signature(vrs=vrs).recover_public_key_from_msg_hash(digest)
    return public_key.to_checksum_address()
