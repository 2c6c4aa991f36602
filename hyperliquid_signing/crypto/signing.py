"""
Action signing

Entry points that turn an action into an ``{r, s, v}`` signature:

- L1 actions are hashed (see ``action_hash``) and the hash is signed as the
  ``connectionId`` of an ``Agent`` message under the fixed Exchange domain.
- User-signed actions are signed directly as the EIP-712 message under the
  ``HyperliquidSignTransaction`` domain.
- Multi-sig actions get an outer signature over the hash of the whole
  multi-sig payload.

Errors raised by the wallet propagate unchanged.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from ..constants import (
    AGENT_TYPES,
    L1_CHAIN_ID,
    L1_DOMAIN_NAME,
    L1_DOMAIN_VERSION,
    MAINNET_CHAIN,
    MAINNET_SOURCE,
    MULTI_SIG_TYPE_FIELDS,
    SEND_MULTI_SIG_TYPES,
    TESTNET_CHAIN,
    TESTNET_SOURCE,
    USER_SIGNED_DOMAIN_NAME,
    USER_SIGNED_DOMAIN_VERSION,
    ZERO_ADDRESS,
)
from ..errors import DecodingError
from ..types import ActionValue, Hex, Signature, TypedDataDomain, TypedDataTypes
from .action_hash import create_l1_action_hash
from .signature import split_signature
from .wallet import sign_typed_data

logger = logging.getLogger(__name__)


def parse_chain_id(signature_chain_id: Any) -> int:
    """
    Parse a hex chain id such as ``"0x66eee"``.

    Raises:
        DecodingError: If the value is missing or not hex
    """
    if not isinstance(signature_chain_id, str):
        raise DecodingError(
            "signatureChainId must be a hex string",
            {"signatureChainId": signature_chain_id},
        )
    try:
        return int(signature_chain_id, 16)
    except ValueError as e:
        raise DecodingError(
            f"Invalid signatureChainId: {signature_chain_id}",
            {"signatureChainId": signature_chain_id},
        ) from e


def l1_domain() -> TypedDataDomain:
    return {
        "name": L1_DOMAIN_NAME,
        "version": L1_DOMAIN_VERSION,
        "chainId": L1_CHAIN_ID,
        "verifyingContract": ZERO_ADDRESS,
    }


def user_signed_domain(chain_id: int) -> TypedDataDomain:
    return {
        "name": USER_SIGNED_DOMAIN_NAME,
        "version": USER_SIGNED_DOMAIN_VERSION,
        "chainId": chain_id,
        "verifyingContract": ZERO_ADDRESS,
    }


async def sign_l1_action(
    wallet: Any,
    action: ActionValue,
    nonce: int,
    is_testnet: bool = False,
    vault_address: Optional[Hex] = None,
    expires_after: Optional[int] = None,
) -> Signature:
    """
    Sign an L1 action.

    Args:
        wallet: Any supported wallet
        action: Action to sign (hash depends on key order)
        nonce: Current timestamp in ms
        is_testnet: Sign for testnet (source "b") instead of mainnet (source "a")
        vault_address: Optional vault address the action is executed for
        expires_after: Optional expiry time in ms since the epoch

    Returns:
        Signature ready to submit as ``{action, signature, nonce}``

    Example:
        ```python
        from hyperliquid_signing import PrivateKeySigner, sign_l1_action

        wallet = PrivateKeySigner("0x...")
        action = {"type": "cancel", "cancels": [{"a": 0, "o": 12345}]}
        signature = await sign_l1_action(wallet, action, nonce=int(time.time() * 1000))
        ```
    """
    connection_id = create_l1_action_hash(action, nonce, vault_address, expires_after)
    message = {
        "source": TESTNET_SOURCE if is_testnet else MAINNET_SOURCE,
        "connectionId": connection_id,
    }
    logger.debug("Signing L1 action (testnet=%s, nonce=%s)", is_testnet, nonce)
    raw = await sign_typed_data(wallet, l1_domain(), AGENT_TYPES, message, "Agent")
    return split_signature(raw)


def _with_multi_sig_fields(types: TypedDataTypes, primary_type: str) -> TypedDataTypes:
    fields = list(types[primary_type])
    names = {field["name"] for field in fields}
    extra = [dict(f) for f in MULTI_SIG_TYPE_FIELDS if f["name"] not in names]
    if not extra:
        return types
    updated = dict(types)
    # after hyperliquidChain
    updated[primary_type] = fields[:1] + extra + fields[1:]
    return updated


async def sign_user_signed_action(
    wallet: Any,
    action: Mapping[str, Any],
    types: TypedDataTypes,
    chain_id: Optional[int] = None,
) -> Signature:
    """
    Sign a user-signed action.

    The action itself is the EIP-712 message; the primary type is the first
    key of ``types``. Keys of the action that the primary type does not
    declare are left out of the signed message.

    Args:
        wallet: Any supported wallet
        action: Action to sign (hex strings must be lowercase)
        types: EIP-712 types of the action (hash depends on key order)
        chain_id: Domain chain id; parsed from ``action["signatureChainId"]`` when omitted

    Returns:
        Signature ready to submit as ``{action, signature, nonce}``
    """
    primary_type = next(iter(types))

    if action.get("type") == "approveAgent" and not action.get("agentName"):
        action = {**action, "agentName": ""}

    if "payloadMultiSigUser" in action and "outerSigner" in action:
        types = _with_multi_sig_fields(types, primary_type)

    if chain_id is None:
        chain_id = parse_chain_id(action.get("signatureChainId"))

    known_keys = {field["name"] for field in types[primary_type]}
    message = {key: value for key, value in action.items() if key in known_keys}

    logger.debug("Signing user-signed action %s (chainId=%s)", primary_type, chain_id)
    raw = await sign_typed_data(
        wallet, user_signed_domain(chain_id), types, message, primary_type
    )
    return split_signature(raw)


async def sign_multi_sig_action(
    wallet: Any,
    action: Mapping[str, Any],
    nonce: int,
    is_testnet: bool = False,
    vault_address: Optional[Hex] = None,
    expires_after: Optional[int] = None,
) -> Signature:
    """
    Produce the outer signature of a multi-sig action.

    The ``type`` key is removed before hashing; the rest of the action
    (``signatureChainId``, ``signatures``, ``payload``) is hashed like an
    L1 action and signed as ``HyperliquidTransaction:SendMultiSig``.
    """
    action_without_type: Dict[str, Any] = {
        key: value for key, value in action.items() if key != "type"
    }
    chain_id = parse_chain_id(action_without_type.get("signatureChainId"))
    message = {
        "hyperliquidChain": TESTNET_CHAIN if is_testnet else MAINNET_CHAIN,
        "multiSigActionHash": create_l1_action_hash(
            action_without_type, nonce, vault_address, expires_after
        ),
        "nonce": nonce,
    }
    logger.debug("Signing multi-sig action (testnet=%s, nonce=%s)", is_testnet, nonce)
    raw = await sign_typed_data(
        wallet,
        user_signed_domain(chain_id),
        SEND_MULTI_SIG_TYPES,
        message,
        "HyperliquidTransaction:SendMultiSig",
    )
    return split_signature(raw)
