"""
Multi-sig composition helpers

A multi-sig action is authorized in two steps:

1. Every co-signer signs the inner action wrapped in an envelope that names
   the multi-sig account and the outer signer (``co_sign_l1_action`` or
   ``co_sign_user_signed_action``).
2. The outer signer signs the assembled ``multiSig`` action
   (``build_multi_sig_action`` + ``sign_multi_sig_action``).

Threshold and signer authorization are checked by the exchange, not here.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..constants import MAINNET_SIGNATURE_CHAIN_ID, TESTNET_SIGNATURE_CHAIN_ID
from ..types import ActionValue, Hex, Signature, TypedDataTypes
from ..utils.batch import gather_in_order
from .signing import sign_l1_action, sign_user_signed_action

logger = logging.getLogger(__name__)


def default_signature_chain_id(is_testnet: bool = False) -> Hex:
    return TESTNET_SIGNATURE_CHAIN_ID if is_testnet else MAINNET_SIGNATURE_CHAIN_ID


def l1_multi_sig_envelope(
    multi_sig_user: Hex,
    outer_signer: Hex,
    action: ActionValue,
) -> List[Any]:
    """Envelope signed by each co-signer of an L1 action."""
    return [multi_sig_user.lower(), outer_signer.lower(), action]


def user_signed_multi_sig_envelope(
    multi_sig_user: Hex,
    outer_signer: Hex,
    action: Mapping[str, Any],
) -> Dict[str, Any]:
    """Envelope signed by each co-signer of a user-signed action."""
    return {
        **action,
        "payloadMultiSigUser": multi_sig_user.lower(),
        "outerSigner": outer_signer.lower(),
    }


async def co_sign_l1_action(
    wallets: Sequence[Any],
    multi_sig_user: Hex,
    outer_signer: Hex,
    action: ActionValue,
    nonce: int,
    is_testnet: bool = False,
    vault_address: Optional[Hex] = None,
    expires_after: Optional[int] = None,
) -> List[Signature]:
    """
    Collect one signature per wallet over the L1 envelope.

    Wallets are driven concurrently; signatures come back in wallet order
    and the first wallet error is raised.
    """
    envelope = l1_multi_sig_envelope(multi_sig_user, outer_signer, action)
    logger.debug("Collecting %d L1 co-signatures", len(wallets))

    async def sign(wallet: Any, _: int) -> Signature:
        return await sign_l1_action(
            wallet, envelope, nonce, is_testnet, vault_address, expires_after
        )

    return await gather_in_order(list(wallets), sign)


async def co_sign_user_signed_action(
    wallets: Sequence[Any],
    multi_sig_user: Hex,
    outer_signer: Hex,
    action: Mapping[str, Any],
    types: TypedDataTypes,
    chain_id: Optional[int] = None,
) -> List[Signature]:
    """Collect one signature per wallet over the user-signed envelope."""
    envelope = user_signed_multi_sig_envelope(multi_sig_user, outer_signer, action)
    logger.debug("Collecting %d user-signed co-signatures", len(wallets))

    async def sign(wallet: Any, _: int) -> Signature:
        return await sign_user_signed_action(wallet, envelope, types, chain_id)

    return await gather_in_order(list(wallets), sign)


def build_multi_sig_action(
    multi_sig_user: Hex,
    outer_signer: Hex,
    action: ActionValue,
    signatures: Sequence[Signature],
    signature_chain_id: Optional[Hex] = None,
    is_testnet: bool = False,
) -> Dict[str, Any]:
    """
    Assemble the ``multiSig`` action submitted by the outer signer.

    Args:
        multi_sig_user: Multi-sig account address
        outer_signer: Address of the wallet that submits the action
        action: Inner action the co-signers signed
        signatures: Co-signatures, in the order they should be submitted
        signature_chain_id: Hex chain id (defaults to Arbitrum for the network)
        is_testnet: Selects the default chain id
    """
    return {
        "type": "multiSig",
        "signatureChainId": signature_chain_id or default_signature_chain_id(is_testnet),
        "signatures": [signature.to_dict() for signature in signatures],
        "payload": {
            "multiSigUser": multi_sig_user.lower(),
            "outerSigner": outer_signer.lower(),
            "action": action,
        },
    }
