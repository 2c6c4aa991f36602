"""Crypto utilities"""

from .encoding import encode_action, normalize_integers
from .action_hash import action_hash_preimage, create_l1_action_hash
from .signature import split_signature, to_hex_signature
from .wallet import (
    AbstractWallet,
    WalletKind,
    detect_wallet_kind,
    get_wallet_address,
    is_supported_wallet,
    sign_typed_data,
)
from .signing import sign_l1_action, sign_multi_sig_action, sign_user_signed_action
from .multisig import (
    build_multi_sig_action,
    co_sign_l1_action,
    co_sign_user_signed_action,
    l1_multi_sig_envelope,
    user_signed_multi_sig_envelope,
)
from .signer_helpers import PrivateKeySigner, create_signer_from_eth_account, recover_signer

__all__ = [
    "encode_action",
    "normalize_integers",
    "action_hash_preimage",
    "create_l1_action_hash",
    "split_signature",
    "to_hex_signature",
    # Wallets
    "AbstractWallet",
    "WalletKind",
    "detect_wallet_kind",
    "get_wallet_address",
    "is_supported_wallet",
    "sign_typed_data",
    # Signing
    "sign_l1_action",
    "sign_multi_sig_action",
    "sign_user_signed_action",
    # Multi-sig
    "build_multi_sig_action",
    "co_sign_l1_action",
    "co_sign_user_signed_action",
    "l1_multi_sig_envelope",
    "user_signed_multi_sig_envelope",
    # Local keys
    "PrivateKeySigner",
    "create_signer_from_eth_account",
    "recover_signer",
]
