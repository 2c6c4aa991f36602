"""
Hyperliquid signing core
Action hashing and EIP-712 signing for Hyperliquid exchange requests

Example:
    ```python
    import asyncio
    from hyperliquid_signing import PrivateKeySigner, sign_l1_action

    async def main():
        wallet = PrivateKeySigner("0x...")
        action = {"type": "cancel", "cancels": [{"a": 0, "o": 12345}]}
        signature = await sign_l1_action(wallet, action, nonce=1234567890)
        print(signature.to_dict())

    asyncio.run(main())
    ```
"""

__version__ = "1.0.0"

# Convenience signers
from .client import ExchangeSigner, MultiSigSigner, NonceManager

# Types
from .types import (
    Hex,
    ErrorCode,
    HyperliquidChain,
    Signature,
    SignerConfig,
    TypedDataDomain,
    TypedDataTypes,
)

# Errors
from .errors import (
    HyperliquidSigningError,
    EncodingError,
    DecodingError,
    UnsupportedWalletError,
    NoAccountsError,
    InvalidSignatureError,
)

# Signing core
from .crypto import (
    AbstractWallet,
    PrivateKeySigner,
    WalletKind,
    build_multi_sig_action,
    co_sign_l1_action,
    co_sign_user_signed_action,
    create_l1_action_hash,
    create_signer_from_eth_account,
    detect_wallet_kind,
    encode_action,
    get_wallet_address,
    recover_signer,
    sign_l1_action,
    sign_multi_sig_action,
    sign_typed_data,
    sign_user_signed_action,
    split_signature,
)

__all__ = [
    "__version__",
    # Convenience signers
    "ExchangeSigner",
    "MultiSigSigner",
    "NonceManager",
    # Types
    "Hex",
    "ErrorCode",
    "HyperliquidChain",
    "Signature",
    "SignerConfig",
    "TypedDataDomain",
    "TypedDataTypes",
    # Errors
    "HyperliquidSigningError",
    "EncodingError",
    "DecodingError",
    "UnsupportedWalletError",
    "NoAccountsError",
    "InvalidSignatureError",
    # Signing core
    "AbstractWallet",
    "PrivateKeySigner",
    "WalletKind",
    "build_multi_sig_action",
    "co_sign_l1_action",
    "co_sign_user_signed_action",
    "create_l1_action_hash",
    "create_signer_from_eth_account",
    "detect_wallet_kind",
    "encode_action",
    "get_wallet_address",
    "recover_signer",
    "sign_l1_action",
    "sign_multi_sig_action",
    "sign_typed_data",
    "sign_user_signed_action",
    "split_signature",
]
