"""
Hyperliquid signing core
Convenience signers that produce ready-to-submit exchange request bodies
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from .constants import MAINNET_CHAIN, TESTNET_CHAIN
from .crypto.action_hash import address_to_bytes
from .crypto.multisig import (
    build_multi_sig_action,
    co_sign_l1_action,
    co_sign_user_signed_action,
    default_signature_chain_id,
)
from .crypto.signing import (
    parse_chain_id,
    sign_l1_action,
    sign_multi_sig_action,
    sign_user_signed_action,
)
from .crypto.wallet import get_wallet_address, is_supported_wallet
from .errors import DecodingError, UnsupportedWalletError
from .types import ActionValue, Hex, Signature, SignerConfig, TypedDataTypes

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class NonceManager:
    """
    Hands out strictly increasing millisecond nonces.

    When the clock has not advanced past the last nonce (several calls within
    one millisecond, or a clock step backwards), the last nonce plus one is
    used instead.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self.last_nonce = 0

    def next_nonce(self) -> int:
        nonce = self._clock()
        if nonce <= self.last_nonce:
            self.last_nonce += 1
            nonce = self.last_nonce
        else:
            self.last_nonce = nonce
        return nonce


def _request_body(
    action: Any,
    signature: Signature,
    nonce: int,
    vault_address: Optional[Hex] = None,
    expires_after: Optional[int] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "action": action,
        "signature": signature.to_dict(),
        "nonce": nonce,
    }
    if vault_address:
        body["vaultAddress"] = vault_address
    if expires_after is not None:
        body["expiresAfter"] = expires_after
    return body


def _user_signed_nonce(action: Dict[str, Any]) -> int:
    nonce = action.get("nonce", action.get("time"))
    if nonce is None:
        raise ValueError("User-signed action must carry a 'nonce' or 'time' field")
    return nonce


def _validate_config(config: SignerConfig) -> None:
    if config.vault_address:
        try:
            address_to_bytes(config.vault_address)
        except DecodingError as e:
            raise ValueError(f"Invalid vault_address: {config.vault_address}") from e

    if config.signature_chain_id is not None:
        try:
            parse_chain_id(config.signature_chain_id)
        except DecodingError as e:
            raise ValueError(
                f"Invalid signature_chain_id: {config.signature_chain_id}"
            ) from e


class ExchangeSigner:
    """
    Signs exchange actions for one wallet

    Example:
        ```python
        signer = ExchangeSigner(PrivateKeySigner("0x..."), is_testnet=True)

        body = await signer.sign_l1_action(
            {"type": "cancel", "cancels": [{"a": 0, "o": 12345}]}
        )
        # POST body as JSON to the exchange endpoint
        ```
    """

    def __init__(
        self,
        wallet: Any,
        is_testnet: bool = False,
        vault_address: Optional[Hex] = None,
        signature_chain_id: Optional[Hex] = None,
        nonce_manager: Optional[NonceManager] = None,
        debug: bool = False,
    ) -> None:
        if not is_supported_wallet(wallet):
            raise UnsupportedWalletError(details={"wallet_type": type(wallet).__name__})

        self.wallet = wallet
        self.config = SignerConfig(
            is_testnet=is_testnet,
            vault_address=vault_address,
            signature_chain_id=signature_chain_id,
            debug=debug,
        )
        _validate_config(self.config)
        self.nonce_manager = nonce_manager or NonceManager()

        if debug:
            logging.getLogger("hyperliquid_signing").setLevel(logging.DEBUG)
            logger.debug("Exchange signer initialized: testnet=%s", is_testnet)

    @property
    def hyperliquid_chain(self) -> str:
        return TESTNET_CHAIN if self.config.is_testnet else MAINNET_CHAIN

    @property
    def signature_chain_id(self) -> Hex:
        return self.config.signature_chain_id or default_signature_chain_id(
            self.config.is_testnet
        )

    def _prepare_user_signed_action(self, action: Dict[str, Any]) -> Dict[str, Any]:
        """Fill in signatureChainId and hyperliquidChain when the caller left them out."""
        prepared = dict(action)
        prepared.setdefault("signatureChainId", self.signature_chain_id)
        prepared.setdefault("hyperliquidChain", self.hyperliquid_chain)
        return prepared

    async def get_address(self) -> Hex:
        return await get_wallet_address(self.wallet)

    async def sign_l1_action(
        self,
        action: ActionValue,
        nonce: Optional[int] = None,
        vault_address: Optional[Hex] = None,
        expires_after: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Sign an L1 action and build the request body.

        Args:
            action: L1 action (key order is significant)
            nonce: Nonce to use (default: next nonce from the nonce manager)
            vault_address: Overrides the configured vault address
            expires_after: Optional expiry time in ms since the epoch

        Returns:
            ``{action, signature, nonce[, vaultAddress][, expiresAfter]}``
        """
        nonce = nonce if nonce is not None else self.nonce_manager.next_nonce()
        vault_address = vault_address or self.config.vault_address

        signature = await sign_l1_action(
            self.wallet,
            action,
            nonce,
            self.config.is_testnet,
            vault_address,
            expires_after,
        )
        return _request_body(action, signature, nonce, vault_address, expires_after)

    async def sign_user_signed_action(
        self,
        action: Dict[str, Any],
        types: TypedDataTypes,
    ) -> Dict[str, Any]:
        """
        Sign a user-signed action and build the request body.

        The action's own ``nonce`` (or ``time``) field is the request nonce.
        """
        prepared = self._prepare_user_signed_action(action)
        nonce = _user_signed_nonce(prepared)
        signature = await sign_user_signed_action(self.wallet, prepared, types)
        return _request_body(prepared, signature, nonce)


class MultiSigSigner(ExchangeSigner):
    """
    Signs actions on behalf of a multi-sig account

    The first signer is the outer signer: it co-signs like every other signer
    and additionally signs the assembled ``multiSig`` action.

    Example:
        ```python
        signer = MultiSigSigner(
            multi_sig_user="0x...",
            signers=[PrivateKeySigner("0x..."), PrivateKeySigner("0x...")],
        )
        body = await signer.sign_l1_action({"type": "scheduleCancel", "time": ...})
        ```
    """

    def __init__(
        self,
        multi_sig_user: Hex,
        signers: Sequence[Any],
        is_testnet: bool = False,
        vault_address: Optional[Hex] = None,
        signature_chain_id: Optional[Hex] = None,
        nonce_manager: Optional[NonceManager] = None,
        debug: bool = False,
    ) -> None:
        if not signers:
            raise ValueError("At least one signer is required")

        try:
            address_to_bytes(multi_sig_user)
        except DecodingError as e:
            raise ValueError(f"Invalid multi_sig_user: {multi_sig_user}") from e

        for wallet in signers[1:]:
            if not is_supported_wallet(wallet):
                raise UnsupportedWalletError(
                    details={"wallet_type": type(wallet).__name__}
                )

        super().__init__(
            signers[0],
            is_testnet=is_testnet,
            vault_address=vault_address,
            signature_chain_id=signature_chain_id,
            nonce_manager=nonce_manager,
            debug=debug,
        )
        self.multi_sig_user = multi_sig_user
        self.signers: List[Any] = list(signers)

    async def sign_l1_action(
        self,
        action: ActionValue,
        nonce: Optional[int] = None,
        vault_address: Optional[Hex] = None,
        expires_after: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Co-sign an L1 action with every signer and wrap it in a multiSig request body."""
        nonce = nonce if nonce is not None else self.nonce_manager.next_nonce()
        vault_address = vault_address or self.config.vault_address
        outer_signer = await self.get_address()

        signatures = await co_sign_l1_action(
            self.signers,
            self.multi_sig_user,
            outer_signer,
            action,
            nonce,
            self.config.is_testnet,
            vault_address,
            expires_after,
        )
        return await self._sign_outer(
            action, signatures, outer_signer, nonce, vault_address, expires_after
        )

    async def sign_user_signed_action(
        self,
        action: Dict[str, Any],
        types: TypedDataTypes,
    ) -> Dict[str, Any]:
        """Co-sign a user-signed action with every signer and wrap it in a multiSig request body."""
        prepared = self._prepare_user_signed_action(action)
        nonce = _user_signed_nonce(prepared)
        outer_signer = await self.get_address()

        signatures = await co_sign_user_signed_action(
            self.signers,
            self.multi_sig_user,
            outer_signer,
            prepared,
            types,
            parse_chain_id(prepared["signatureChainId"]),
        )
        return await self._sign_outer(prepared, signatures, outer_signer, nonce)

    async def _sign_outer(
        self,
        action: Any,
        signatures: List[Signature],
        outer_signer: Hex,
        nonce: int,
        vault_address: Optional[Hex] = None,
        expires_after: Optional[int] = None,
    ) -> Dict[str, Any]:
        multi_sig_action = build_multi_sig_action(
            self.multi_sig_user,
            outer_signer,
            action,
            signatures,
            signature_chain_id=self.signature_chain_id,
        )
        logger.debug(
            "Collected %d co-signatures for multi-sig user %s",
            len(signatures),
            self.multi_sig_user,
        )
        signature = await sign_multi_sig_action(
            self.wallet,
            multi_sig_action,
            nonce,
            self.config.is_testnet,
            vault_address,
            expires_after,
        )
        return _request_body(
            multi_sig_action, signature, nonce, vault_address, expires_after
        )
