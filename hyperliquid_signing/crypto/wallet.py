"""
Wallet abstraction for EIP-712 typed-data signing.

Supports five wallet shapes, detected at runtime by method name and the
number of declared positional parameters (never by class):

1. Viem-like: ``sign_typed_data(typed_data)``
2. Extended viem-like: ``sign_typed_data(typed_data, options)``
3. Ethers-like: ``sign_typed_data(domain, types, message)``
4. Ethers v5-like: ``_sign_typed_data(domain, types, message)``
5. Window provider (EIP-1193): ``request({"method": ..., "params": [...]})``

camelCase method names (``signTypedData``, ``_signTypedData``) are accepted
as well so that bridged JavaScript objects work unchanged.

Example:
    from hyperliquid_signing.crypto.wallet import sign_typed_data

    raw = await sign_typed_data(wallet, domain, types, message)
"""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Protocol,
    Tuple,
    Union,
)

from ..constants import ETH_REQUEST_ACCOUNTS, ETH_SIGN_TYPED_DATA_V4, EIP712_DOMAIN_FIELDS
from ..errors import NoAccountsError, UnsupportedWalletError
from ..types import Hex, TypedDataDomain, TypedDataTypes
from .signature import to_hex_signature

logger = logging.getLogger(__name__)

SIGN_TYPED_DATA_NAMES: Tuple[str, ...] = ("sign_typed_data", "signTypedData")
LEGACY_SIGN_TYPED_DATA_NAMES: Tuple[str, ...] = ("_sign_typed_data", "_signTypedData")
REQUEST_NAMES: Tuple[str, ...] = ("request",)


# ============================================================
# Wallet shapes
# ============================================================


class ViemLikeWallet(Protocol):
    """Signs a single typed-data object (domain, types, primaryType, message)."""

    def sign_typed_data(self, typed_data: Dict[str, Any]) -> Any:
        ...


class ExtendedViemLikeWallet(Protocol):
    """Viem-like wallet whose signer also takes an options argument."""

    def sign_typed_data(self, typed_data: Dict[str, Any], options: Any) -> Any:
        ...


class EthersLikeWallet(Protocol):
    """Signs (domain, types, message); types exclude EIP712Domain."""

    def sign_typed_data(
        self,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        message: Dict[str, Any],
    ) -> Any:
        ...


class EthersV5LikeWallet(Protocol):
    """Legacy ethers signer exposing the underscore-prefixed method."""

    def _sign_typed_data(
        self,
        domain: TypedDataDomain,
        types: TypedDataTypes,
        message: Dict[str, Any],
    ) -> Any:
        ...


class WindowProviderLikeWallet(Protocol):
    """EIP-1193 provider (browser-injected ``window.ethereum`` style)."""

    def request(self, args: Dict[str, Any]) -> Any:
        ...


AbstractWallet = Union[
    ViemLikeWallet,
    ExtendedViemLikeWallet,
    EthersLikeWallet,
    EthersV5LikeWallet,
    WindowProviderLikeWallet,
]


class WalletKind(Enum):
    """Calling convention detected for a wallet object."""

    VIEM = "viem"
    EXTENDED_VIEM = "extended_viem"
    ETHERS = "ethers"
    ETHERS_V5 = "ethers_v5"
    WINDOW_PROVIDER = "window_provider"
    UNSUPPORTED = "unsupported"


# ============================================================
# Detection
# ============================================================


def _find_method(candidate: Any, names: Tuple[str, ...]) -> Optional[Callable[..., Any]]:
    for name in names:
        method = getattr(candidate, name, None)
        if callable(method):
            return method
    return None


def positional_arity(method: Callable[..., Any]) -> Optional[int]:
    """
    Count declared positional parameters, like a JavaScript function's length.

    ``self`` of bound methods and ``*args`` are not counted. Returns None
    when the callable has no introspectable signature.
    """
    try:
        signature = inspect.signature(method)
    except (TypeError, ValueError):
        return None
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
    )


def detect_wallet_kind(candidate: Any) -> WalletKind:
    """Determine which calling convention a wallet object implements."""
    if candidate is None:
        return WalletKind.UNSUPPORTED

    method = _find_method(candidate, SIGN_TYPED_DATA_NAMES)
    if method is not None:
        arity = positional_arity(method)
        if arity == 1:
            return WalletKind.VIEM
        if arity == 2:
            return WalletKind.EXTENDED_VIEM
        if arity == 3:
            return WalletKind.ETHERS

    method = _find_method(candidate, LEGACY_SIGN_TYPED_DATA_NAMES)
    if method is not None and positional_arity(method) == 3:
        return WalletKind.ETHERS_V5

    method = _find_method(candidate, REQUEST_NAMES)
    if method is not None and (positional_arity(method) or 0) >= 1:
        return WalletKind.WINDOW_PROVIDER

    return WalletKind.UNSUPPORTED


def is_supported_wallet(candidate: Any) -> bool:
    return detect_wallet_kind(candidate) is not WalletKind.UNSUPPORTED


# ============================================================
# Call paths
# ============================================================


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


def with_domain_type(types: TypedDataTypes) -> TypedDataTypes:
    """Prepend the EIP712Domain type, keeping the caller's type order after it."""
    full_types: TypedDataTypes = {"EIP712Domain": [dict(f) for f in EIP712_DOMAIN_FIELDS]}
    full_types.update(types)
    return full_types


async def request_accounts(wallet: Any) -> List[str]:
    """Ask an EIP-1193 provider for its accounts."""
    request = _find_method(wallet, REQUEST_NAMES)
    accounts = await _resolve(request({"method": ETH_REQUEST_ACCOUNTS, "params": []}))
    if not isinstance(accounts, (list, tuple)) or len(accounts) == 0:
        raise NoAccountsError()
    return list(accounts)


async def _sign_viem(wallet: Any, typed_data: Dict[str, Any]) -> Any:
    method = _find_method(wallet, SIGN_TYPED_DATA_NAMES)
    return await _resolve(method(typed_data))


async def _sign_extended_viem(wallet: Any, typed_data: Dict[str, Any]) -> Any:
    method = _find_method(wallet, SIGN_TYPED_DATA_NAMES)
    return await _resolve(method(typed_data, None))


async def _sign_ethers(wallet: Any, typed_data: Dict[str, Any]) -> Any:
    method = _find_method(wallet, SIGN_TYPED_DATA_NAMES)
    return await _resolve(
        method(typed_data["domain"], typed_data["types"], typed_data["message"])
    )


async def _sign_ethers_v5(wallet: Any, typed_data: Dict[str, Any]) -> Any:
    method = _find_method(wallet, LEGACY_SIGN_TYPED_DATA_NAMES)
    return await _resolve(
        method(typed_data["domain"], typed_data["types"], typed_data["message"])
    )


async def _sign_window_provider(wallet: Any, typed_data: Dict[str, Any]) -> Any:
    accounts = await request_accounts(wallet)
    request = _find_method(wallet, REQUEST_NAMES)
    return await _resolve(
        request(
            {
                "method": ETH_SIGN_TYPED_DATA_V4,
                "params": [accounts[0], json.dumps(typed_data)],
            }
        )
    )


@dataclass(frozen=True)
class WalletStrategy:
    """How to drive one wallet kind."""

    sign: Callable[[Any, Dict[str, Any]], Awaitable[Any]]
    include_domain_type: bool


WALLET_STRATEGIES: Dict[WalletKind, WalletStrategy] = {
    WalletKind.VIEM: WalletStrategy(_sign_viem, include_domain_type=True),
    WalletKind.EXTENDED_VIEM: WalletStrategy(_sign_extended_viem, include_domain_type=True),
    WalletKind.ETHERS: WalletStrategy(_sign_ethers, include_domain_type=False),
    WalletKind.ETHERS_V5: WalletStrategy(_sign_ethers_v5, include_domain_type=False),
    WalletKind.WINDOW_PROVIDER: WalletStrategy(_sign_window_provider, include_domain_type=True),
}


async def sign_typed_data(
    wallet: Any,
    domain: TypedDataDomain,
    types: TypedDataTypes,
    message: Dict[str, Any],
    primary_type: Optional[str] = None,
) -> Hex:
    """
    Sign EIP-712 typed data with any supported wallet.

    Args:
        wallet: Wallet object of one of the five supported shapes
        domain: EIP-712 domain
        types: Type definitions without EIP712Domain (key order matters)
        message: Message to sign
        primary_type: Primary type name (defaults to the first key of ``types``)

    Returns:
        0x-prefixed hex signature (65 bytes)

    Raises:
        UnsupportedWalletError: If the wallet matches no supported shape
        NoAccountsError: If a window provider has no accounts

    Errors raised by the wallet itself propagate unchanged.
    """
    kind = detect_wallet_kind(wallet)
    strategy = WALLET_STRATEGIES.get(kind)
    if strategy is None:
        raise UnsupportedWalletError(details={"wallet_type": type(wallet).__name__})

    typed_data: Dict[str, Any] = {
        "domain": dict(domain),
        "types": with_domain_type(types) if strategy.include_domain_type else dict(types),
        "primaryType": primary_type or next(iter(types)),
        "message": message,
    }

    logger.debug(
        "Signing %s typed data with %s wallet",
        typed_data["primaryType"],
        kind.value,
    )
    raw = await strategy.sign(wallet, typed_data)
    return to_hex_signature(raw)


# ============================================================
# Address lookup
# ============================================================


async def get_wallet_address(wallet: Any) -> Hex:
    """
    Get the lowercase address of a wallet.

    Viem-like wallets expose ``address`` (local accounts) or
    ``get_addresses()`` (JSON-RPC accounts); ethers-like wallets expose
    ``get_address()``; window providers answer ``eth_requestAccounts``.

    Raises:
        UnsupportedWalletError: If the wallet is unsupported or exposes no address
        NoAccountsError: If a window provider has no accounts
    """
    kind = detect_wallet_kind(wallet)

    if kind is WalletKind.WINDOW_PROVIDER:
        accounts = await request_accounts(wallet)
        return str(accounts[0]).lower()

    if kind in (WalletKind.VIEM, WalletKind.EXTENDED_VIEM):
        get_addresses = _find_method(wallet, ("get_addresses", "getAddresses"))
        if get_addresses is not None:
            addresses = await _resolve(get_addresses())
            if not addresses:
                raise NoAccountsError()
            return str(addresses[0]).lower()

    if kind in (WalletKind.ETHERS, WalletKind.ETHERS_V5):
        get_address = _find_method(wallet, ("get_address", "getAddress"))
        if get_address is not None:
            return str(await _resolve(get_address())).lower()

    if kind is not WalletKind.UNSUPPORTED:
        address = getattr(wallet, "address", None)
        if isinstance(address, str):
            return address.lower()

    raise UnsupportedWalletError(
        "Failed to get wallet address: unknown wallet type",
        {"wallet_type": type(wallet).__name__},
    )
