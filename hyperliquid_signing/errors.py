"""
Custom exception classes for the Hyperliquid signing core
Every error is raised fail-fast; wallet/provider errors are never wrapped
"""

from typing import Any, Dict, Optional


class HyperliquidSigningError(Exception):
    """Base signing error class"""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class EncodingError(HyperliquidSigningError):
    """Value cannot be represented by the canonical encoder"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("ENCODING_ERROR", message, details)


class DecodingError(HyperliquidSigningError):
    """Malformed hex input (vault address, chain id)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("DECODING_ERROR", message, details)


class UnsupportedWalletError(HyperliquidSigningError):
    """Wallet matches none of the supported signing shapes"""

    def __init__(
        self,
        message: str = "Unsupported wallet for signing typed data",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("UNSUPPORTED_WALLET", message, details)


class NoAccountsError(HyperliquidSigningError):
    """Request-based provider returned an empty account list"""

    def __init__(
        self,
        message: str = "No Ethereum accounts available",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("NO_ACCOUNTS", message, details)


class InvalidSignatureError(HyperliquidSigningError):
    """Wallet output is not a 65-byte hex signature"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_SIGNATURE", message, details)
