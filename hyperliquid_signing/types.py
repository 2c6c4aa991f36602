"""
Type definitions for the Hyperliquid signing core
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union


# Type aliases
Hex = str  # 0x-prefixed hex string
TypedDataDomain = Dict[str, Any]
TypedDataField = Dict[str, str]  # {"name": ..., "type": ...}
TypedDataTypes = Dict[str, List[TypedDataField]]
ActionValue = Union[Dict[str, Any], List[Any]]
HyperliquidChain = Literal["Mainnet", "Testnet"]
ErrorCode = Literal[
    "ENCODING_ERROR",
    "DECODING_ERROR",
    "UNSUPPORTED_WALLET",
    "NO_ACCOUNTS",
    "INVALID_SIGNATURE",
]


@dataclass(frozen=True)
class Signature:
    """ECDSA signature components in the exchange wire format"""
    r: Hex
    s: Hex
    v: int

    def to_dict(self) -> Dict[str, Any]:
        return {"r": self.r, "s": self.s, "v": self.v}


@dataclass
class SignerConfig:
    """Signing configuration shared by the convenience clients"""
    is_testnet: bool = False
    vault_address: Optional[Hex] = None
    signature_chain_id: Optional[Hex] = None
    debug: bool = False
