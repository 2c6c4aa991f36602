"""Protocol constants for Hyperliquid action signing."""

from typing import Dict, List

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# L1 actions are always signed against this fixed domain.
L1_DOMAIN_NAME = "Exchange"
L1_DOMAIN_VERSION = "1"
L1_CHAIN_ID = 1337

USER_SIGNED_DOMAIN_NAME = "HyperliquidSignTransaction"
USER_SIGNED_DOMAIN_VERSION = "1"

MAINNET_SOURCE = "a"
TESTNET_SOURCE = "b"

MAINNET_CHAIN = "Mainnet"
TESTNET_CHAIN = "Testnet"

# Arbitrum One / Arbitrum Sepolia
MAINNET_SIGNATURE_CHAIN_ID = "0xa4b1"
TESTNET_SIGNATURE_CHAIN_ID = "0x66eee"

EIP712_DOMAIN_FIELDS: List[Dict[str, str]] = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

AGENT_TYPES: Dict[str, List[Dict[str, str]]] = {
    "Agent": [
        {"name": "source", "type": "string"},
        {"name": "connectionId", "type": "bytes32"},
    ],
}

SEND_MULTI_SIG_TYPES: Dict[str, List[Dict[str, str]]] = {
    "HyperliquidTransaction:SendMultiSig": [
        {"name": "hyperliquidChain", "type": "string"},
        {"name": "multiSigActionHash", "type": "bytes32"},
        {"name": "nonce", "type": "uint64"},
    ],
}

MULTI_SIG_TYPE_FIELDS: List[Dict[str, str]] = [
    {"name": "payloadMultiSigUser", "type": "address"},
    {"name": "outerSigner", "type": "address"},
]

# Integer normalization boundaries
MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -(2**53 - 1)
THIRTY_ONE_BITS = 2**31
THIRTY_TWO_BITS = 2**32
MAX_UINT64 = 2**64 - 1

ADDRESS_LENGTH = 20
SIGNATURE_HEX_LENGTH = 130

# EIP-1193 methods
ETH_REQUEST_ACCOUNTS = "eth_requestAccounts"
ETH_SIGN_TYPED_DATA_V4 = "eth_signTypedData_v4"
