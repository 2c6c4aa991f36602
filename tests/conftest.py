"""
Shared wallet doubles over real keys, NO MOCKS

Each double implements one of the supported wallet shapes on top of
eth_account, so signatures are real and comparable to known vectors.
"""

import json

import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data

from hyperliquid_signing.crypto.signer_helpers import (
    PrivateKeySigner,
    create_signer_from_eth_account,
)

# ============================================================
# Deterministic test keys (NOT real funds, safe to commit)
# ============================================================
PRIVATE_KEY = "0x822e9959e022b78423eb653a62ea0020cd283e71a2a8133a6ff2aeffaf373cff"


class ViemWallet:
    """sign_typed_data(typed_data)"""

    def __init__(self, private_key):
        self._signer = PrivateKeySigner(private_key)
        self.address = self._signer.address

    async def sign_typed_data(self, typed_data):
        return await self._signer.sign_typed_data(typed_data)


class ExtendedViemWallet:
    """sign_typed_data(typed_data, options)"""

    def __init__(self, private_key):
        self._signer = PrivateKeySigner(private_key)
        self.address = self._signer.address
        self.options_seen = []

    async def sign_typed_data(self, typed_data, options=None):
        self.options_seen.append(options)
        return await self._signer.sign_typed_data(typed_data)


class EthersV5Wallet:
    """_sign_typed_data(domain, types, value), synchronous and returning bytes"""

    def __init__(self, private_key):
        self._account = Account.from_key(private_key)

    def get_address(self):
        return self._account.address

    def _sign_typed_data(self, domain, types, value):
        primary_type = next(iter(types))
        message = dict(value)
        for field in types[primary_type]:
            if field["type"] == "bytes32" and isinstance(message[field["name"]], str):
                message[field["name"]] = bytes.fromhex(message[field["name"]][2:])
        signable = encode_typed_data(
            domain_data=domain, message_types=types, message_data=message
        )
        return bytes(self._account.sign_message(signable).signature)


class WindowProvider:
    """EIP-1193 request({method, params}) provider"""

    def __init__(self, private_key, accounts=None):
        self._signer = PrivateKeySigner(private_key)
        self.accounts = [self._signer.address.lower()] if accounts is None else accounts
        self.calls = []

    async def request(self, args):
        self.calls.append(args["method"])
        if args["method"] == "eth_requestAccounts":
            return self.accounts
        if args["method"] == "eth_signTypedData_v4":
            address, payload = args["params"]
            assert address == self.accounts[0]
            return await self._signer.sign_typed_data(json.loads(payload))
        raise RuntimeError(f"Unexpected method {args['method']}")


class RecordingWallet:
    """Viem-shaped double that records typed data and returns a fixed signature"""

    def __init__(self, signature="0x" + "11" * 32 + "22" * 32 + "1b"):
        self.signature = signature
        self.received = []

    def sign_typed_data(self, typed_data):
        self.received.append(typed_data)
        return self.signature


class RecordingEthersWallet:
    """Ethers-shaped double that records its arguments and returns a fixed signature"""

    def __init__(self, signature="0x" + "11" * 32 + "22" * 32 + "1b"):
        self.signature = signature
        self.received = []

    async def sign_typed_data(self, domain, types, value):
        self.received.append((domain, types, value))
        return self.signature


@pytest.fixture
def viem_wallet():
    return ViemWallet(PRIVATE_KEY)


@pytest.fixture
def extended_viem_wallet():
    return ExtendedViemWallet(PRIVATE_KEY)


@pytest.fixture
def ethers_wallet():
    return create_signer_from_eth_account(Account.from_key(PRIVATE_KEY))


@pytest.fixture
def ethers_v5_wallet():
    return EthersV5Wallet(PRIVATE_KEY)


@pytest.fixture
def window_provider():
    return WindowProvider(PRIVATE_KEY)


@pytest.fixture
def private_key_signer():
    return PrivateKeySigner(PRIVATE_KEY)


@pytest.fixture
def all_wallets(
    private_key_signer,
    viem_wallet,
    extended_viem_wallet,
    ethers_wallet,
    ethers_v5_wallet,
    window_provider,
):
    return [
        private_key_signer,
        viem_wallet,
        extended_viem_wallet,
        ethers_wallet,
        ethers_v5_wallet,
        window_provider,
    ]


@pytest.fixture
def recording_wallet():
    return RecordingWallet()


@pytest.fixture
def recording_ethers_wallet():
    return RecordingEthersWallet()
