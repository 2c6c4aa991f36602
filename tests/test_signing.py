"""
Real signing tests, NO MOCKS

Known vectors were produced with the private key below by an independent
implementation; every wallet shape must reproduce them exactly.
"""

import pytest

from hyperliquid_signing.crypto.signer_helpers import PrivateKeySigner
from hyperliquid_signing.crypto.signing import (
    parse_chain_id,
    sign_l1_action,
    sign_multi_sig_action,
    sign_user_signed_action,
)
from hyperliquid_signing.errors import DecodingError, NoAccountsError, UnsupportedWalletError
from hyperliquid_signing.types import Signature

# ============================================================
# Deterministic test key (NOT real funds, safe to commit)
# ============================================================
PRIVATE_KEY = "0x822e9959e022b78423eb653a62ea0020cd283e71a2a8133a6ff2aeffaf373cff"

NONCE = 1234567890
VAULT_ADDRESS = "0x1234567890123456789012345678901234567890"
EXPIRES_AFTER = 1234567890

ORDER_ACTION = {
    "type": "order",
    "orders": [
        {"a": 0, "b": True, "p": "30000", "s": "0.1", "r": False, "t": {"limit": {"tif": "Gtc"}}}
    ],
    "grouping": "na",
}

VARIANTS = {
    "plain": {},
    "vault": {"vault_address": VAULT_ADDRESS},
    "expires": {"expires_after": EXPIRES_AFTER},
    "vault_and_expires": {"vault_address": VAULT_ADDRESS, "expires_after": EXPIRES_AFTER},
}

L1_SIGNATURES = {
    ("mainnet", "plain"): Signature(
        r="0x61078d8ffa3cb591de045438a1ae2ed299b271891d1943a33901e7cfb3a31ed8",
        s="0x0e91df4f9841641d3322dad8d932874b74d7e082cdb5b533f804964a6963aef9",
        v=28,
    ),
    ("mainnet", "vault"): Signature(
        r="0x77151b3ae29b83c8affb3791568c6452019ba8c30019236003abb1efcd809433",
        s="0x55668c02f6ad4a1c335ce99987b7545984c4edc1765fe52cf115a423dc8279bb",
        v=27,
    ),
    ("mainnet", "expires"): Signature(
        r="0x162a52128fb58bc6adb783e3d36913c53127851144fc45c5603a51e97b9202fd",
        s="0x469571eb0a2101a32f81f9584e15fd35c723a6089e106f4f33798dbccf7cd416",
        v=28,
    ),
    ("mainnet", "vault_and_expires"): Signature(
        r="0x78fcca006d7fdfaf1f66978ef7a60280246fc3e7a5b39a68a1656c3e42c58bf1",
        s="0x61a09957de7f0886c2bdffb7a94e3a257bf240796883ea6ceaf4d0be37055cdd",
        v=27,
    ),
    ("testnet", "plain"): Signature(
        r="0x6b0283a894d87b996ad0182b86251cc80d27d61ef307449a2ed249a508ded1f7",
        s="0x6f884e79f4a0a10af62db831af6f8e03b3f11d899eb49b352f836746ee9226da",
        v=27,
    ),
    ("testnet", "vault"): Signature(
        r="0x294a6cf713483c129be9af5c7450aca59c9082f391f02325715c0d04b7f48ac1",
        s="0x119cfd947dcd2da1d1064a9d08bcf07e01fc9b72dd7cca69a988c74249e300f0",
        v=27,
    ),
    ("testnet", "expires"): Signature(
        r="0x5094989a7c0317db6553f21dd7f90d43415e8bd01af03829de249d4ea0aa5f66",
        s="0x491d04966e81662bd4e70d607fac30e71803c01733f4f66ff7299b0470675b8b",
        v=27,
    ),
    ("testnet", "vault_and_expires"): Signature(
        r="0x3a0bbbd9fadca54f58a2b7050899cecb97f68b2f693c63e91ca60510427326d7",
        s="0x60f75f12cae7b9dc18b889406192afcaf13f40d2f8c68cc01f7f83f3fb5deb23",
        v=27,
    ),
}

USD_SEND_ACTION = {
    "hyperliquidChain": "Mainnet",
    "signatureChainId": "0x66eee",
    "destination": "0x1234567890123456789012345678901234567890",
    "amount": "1000",
    "time": 1234567890,
}
USD_SEND_TYPES = {
    "HyperliquidTransaction:UsdSend": [
        {"name": "hyperliquidChain", "type": "string"},
        {"name": "destination", "type": "string"},
        {"name": "amount", "type": "string"},
        {"name": "time", "type": "uint64"},
    ],
}
USD_SEND_SIGNATURE = Signature(
    r="0xf777c38efe7c24cc71209526ae608f4e384d0586edf578f0e97b4b9f7c7adcc6",
    s="0x104a4a97c48ae77bf5bd777bdd45fe72d8f5ff29116b5ff64fd8cfe4ea610786",
    v=28,
)

MULTI_SIG_ACTION = {
    "signatureChainId": "0x66eee",
    "signatures": [
        {
            "r": "0x29f311b52c9e240f515c65eded550375aa64c847a03362c6f79429b21f349b54",
            "s": "0x4838140a3d4c0887a49eac5e618aca790878572da9840ee05a70ee39effc8542",
            "v": 27,
        },
        {
            "r": "0x42519dee3001e1a1306c77056e1d3c4516d7fad4d1a365a229dd5b5fb09d3491",
            "s": "0x4486a74320fbd9ef3742e5fbd8112e99eaf5e5674511ee8600911fdbf2ea0fd8",
            "v": 27,
        },
    ],
    "payload": {
        "multiSigUser": "0x1234567890123456789012345678901234567890",
        "outerSigner": "0xE5cA49Fb3bD9A581F0D1EF9CB5D7177Da08bf901",
        "action": {"type": "scheduleCancel", "time": 1234567890},
    },
}

MULTI_SIG_SIGNATURES = {
    ("mainnet", "plain"): Signature(
        r="0x0e407746b2932cf73eedc314ccd7a24fde2a5744e276b784d4344c89c9e0c30a",
        s="0x73fb175e95590e0fc8d452b300b88951b9226026d0b6d70016b2c49c2634a905",
        v=27,
    ),
    ("mainnet", "vault"): Signature(
        r="0x67dc2d43c70f3aef1e47ea9fbe235e359cc7baed46776a3e131f9a7a6c5da369",
        s="0x283578ddca36e43fe832733c6a3347c491ea4b3dd9c68f25371a29b4ee862511",
        v=28,
    ),
    ("mainnet", "expires"): Signature(
        r="0x22024103daaf05a02f34d60ffdcf8124a7d6ddeb34f7ff6e6648e050d53efb11",
        s="0x5decc6f07bc457c77bc654f29836fea1d43c3b387cacc87537154a17c9dbacaa",
        v=28,
    ),
    ("mainnet", "vault_and_expires"): Signature(
        r="0x65fcf5fdae7e88b006b205d0163e4b08e1759b6ce5e83851afda57faecbe2936",
        s="0x0c1507b6263279c676154f26f09882eb6d34fd3b37954d2719eecc50b2bec314",
        v=28,
    ),
    ("testnet", "plain"): Signature(
        r="0xd67004aeb75dafe40d549e7e09d7fe4a37bdaadb78125f0ab660bcdb5c35da26",
        s="0x30edb07fff6396e2e4de6c6eeb80dbd3be8aa8949e9afc2b6714c03408a68c48",
        v=28,
    ),
    ("testnet", "vault"): Signature(
        r="0x2aad19dbab1d2cb621a52f3b59ed402b9ee12bce4030c44619b5ee25a354df1e",
        s="0x6df0773733caf7b1a320556027c6e1645ced80a143b50aa91abdf0d63261d9b3",
        v=27,
    ),
    ("testnet", "expires"): Signature(
        r="0x617cb0cb69e7463f37fc121562d3553dc050e8db48c165dfa7f16f3cc85eec78",
        s="0x086b0bcd31996d3631a843cfb1af7aa73825ee04d8093f8c29a0b7b322e39657",
        v=27,
    ),
    ("testnet", "vault_and_expires"): Signature(
        r="0x4c7ed6c2678688fb8b64ec2d734b1b89aaf276a0a2f3d72a9099d85ddf618818",
        s="0x5a28fcc6d506d7c331a936848cd5c8bbe013019d48df8a1101902996cb893fb3",
        v=27,
    ),
}

CASES = [(network, variant) for network in ("mainnet", "testnet") for variant in VARIANTS]


# ============================================================
# L1 actions
# ============================================================

class TestSignL1Action:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("network,variant", CASES)
    async def test_known_signatures(self, network, variant):
        signature = await sign_l1_action(
            PrivateKeySigner(PRIVATE_KEY),
            ORDER_ACTION,
            NONCE,
            is_testnet=network == "testnet",
            **VARIANTS[variant],
        )
        assert signature == L1_SIGNATURES[(network, variant)]

    @pytest.mark.asyncio
    async def test_every_wallet_shape_agrees(self, all_wallets):
        """Viem, extended viem, ethers, ethers v5 and window provider give identical {r, s, v}."""
        expected = L1_SIGNATURES[("mainnet", "vault")]
        for wallet in all_wallets:
            signature = await sign_l1_action(
                wallet, ORDER_ACTION, NONCE, vault_address=VAULT_ADDRESS
            )
            assert signature == expected, type(wallet).__name__

    @pytest.mark.asyncio
    async def test_agent_message(self, recording_wallet):
        await sign_l1_action(recording_wallet, ORDER_ACTION, NONCE, is_testnet=True)

        typed_data = recording_wallet.received[0]
        assert typed_data["domain"] == {
            "name": "Exchange",
            "version": "1",
            "chainId": 1337,
            "verifyingContract": "0x0000000000000000000000000000000000000000",
        }
        assert typed_data["primaryType"] == "Agent"
        assert typed_data["message"] == {
            "source": "b",
            "connectionId": "0x25367e0dba84351148288c2233cd6130ed6cec5967ded0c0b7334f36f957cc90",
        }

    @pytest.mark.asyncio
    async def test_cancel_action_signature_is_well_formed(self, private_key_signer):
        action = {"type": "cancel", "cancels": [{"a": 0, "o": 12345}]}
        first = await sign_l1_action(private_key_signer, action, NONCE)
        second = await sign_l1_action(private_key_signer, action, NONCE)

        assert first == second
        assert len(first.r) == 66 and len(first.s) == 66
        assert first.v in (27, 28)

    @pytest.mark.asyncio
    async def test_unsupported_wallet(self):
        with pytest.raises(UnsupportedWalletError):
            await sign_l1_action(object(), ORDER_ACTION, NONCE)

    @pytest.mark.asyncio
    async def test_empty_accounts(self):
        class EmptyProvider:
            def __init__(self):
                self.methods = []

            async def request(self, args):
                self.methods.append(args["method"])
                return []

        provider = EmptyProvider()
        with pytest.raises(NoAccountsError):
            await sign_l1_action(provider, ORDER_ACTION, NONCE)
        assert "eth_signTypedData_v4" not in provider.methods


# ============================================================
# User-signed actions
# ============================================================

class TestSignUserSignedAction:
    @pytest.mark.asyncio
    async def test_known_signature(self, all_wallets):
        for wallet in all_wallets:
            signature = await sign_user_signed_action(wallet, USD_SEND_ACTION, USD_SEND_TYPES)
            assert signature == USD_SEND_SIGNATURE, type(wallet).__name__

    @pytest.mark.asyncio
    async def test_explicit_chain_id(self, private_key_signer):
        signature = await sign_user_signed_action(
            private_key_signer, USD_SEND_ACTION, USD_SEND_TYPES, chain_id=0x66EEE
        )
        assert signature == USD_SEND_SIGNATURE

    @pytest.mark.asyncio
    async def test_domain_and_filtered_message(self, recording_wallet):
        action = {"type": "usdSend", **USD_SEND_ACTION}
        await sign_user_signed_action(recording_wallet, action, USD_SEND_TYPES)

        typed_data = recording_wallet.received[0]
        assert typed_data["domain"] == {
            "name": "HyperliquidSignTransaction",
            "version": "1",
            "chainId": 421614,
            "verifyingContract": "0x0000000000000000000000000000000000000000",
        }
        assert typed_data["primaryType"] == "HyperliquidTransaction:UsdSend"
        assert typed_data["message"] == {
            "hyperliquidChain": "Mainnet",
            "destination": "0x1234567890123456789012345678901234567890",
            "amount": "1000",
            "time": 1234567890,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("agent_name", [None, ""])
    async def test_approve_agent_without_name(self, recording_wallet, agent_name):
        action = {
            "type": "approveAgent",
            "signatureChainId": "0x66eee",
            "hyperliquidChain": "Mainnet",
            "agentAddress": "0x1234567890123456789012345678901234567890",
            "agentName": agent_name,
            "nonce": 1234567890,
        }
        types = {
            "HyperliquidTransaction:ApproveAgent": [
                {"name": "hyperliquidChain", "type": "string"},
                {"name": "agentAddress", "type": "address"},
                {"name": "agentName", "type": "string"},
                {"name": "nonce", "type": "uint64"},
            ],
        }
        await sign_user_signed_action(recording_wallet, action, types)

        assert recording_wallet.received[0]["message"]["agentName"] == ""
        assert action["agentName"] == agent_name

    @pytest.mark.asyncio
    async def test_multi_sig_fields_inserted_after_first_field(self, recording_wallet):
        action = {
            **USD_SEND_ACTION,
            "payloadMultiSigUser": "0x1234567890123456789012345678901234567890",
            "outerSigner": "0xe5ca49fb3bd9a581f0d1ef9cb5d7177da08bf901",
        }
        await sign_user_signed_action(recording_wallet, action, USD_SEND_TYPES)

        typed_data = recording_wallet.received[0]
        fields = typed_data["types"]["HyperliquidTransaction:UsdSend"]
        assert [field["name"] for field in fields] == [
            "hyperliquidChain",
            "payloadMultiSigUser",
            "outerSigner",
            "destination",
            "amount",
            "time",
        ]
        assert typed_data["message"]["outerSigner"] == action["outerSigner"]
        # caller's types untouched
        assert len(USD_SEND_TYPES["HyperliquidTransaction:UsdSend"]) == 4

    @pytest.mark.asyncio
    async def test_multi_sig_fields_not_duplicated(self, recording_wallet):
        types = {
            "HyperliquidTransaction:UsdSend": [
                {"name": "hyperliquidChain", "type": "string"},
                {"name": "payloadMultiSigUser", "type": "address"},
                {"name": "outerSigner", "type": "address"},
                {"name": "time", "type": "uint64"},
            ],
        }
        action = {
            **USD_SEND_ACTION,
            "payloadMultiSigUser": "0x1234567890123456789012345678901234567890",
            "outerSigner": "0xe5ca49fb3bd9a581f0d1ef9cb5d7177da08bf901",
        }
        await sign_user_signed_action(recording_wallet, action, types)

        fields = recording_wallet.received[0]["types"]["HyperliquidTransaction:UsdSend"]
        assert len(fields) == 4

    @pytest.mark.asyncio
    async def test_invalid_chain_id(self, recording_wallet):
        action = {**USD_SEND_ACTION, "signatureChainId": "0xnothex"}
        with pytest.raises(DecodingError):
            await sign_user_signed_action(recording_wallet, action, USD_SEND_TYPES)
        assert recording_wallet.received == []

    @pytest.mark.asyncio
    async def test_unsupported_wallet(self):
        with pytest.raises(UnsupportedWalletError):
            await sign_user_signed_action(object(), USD_SEND_ACTION, USD_SEND_TYPES)


# ============================================================
# Multi-sig outer signature
# ============================================================

class TestSignMultiSigAction:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("network,variant", CASES)
    async def test_known_signatures(self, network, variant):
        signature = await sign_multi_sig_action(
            PrivateKeySigner(PRIVATE_KEY),
            MULTI_SIG_ACTION,
            NONCE,
            is_testnet=network == "testnet",
            **VARIANTS[variant],
        )
        assert signature == MULTI_SIG_SIGNATURES[(network, variant)]

    @pytest.mark.asyncio
    async def test_type_key_is_ignored(self, private_key_signer):
        action = {"type": "multiSig", **MULTI_SIG_ACTION}
        signature = await sign_multi_sig_action(private_key_signer, action, NONCE)
        assert signature == MULTI_SIG_SIGNATURES[("mainnet", "plain")]

    @pytest.mark.asyncio
    async def test_send_multi_sig_message(self, recording_wallet):
        await sign_multi_sig_action(recording_wallet, MULTI_SIG_ACTION, NONCE, is_testnet=True)

        typed_data = recording_wallet.received[0]
        assert typed_data["primaryType"] == "HyperliquidTransaction:SendMultiSig"
        assert typed_data["domain"]["chainId"] == 421614
        assert typed_data["message"]["hyperliquidChain"] == "Testnet"
        assert typed_data["message"]["nonce"] == NONCE

    @pytest.mark.asyncio
    async def test_missing_chain_id(self, recording_wallet):
        action = {key: value for key, value in MULTI_SIG_ACTION.items() if key != "signatureChainId"}
        with pytest.raises(DecodingError):
            await sign_multi_sig_action(recording_wallet, action, NONCE)


class TestParseChainId:
    def test_hex(self):
        assert parse_chain_id("0xa4b1") == 42161
        assert parse_chain_id("0x66eee") == 421614

    @pytest.mark.parametrize("value", [None, 42161, "", "0xzz"])
    def test_invalid(self, value):
        with pytest.raises(DecodingError):
            parse_chain_id(value)
