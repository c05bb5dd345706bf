"""Common test fixtures for Solana TUI tests.

This module provides fixtures that can be reused across different test modules.
"""

import pytest
from unittest.mock import AsyncMock

import base58

from solana_tui.clients.rpc_client import SolanaRpcClient
from solana_tui.config import SolanaConfig
from solana_tui.constants import (
    COMPUTE_BUDGET_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from solana_tui.services.fetcher import Fetcher
from solana_tui.tui.navigator import Navigator

B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def make_address(n: int) -> str:
    """A valid base58 address: 31 zero bytes followed by ``n`` (1-57)."""
    return "1" * 31 + B58_ALPHABET[n]


def make_signature(n: int) -> str:
    """A valid base58 signature: 63 zero bytes followed by ``n`` (1-57)."""
    return "1" * 63 + B58_ALPHABET[n]


def encode_data(data: bytes) -> str:
    return base58.b58encode(data).decode()


SENDER = make_address(1)
RECIPIENT = make_address(2)
OWNER = make_address(3)
SOURCE_TOKEN = make_address(4)
DESTINATION_TOKEN = make_address(5)
MINT = make_address(6)
OTHER_PROGRAM = make_address(9)
LOOKUP_WRITABLE = make_address(20)
LOOKUP_MINT = make_address(21)
HOLDER = make_address(30)
HOLDER_TOKEN_ACCOUNT = make_address(31)

TRANSFER_SIGNATURE = make_signature(1)
TOKEN_SIGNATURE = make_signature(2)
COMPILED_SIGNATURE = make_signature(3)
BLOCKHASH = make_address(40)


@pytest.fixture
def solana_config():
    """Configuration with a short timeout for tests."""
    return SolanaConfig(timeout=5, signature_limit=10)


@pytest.fixture
def mock_rpc_client():
    """Create a mock Solana RPC client."""
    client = AsyncMock(spec=SolanaRpcClient)
    client.__aenter__.return_value = client
    client.__aexit__.return_value = None

    client.get_transaction.return_value = None
    client.get_account_info.return_value = None
    client.get_token_accounts_by_owner.return_value = []
    client.get_signatures_for_address.return_value = []

    return client


@pytest.fixture
def fetcher(solana_config, mock_rpc_client):
    """Create a Fetcher whose client factory returns the mock client."""
    return Fetcher(solana_config, client_factory=lambda network: mock_rpc_client)


@pytest.fixture
def navigator():
    """Create a Navigator with a ten line viewport."""
    return Navigator(viewport_height=10)


# Test data fixtures
@pytest.fixture
def transfer_transaction():
    """jsonParsed System transfer of 1 SOL."""
    return {
        "slot": 250000000,
        "blockTime": 1700000000,
        "version": "legacy",
        "meta": {
            "err": None,
            "fee": 5000,
            "computeUnitsConsumed": 150,
            "preBalances": [10_000_000_000, 0, 1],
            "postBalances": [8_999_995_000, 1_000_000_000, 1],
            "innerInstructions": [],
            "preTokenBalances": [],
            "postTokenBalances": [],
            "logMessages": [
                f"Program {SYSTEM_PROGRAM_ID} invoke [1]",
                f"Program {SYSTEM_PROGRAM_ID} success",
            ],
            "status": {"Ok": None},
        },
        "transaction": {
            "signatures": [TRANSFER_SIGNATURE],
            "message": {
                "accountKeys": [
                    {"pubkey": SENDER, "signer": True, "writable": True, "source": "transaction"},
                    {"pubkey": RECIPIENT, "signer": False, "writable": True, "source": "transaction"},
                    {"pubkey": SYSTEM_PROGRAM_ID, "signer": False, "writable": False,
                     "source": "transaction"},
                ],
                "recentBlockhash": BLOCKHASH,
                "instructions": [
                    {
                        "programId": SYSTEM_PROGRAM_ID,
                        "program": "system",
                        "parsed": {
                            "type": "transfer",
                            "info": {
                                "source": SENDER,
                                "destination": RECIPIENT,
                                "lamports": 1_000_000_000,
                            },
                        },
                        "stackHeight": None,
                    }
                ],
            },
        },
    }


@pytest.fixture
def token_transaction():
    """jsonParsed transaction with compute budget, a checked transfer and an inner transfer."""
    return {
        "slot": 250000001,
        "blockTime": 1700000100,
        "version": 0,
        "meta": {
            "err": None,
            "fee": 15000,
            "computeUnitsConsumed": 42000,
            "preBalances": [5_000_000_000, 2_039_280, 2_039_280, 1_461_600, 1, 1, 1],
            "postBalances": [4_999_985_000, 2_039_280, 2_039_280, 1_461_600, 1, 1, 1],
            "innerInstructions": [
                {
                    "index": 3,
                    "instructions": [
                        {
                            "programId": TOKEN_PROGRAM_ID,
                            "program": "spl-token",
                            "parsed": {
                                "type": "transfer",
                                "info": {
                                    "source": DESTINATION_TOKEN,
                                    "destination": SOURCE_TOKEN,
                                    "amount": "250",
                                    "authority": OWNER,
                                },
                            },
                            "stackHeight": 2,
                        }
                    ],
                }
            ],
            "preTokenBalances": [
                {"accountIndex": 1, "mint": MINT, "owner": OWNER,
                 "uiTokenAmount": {"amount": "5000000", "decimals": 6}},
                {"accountIndex": 2, "mint": MINT, "owner": RECIPIENT,
                 "uiTokenAmount": {"amount": "0", "decimals": 6}},
            ],
            "postTokenBalances": [],
            "logMessages": [
                f"Program {COMPUTE_BUDGET_PROGRAM_ID} invoke [1]",
                f"Program {COMPUTE_BUDGET_PROGRAM_ID} success",
                f"Program {TOKEN_PROGRAM_ID} invoke [1]",
                "Program log: Instruction: TransferChecked",
                f"Program {TOKEN_PROGRAM_ID} consumed 6200 of 200000 compute units",
                f"Program {TOKEN_PROGRAM_ID} success",
                f"Program {OTHER_PROGRAM} invoke [1]",
                "Program data: AQID",
                f"Program {OTHER_PROGRAM} success",
            ],
        },
        "transaction": {
            "signatures": [TOKEN_SIGNATURE],
            "message": {
                "accountKeys": [
                    {"pubkey": OWNER, "signer": True, "writable": True, "source": "transaction"},
                    {"pubkey": SOURCE_TOKEN, "signer": False, "writable": True, "source": "transaction"},
                    {"pubkey": DESTINATION_TOKEN, "signer": False, "writable": True,
                     "source": "transaction"},
                    {"pubkey": MINT, "signer": False, "writable": False, "source": "transaction"},
                    {"pubkey": TOKEN_PROGRAM_ID, "signer": False, "writable": False,
                     "source": "transaction"},
                    {"pubkey": COMPUTE_BUDGET_PROGRAM_ID, "signer": False, "writable": False,
                     "source": "transaction"},
                    {"pubkey": OTHER_PROGRAM, "signer": False, "writable": False,
                     "source": "transaction"},
                ],
                "recentBlockhash": BLOCKHASH,
                "instructions": [
                    {
                        "programId": COMPUTE_BUDGET_PROGRAM_ID,
                        "accounts": [],
                        "data": encode_data(bytes([2]) + (200_000).to_bytes(4, "little")),
                        "stackHeight": None,
                    },
                    {
                        "programId": COMPUTE_BUDGET_PROGRAM_ID,
                        "accounts": [],
                        "data": encode_data(bytes([3]) + (1_000).to_bytes(8, "little")),
                        "stackHeight": None,
                    },
                    {
                        "programId": TOKEN_PROGRAM_ID,
                        "program": "spl-token",
                        "parsed": {
                            "type": "transferChecked",
                            "info": {
                                "source": SOURCE_TOKEN,
                                "destination": DESTINATION_TOKEN,
                                "mint": MINT,
                                "authority": OWNER,
                                "tokenAmount": {
                                    "amount": "1500000",
                                    "decimals": 6,
                                    "uiAmount": 1.5,
                                    "uiAmountString": "1.5",
                                },
                            },
                        },
                        "stackHeight": None,
                    },
                    {
                        "programId": OTHER_PROGRAM,
                        "accounts": [OWNER, SOURCE_TOKEN],
                        "data": encode_data(b"\x07\x01"),
                        "stackHeight": None,
                    },
                ],
            },
        },
    }


@pytest.fixture
def compiled_transaction():
    """json-encoded v0 transaction with raw account keys and loaded addresses."""
    return {
        "slot": 250000002,
        "blockTime": None,
        "version": 0,
        "meta": {
            "err": {"InstructionError": [1, {"Custom": 1}]},
            "fee": 5000,
            "preBalances": [1_000_000, 2_039_280, 2_039_280, 1, 1, 3_000, 1_461_600],
            "postBalances": [995_000, 2_039_280, 2_039_280, 1, 1, 3_000, 1_461_600],
            "innerInstructions": [
                {
                    "index": 1,
                    "instructions": [
                        {
                            "programIdIndex": 3,
                            "accounts": [1, 6, 2, 0],
                            "data": encode_data(bytes([12]) + (7).to_bytes(8, "little") + bytes([9])),
                            "stackHeight": 2,
                        }
                    ],
                }
            ],
            "preTokenBalances": [],
            "postTokenBalances": [
                {"accountIndex": 1, "mint": MINT, "uiTokenAmount": {"amount": "0", "decimals": 6}},
            ],
            "loadedAddresses": {"writable": [LOOKUP_WRITABLE], "readonly": [LOOKUP_MINT]},
            "logMessages": [
                f"Program {TOKEN_PROGRAM_ID} invoke [1]",
                f"Program {TOKEN_PROGRAM_ID} failed: custom program error: 0x1",
            ],
        },
        "transaction": {
            "signatures": [COMPILED_SIGNATURE],
            "message": {
                "header": {
                    "numRequiredSignatures": 1,
                    "numReadonlySignedAccounts": 0,
                    "numReadonlyUnsignedAccounts": 2,
                },
                "accountKeys": [
                    OWNER,
                    SOURCE_TOKEN,
                    DESTINATION_TOKEN,
                    TOKEN_PROGRAM_ID,
                    COMPUTE_BUDGET_PROGRAM_ID,
                ],
                "recentBlockhash": BLOCKHASH,
                "instructions": [
                    {
                        "programIdIndex": 4,
                        "accounts": [],
                        "data": encode_data(bytes([2]) + (300_000).to_bytes(4, "little")),
                    },
                    {
                        "programIdIndex": 3,
                        "accounts": [1, 2, 0],
                        "data": encode_data(bytes([3]) + (42).to_bytes(8, "little")),
                    },
                ],
                "addressTableLookups": [],
            },
        },
    }


@pytest.fixture
def account_payload():
    """Account payload as assembled by the fetcher."""
    return {
        "address": HOLDER,
        "account": {
            "lamports": 2_500_000_000,
            "owner": SYSTEM_PROGRAM_ID,
            "executable": False,
            "rentEpoch": 18446744073709551615,
            "space": 0,
            "data": ["", "base64"],
        },
        "tokenAccounts": [
            {
                "pubkey": HOLDER_TOKEN_ACCOUNT,
                "account": {
                    "lamports": 2_039_280,
                    "owner": TOKEN_PROGRAM_ID,
                    "executable": False,
                    "data": {
                        "program": "spl-token",
                        "parsed": {
                            "type": "account",
                            "info": {
                                "mint": MINT,
                                "owner": HOLDER,
                                "tokenAmount": {"amount": "1500000", "decimals": 6, "uiAmount": 1.5},
                            },
                        },
                        "space": 165,
                    },
                },
            }
        ],
        "signatures": [
            {"signature": TRANSFER_SIGNATURE, "slot": 100, "blockTime": 1700000000,
             "err": None, "memo": None},
            {"signature": TOKEN_SIGNATURE, "slot": 200, "blockTime": 1700000500,
             "err": {"InstructionError": [0, {"Custom": 1}]}, "memo": "hello"},
        ],
    }
