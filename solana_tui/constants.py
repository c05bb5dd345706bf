"""Constants used throughout the Solana TUI explorer.

This module defines well-known program ids and the lookup table used to
label them, plus the numeric constants shared by the decoder and renderer.
"""

# Native programs
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"
VOTE_PROGRAM_ID = "Vote111111111111111111111111111111111111111"
STAKE_PROGRAM_ID = "Stake11111111111111111111111111111111111111"
CONFIG_PROGRAM_ID = "Config1111111111111111111111111111111111111"
COMPUTE_BUDGET_PROGRAM_ID = "ComputeBudget111111111111111111111111111111"
ADDRESS_LOOKUP_TABLE_PROGRAM_ID = "AddressLookupTab1e1111111111111111111111111"
BPF_LOADER_UPGRADEABLE_PROGRAM_ID = "BPFLoaderUpgradeab1e11111111111111111111111"
BPF_LOADER_PROGRAM_ID = "BPFLoader2111111111111111111111111111111111"
BPF_LOADER_LEGACY_PROGRAM_ID = "BPFLoader1111111111111111111111111111111111"
ED25519_PROGRAM_ID = "Ed25519SigVerify111111111111111111111111111"
SECP256K1_PROGRAM_ID = "KeccakSecp256k11111111111111111111111111111"

# SPL programs
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCQbphWkTg"
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
MEMO_PROGRAM_ID = "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr"
MEMO_V1_PROGRAM_ID = "Memo1UhkJRfHyvLMcVucJwxXeuD728EqVDDwQDxFMNo"
METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"

# DEX program IDs
RAYDIUM_PROGRAM_ID = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
JUPITER_PROGRAM_ID = "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB"
ORCA_PROGRAM_ID = "9W959DqEETiGZocYWCQPaJ6sBmUzgfxXfqGeTEdp3aQP"

TOKEN_PROGRAM_IDS = frozenset({TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID})

UNKNOWN_PROGRAM_LABEL = "Unknown"

# Mapping of program IDs to human-readable labels
PROGRAM_NAMES = {
    SYSTEM_PROGRAM_ID: "System",
    VOTE_PROGRAM_ID: "Vote",
    STAKE_PROGRAM_ID: "Stake",
    CONFIG_PROGRAM_ID: "Config",
    COMPUTE_BUDGET_PROGRAM_ID: "Compute Budget",
    ADDRESS_LOOKUP_TABLE_PROGRAM_ID: "Address Lookup Table",
    BPF_LOADER_UPGRADEABLE_PROGRAM_ID: "BPF Loader Upgradeable",
    BPF_LOADER_PROGRAM_ID: "BPF Loader",
    BPF_LOADER_LEGACY_PROGRAM_ID: "BPF Loader (Legacy)",
    ED25519_PROGRAM_ID: "Ed25519 SigVerify",
    SECP256K1_PROGRAM_ID: "Secp256k1",
    TOKEN_PROGRAM_ID: "Token",
    TOKEN_2022_PROGRAM_ID: "Token-2022",
    ASSOCIATED_TOKEN_PROGRAM_ID: "Associated Token Account",
    MEMO_PROGRAM_ID: "Memo",
    MEMO_V1_PROGRAM_ID: "Memo (v1)",
    METADATA_PROGRAM_ID: "Metaplex Metadata",
    JUPITER_PROGRAM_ID: "Jupiter Aggregator",
    ORCA_PROGRAM_ID: "Orca",
    RAYDIUM_PROGRAM_ID: "Raydium AMM",
}

LAMPORTS_PER_SOL = 1_000_000_000
LAMPORTS_PER_SIGNATURE = 5_000

# Byte lengths of decoded base58 identifiers
SIGNATURE_LENGTH = 64
PUBKEY_LENGTH = 32
# A 64-byte value never needs more than 88 base58 characters
MAX_IDENTIFIER_CHARS = 88

DEFAULT_MAINNET_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_DEVNET_URL = "https://api.devnet.solana.com"
DEFAULT_TESTNET_URL = "https://api.testnet.solana.com"
