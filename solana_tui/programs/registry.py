"""Program identification for decoded instructions.

Program labels come from a static table keyed by program id; anything not
in the table is labelled ``Unknown``. Instruction types for compiled
(non-parsed) instructions are guessed from the leading discriminator of the
instruction data.
"""

from typing import Dict, Optional

from solana_tui.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    COMPUTE_BUDGET_PROGRAM_ID,
    MEMO_PROGRAM_ID,
    MEMO_V1_PROGRAM_ID,
    PROGRAM_NAMES,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_IDS,
    UNKNOWN_PROGRAM_LABEL,
)

UNKNOWN_INSTRUCTION = "Unknown"

# System instructions are a little-endian u32 discriminator
_SYSTEM_INSTRUCTION_TYPES = {
    0: "CreateAccount",
    1: "Assign",
    2: "Transfer",
    3: "CreateAccountWithSeed",
    4: "AdvanceNonceAccount",
    5: "WithdrawNonceAccount",
    6: "InitializeNonceAccount",
    7: "AuthorizeNonceAccount",
    8: "Allocate",
    9: "AllocateWithSeed",
    10: "AssignWithSeed",
    11: "TransferWithSeed",
    12: "UpgradeNonceAccount",
}

_TOKEN_INSTRUCTION_TYPES = {
    0: "InitializeMint",
    1: "InitializeAccount",
    2: "InitializeMultisig",
    3: "Transfer",
    4: "Approve",
    5: "Revoke",
    6: "SetAuthority",
    7: "MintTo",
    8: "Burn",
    9: "CloseAccount",
    10: "FreezeAccount",
    11: "ThawAccount",
    12: "TransferChecked",
    13: "ApproveChecked",
    14: "MintToChecked",
    15: "BurnChecked",
    16: "InitializeAccount2",
    17: "SyncNative",
    18: "InitializeAccount3",
    19: "InitializeMultisig2",
    20: "InitializeMint2",
}

_COMPUTE_BUDGET_INSTRUCTION_TYPES = {
    0: "RequestUnits",
    1: "RequestHeapFrame",
    2: "SetComputeUnitLimit",
    3: "SetComputeUnitPrice",
    4: "SetLoadedAccountsDataSizeLimit",
}

_ASSOCIATED_TOKEN_INSTRUCTION_TYPES = {
    0: "Create",
    1: "CreateIdempotent",
    2: "RecoverNested",
}


def resolve_program_label(program_id: Optional[str]) -> str:
    """Get a human-readable label for a program id.

    Args:
        program_id: The program id, possibly missing

    Returns:
        The known label, or ``Unknown``
    """
    if not program_id:
        return UNKNOWN_PROGRAM_LABEL
    return PROGRAM_NAMES.get(program_id, UNKNOWN_PROGRAM_LABEL)


def _lookup(table: Dict[int, str], discriminator: int) -> str:
    return table.get(discriminator, UNKNOWN_INSTRUCTION)


def guess_instruction_type(program_id: str, data: Optional[bytes]) -> str:
    """Guess the instruction type from raw instruction data.

    Args:
        program_id: Program the instruction targets
        data: Decoded instruction data, or None if it could not be decoded

    Returns:
        Instruction type name, ``Unknown`` when it cannot be determined
    """
    if data is None:
        return UNKNOWN_INSTRUCTION

    if program_id in (MEMO_PROGRAM_ID, MEMO_V1_PROGRAM_ID):
        return "Memo"

    if program_id == ASSOCIATED_TOKEN_PROGRAM_ID:
        # Legacy Create carries no instruction data
        if not data:
            return "Create"
        return _lookup(_ASSOCIATED_TOKEN_INSTRUCTION_TYPES, data[0])

    if not data:
        return UNKNOWN_INSTRUCTION

    if program_id == SYSTEM_PROGRAM_ID:
        if len(data) < 4:
            return UNKNOWN_INSTRUCTION
        return _lookup(_SYSTEM_INSTRUCTION_TYPES, int.from_bytes(data[:4], "little"))

    if program_id in TOKEN_PROGRAM_IDS:
        return _lookup(_TOKEN_INSTRUCTION_TYPES, data[0])

    if program_id == COMPUTE_BUDGET_PROGRAM_ID:
        return _lookup(_COMPUTE_BUDGET_INSTRUCTION_TYPES, data[0])

    return UNKNOWN_INSTRUCTION


def normalize_parsed_type(parsed_type: Optional[str]) -> str:
    """Turn a jsonParsed ``type`` (``transferChecked``) into ``TransferChecked``."""
    if not parsed_type or not isinstance(parsed_type, str):
        return UNKNOWN_INSTRUCTION
    return parsed_type[0].upper() + parsed_type[1:]
