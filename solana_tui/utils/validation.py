"""Validation utilities for the Solana TUI explorer.

This module classifies operator input as a transaction signature, an
account address, or neither.
"""

import re
from enum import Enum
from typing import Optional

import base58

from solana_tui.constants import MAX_IDENTIFIER_CHARS, PUBKEY_LENGTH, SIGNATURE_LENGTH

# Base58 alphabet (no 0, O, I or l)
BASE58_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]+$")


class InputKind(str, Enum):
    """What a piece of operator input identifies."""

    SIGNATURE = "Transaction"
    ADDRESS = "Account"
    INVALID = "Invalid"

    @property
    def submittable(self) -> bool:
        return self is not InputKind.INVALID


def decode_base58(text: str) -> Optional[bytes]:
    """Decode a base58 string.

    Args:
        text: Candidate base58 text

    Returns:
        The decoded bytes, or None if the text is not base58
    """
    if not text or len(text) > MAX_IDENTIFIER_CHARS or not BASE58_PATTERN.match(text):
        return None
    try:
        return base58.b58decode(text)
    except ValueError:
        return None


def classify(text: str) -> InputKind:
    """Classify operator input.

    Surrounding whitespace is ignored so pasted identifiers still match.

    Args:
        text: Raw input text

    Returns:
        SIGNATURE for 64 decoded bytes, ADDRESS for 32, INVALID otherwise
    """
    decoded = decode_base58(text.strip()) if text else None
    if decoded is None:
        return InputKind.INVALID
    if len(decoded) == SIGNATURE_LENGTH:
        return InputKind.SIGNATURE
    if len(decoded) == PUBKEY_LENGTH:
        return InputKind.ADDRESS
    return InputKind.INVALID

