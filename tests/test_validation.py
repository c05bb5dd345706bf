"""Tests for input classification."""

import base58
import pytest

from solana_tui.constants import SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID
from solana_tui.utils.validation import (
    InputKind,
    classify,
    decode_base58,
)
from tests.fixtures.common import make_address, make_signature


def test_64_byte_values_are_signatures():
    """Any base58 value of 64 bytes classifies as a signature."""
    for fill in (b"\x00", b"\x01", b"\xff"):
        text = base58.b58encode(fill * 64).decode()
        assert classify(text) is InputKind.SIGNATURE


def test_32_byte_values_are_addresses():
    """Any base58 value of 32 bytes classifies as an address."""
    assert classify(SYSTEM_PROGRAM_ID) is InputKind.ADDRESS
    assert classify(TOKEN_PROGRAM_ID) is InputKind.ADDRESS
    assert classify(base58.b58encode(b"\xff" * 32).decode()) is InputKind.ADDRESS


@pytest.mark.parametrize("length", [1, 31, 33, 48, 63, 65])
def test_other_lengths_are_invalid(length):
    """Base58 values of any other byte length are invalid."""
    text = base58.b58encode(b"\x05" * length).decode()
    assert classify(text) is InputKind.INVALID


@pytest.mark.parametrize("text", ["", "   ", "0OIl", "not-base58!", "1" * 89])
def test_non_base58_and_empty_are_invalid(text):
    """Empty, non-base58 and over-long input is invalid."""
    assert classify(text) is InputKind.INVALID
    assert not classify(text).submittable


def test_surrounding_whitespace_is_ignored():
    """Pasted identifiers with padding still classify."""
    assert classify(f"  {make_signature(5)}\n") is InputKind.SIGNATURE
    assert classify(f" {make_address(5)} ") is InputKind.ADDRESS


def test_decode_base58():
    """decode_base58 returns bytes or None."""
    assert decode_base58(make_address(1)) == b"\x00" * 31 + b"\x01"
    assert decode_base58("") is None
    assert decode_base58("0") is None


def test_kind_labels():
    """Kinds carry the labels shown on the input screen."""
    assert InputKind.SIGNATURE.value == "Transaction"
    assert InputKind.ADDRESS.value == "Account"
    assert InputKind.SIGNATURE.submittable
    assert InputKind.ADDRESS.submittable
