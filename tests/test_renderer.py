"""Tests for screen rendering."""

from decimal import Decimal

import pytest
from rich.console import Console

from solana_tui.models.network import Network
from solana_tui.models.screens import (
    AccountDetailScreen,
    ErrorScreen,
    InputScreen,
    LoadingScreen,
    QueryInput,
    TabState,
    TransactionDetailScreen,
)
from solana_tui.services.decoder import decode_account, decode_transaction
from solana_tui.tui.content import (
    content_length,
    format_amount,
    format_delta,
    format_sol,
    truncate_pubkey,
)
from solana_tui.tui.renderer import CHROME_HEIGHT, render_screen
from tests.fixtures.common import MINT, TRANSFER_SIGNATURE, make_address


def render_text(screen, viewport_height=10, width=160):
    console = Console(record=True, width=width, color_system=None)
    console.print(render_screen(screen, viewport_height))
    return console.export_text()


def test_format_sol():
    assert format_sol(1_000_000_000) == "1.000000000 SOL"
    assert format_sol(5000) == "0.000005000 SOL"
    assert format_sol(0) == "0.000000000 SOL"


def test_format_delta():
    assert format_delta(5) == "+0.000000005 SOL"
    assert format_delta(-2) == "-0.000000002 SOL"
    assert format_delta(0) == "0.000000000 SOL"


def test_truncate_pubkey():
    address = make_address(5)
    assert truncate_pubkey(address) == f"{address[:8]}…{address[-8:]}"
    assert truncate_pubkey("short") == "short"


def test_format_amount():
    assert format_amount(Decimal("1.500000")) == "1.5"
    assert format_amount(Decimal(250)) == "250"


def test_input_screen_shows_kind_and_network():
    screen = InputScreen(QueryInput.from_text(TRANSFER_SIGNATURE), Network.DEVNET)
    text = render_text(screen)

    assert TRANSFER_SIGNATURE in text
    assert "Detected: Transaction" in text
    assert "[Devnet]" in text


def test_input_screen_shows_nothing_for_invalid():
    text = render_text(InputScreen(QueryInput.from_text("abc"), Network.MAINNET))
    assert "Transaction" not in text.split("Detected:")[1].splitlines()[0]
    assert "Account" not in text.split("Detected:")[1].splitlines()[0]


def test_input_cursor_inside_text():
    """With the cursor mid-line the text stays whole and no end block is drawn."""
    text = render_text(InputScreen(QueryInput.from_text("abc", cursor=1), Network.MAINNET))
    assert "> abc" in text
    assert "█" not in text

    text = render_text(InputScreen(QueryInput.from_text("abc"), Network.MAINNET))
    assert "> abc█" in text


def test_loading_screen():
    screen = LoadingScreen(1, QueryInput.from_text(TRANSFER_SIGNATURE), Network.TESTNET)
    text = render_text(screen)
    assert "Fetching transaction" in text
    assert "Testnet" in text


def test_error_screen_offers_retry_and_quit():
    text = render_text(ErrorScreen("Transaction x was not found on Devnet", Network.DEVNET,
                                   title="Not Found"))
    assert "Not Found" in text
    assert "was not found on Devnet" in text
    assert "r new query" in text
    assert "q quit" in text


def test_transaction_overview(transfer_transaction):
    screen = TransactionDetailScreen(
        decode_transaction(transfer_transaction), TabState.initial(5), Network.DEVNET
    )
    text = render_text(screen, viewport_height=20)

    assert "Overview" in text and "Token Transfers" in text
    assert "Success" in text
    assert "0.000005000 SOL" in text
    assert "250,000,000" in text


def test_transaction_tabs_render(token_transaction):
    view = decode_transaction(token_transaction)
    tabs = TabState.initial(5)

    instructions = render_text(TransactionDetailScreen(view, tabs.select(2), Network.MAINNET))
    assert "SetComputeUnitPrice" in instructions
    assert "↳ 4.1" in instructions

    transfers = render_text(TransactionDetailScreen(view, tabs.select(3), Network.MAINNET))
    assert "1.5" in transfers
    assert "(raw)" in transfers

    logs = render_text(TransactionDetailScreen(view, tabs.select(4), Network.MAINNET))
    assert "Program log: Instruction: TransferChecked" in logs


def test_body_is_sliced_at_offset(token_transaction):
    """Only the viewport window of the active tab is drawn."""
    view = decode_transaction(token_transaction)
    tabs = TabState.initial(5).select(4).with_offset(6)
    text = render_text(TransactionDetailScreen(view, tabs, Network.MAINNET), viewport_height=2)

    assert "Program data: AQID" in text
    assert "Program log: Instruction: TransferChecked" not in text
    assert "7-8 of 9" in text


def test_render_does_not_mutate_screen(token_transaction):
    view = decode_transaction(token_transaction)
    screen = TransactionDetailScreen(view, TabState.initial(5).select(4).with_offset(50),
                                     Network.MAINNET)
    render_text(screen, viewport_height=3)
    assert screen.tabs.offset == 50


@pytest.mark.parametrize("tab,expected", [
    (0, "System Account"),
    (1, MINT),
    (2, "hello"),
])
def test_account_tabs(account_payload, tab, expected):
    view = decode_account(account_payload)
    screen = AccountDetailScreen(view, TabState.initial(3).select(tab), Network.MAINNET)
    assert expected in render_text(screen)


def test_content_length_matches_tab(token_transaction):
    view = decode_transaction(token_transaction)
    screen = TransactionDetailScreen(view, TabState.initial(5).select(4), Network.MAINNET)
    assert content_length(screen) == 9
    assert CHROME_HEIGHT > 0
