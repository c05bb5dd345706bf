"""Tests for the textual application shell."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from textual import events

from solana_tui.config import SolanaConfig
from solana_tui.models.network import Network
from solana_tui.models.screens import ErrorScreen, InputScreen, QueryInput, TransactionDetailScreen
from solana_tui.services.fetcher import Fetcher, TransportFailure, TxFound
from solana_tui.tui.app import ExplorerApp
from solana_tui.utils.validation import InputKind
from tests.fixtures.common import TRANSFER_SIGNATURE

SIZE = (120, 40)


@pytest.fixture
def mock_fetcher():
    """Create a mock Fetcher."""
    return AsyncMock(spec=Fetcher)


def make_app(mock_fetcher):
    return ExplorerApp(config=SolanaConfig(), fetcher=mock_fetcher)


async def type_text(pilot, text):
    for char in text:
        await pilot.press(char)


@pytest.mark.asyncio
async def test_submit_shows_transaction(mock_fetcher, transfer_transaction):
    """Typing a signature and pressing Enter ends on the transaction screen."""
    mock_fetcher.fetch.return_value = TxFound(transfer_transaction)
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await type_text(pilot, TRANSFER_SIGNATURE)
        await pilot.press("down")
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert isinstance(app.navigator.screen, TransactionDetailScreen)
        mock_fetcher.fetch.assert_awaited_once_with(
            InputKind.SIGNATURE, TRANSFER_SIGNATURE, Network.DEVNET
        )

        await pilot.press("tab")
        assert app.navigator.screen.tabs.active == 1
        await pilot.press("r")
        assert app.navigator.screen == InputScreen(QueryInput(), Network.DEVNET)


@pytest.mark.asyncio
async def test_invalid_submit_never_fetches(mock_fetcher):
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await type_text(pilot, "abc")
        await pilot.press("enter")
        await pilot.pause()

        assert isinstance(app.navigator.screen, InputScreen)
        assert app.navigator.screen.query.text == "abc"
        assert not mock_fetcher.fetch.called


@pytest.mark.asyncio
async def test_q_is_typed_on_input(mock_fetcher):
    """q is a base58 character on the input screen, not quit."""
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("q")
        await pilot.pause()
        assert app.navigator.screen.query.text == "q"
        assert app.return_code is None


@pytest.mark.asyncio
async def test_escape_quits_from_input(mock_fetcher):
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await pilot.press("escape")
        await pilot.pause()

    assert app.return_code == 0


@pytest.mark.asyncio
async def test_unexpected_fetch_error_shows_error_screen(mock_fetcher):
    """Anything escaping the fetcher still leaves the loading screen."""
    mock_fetcher.fetch.side_effect = RuntimeError("boom")
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await type_text(pilot, TRANSFER_SIGNATURE)
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert isinstance(app.navigator.screen, ErrorScreen)
        assert "boom" in app.navigator.screen.message


@pytest.mark.asyncio
async def test_cancel_discards_late_result(mock_fetcher, transfer_transaction):
    """Returning to input while loading cancels the fetch."""
    release = asyncio.Event()

    async def slow_fetch(kind, text, network):
        await release.wait()
        return TxFound(transfer_transaction)

    mock_fetcher.fetch.side_effect = slow_fetch
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await type_text(pilot, TRANSFER_SIGNATURE)
        await pilot.press("enter")
        await pilot.pause()
        await pilot.press("r")
        release.set()
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert isinstance(app.navigator.screen, InputScreen)


@pytest.mark.asyncio
async def test_transport_failure_then_quit(mock_fetcher):
    mock_fetcher.fetch.return_value = TransportFailure("connection refused")
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await type_text(pilot, TRANSFER_SIGNATURE)
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.navigator.screen.title == "Transport Error"

        await pilot.press("q")
        await pilot.pause()

    assert app.return_code == 0


@pytest.mark.asyncio
async def test_out_of_range_block_time_shows_decode_error(mock_fetcher, transfer_transaction):
    """A result the decoder rejects ends on the error screen and the app keeps running."""
    transfer_transaction["blockTime"] = 10**20
    mock_fetcher.fetch.return_value = TxFound(transfer_transaction)
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await type_text(pilot, TRANSFER_SIGNATURE)
        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert isinstance(app.navigator.screen, ErrorScreen)
        assert app.navigator.screen.title == "Decode Error"
        assert app.return_code is None

        await pilot.press("r")
        assert isinstance(app.navigator.screen, InputScreen)


@pytest.mark.asyncio
async def test_pasted_signature_is_typed(mock_fetcher, transfer_transaction):
    """Pasting a signature with a trailing newline fills the input line."""
    mock_fetcher.fetch.return_value = TxFound(transfer_transaction)
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        app.post_message(events.Paste(TRANSFER_SIGNATURE + "\n"))
        await pilot.pause()

        assert app.navigator.screen.query.text == TRANSFER_SIGNATURE
        assert app.navigator.screen.query.kind is InputKind.SIGNATURE

        await pilot.press("enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert isinstance(app.navigator.screen, TransactionDetailScreen)


@pytest.mark.asyncio
async def test_cursor_keys_edit_mid_line(mock_fetcher):
    app = make_app(mock_fetcher)

    async with app.run_test(size=SIZE) as pilot:
        await type_text(pilot, "abd")
        await pilot.press("left")
        await pilot.press("c")
        await pilot.press("home")
        await pilot.press("delete")

        assert app.navigator.screen.query.text == "bcd"
        assert app.navigator.screen.query.cursor == 0
