"""Navigation state machine for the explorer.

The navigator owns the single live screen. Key events and fetch results
are the only inputs; each transition replaces the screen wholesale and may
return an effect (start a fetch, quit) for the application shell to carry
out.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from solana_tui.logging_config import get_logger, log_with_context
from solana_tui.models.network import Network
from solana_tui.models.screens import (
    ACCOUNT_TABS,
    TRANSACTION_TABS,
    AccountDetailScreen,
    DetailScreen,
    ErrorScreen,
    InputScreen,
    LoadingScreen,
    QueryInput,
    Screen,
    TabState,
    TransactionDetailScreen,
)
from solana_tui.services.decoder import DEFAULT_SIGNATURE_LIMIT, decode_account, decode_transaction
from solana_tui.services.fetcher import (
    AccountFound,
    FetchResult,
    NotFound,
    TransportFailure,
    TxFound,
)
from solana_tui.tui.content import content_length
from solana_tui.tui.events import Action, KeyEvent
from solana_tui.utils.errors import DecodeError
from solana_tui.utils.validation import InputKind

logger = get_logger(__name__)

# Longest text the input line accepts; anything past 88 characters is already Invalid
MAX_INPUT_LENGTH = 128


@dataclass(frozen=True)
class FetchRequest:
    """Effect: start fetching ``text`` on ``network`` for query ``query_id``."""

    query_id: int
    kind: InputKind
    text: str
    network: Network


@dataclass(frozen=True)
class Quit:
    """Effect: terminate the program."""


Effect = Optional[Union[FetchRequest, Quit]]


class Navigator:
    """Owns the live screen and applies transitions to it.

    Only the navigator replaces ``screen``; the renderer reads it.
    """

    def __init__(
        self,
        viewport_height: int = 10,
        network: Network = Network.MAINNET,
        signature_limit: int = DEFAULT_SIGNATURE_LIMIT
    ):
        """Start on an empty input screen.

        Args:
            viewport_height: Number of body lines visible on detail screens
            network: Initially selected cluster
            signature_limit: Maximum recent signatures shown for an account
        """
        self.screen: Screen = InputScreen(QueryInput(), network)
        self.viewport_height = max(1, viewport_height)
        self.signature_limit = signature_limit
        self._last_query_id = 0

    @property
    def network(self) -> Network:
        return self.screen.network

    @property
    def on_input(self) -> bool:
        return isinstance(self.screen, InputScreen)

    def handle(self, event: KeyEvent) -> Effect:
        """Apply one key event.

        Args:
            event: Logical key event

        Returns:
            The effect the shell must perform, if any
        """
        if event.action is Action.QUIT:
            return Quit()

        screen = self.screen
        if isinstance(screen, InputScreen):
            return self._handle_input(screen, event)

        if event.action is Action.RETURN_TO_INPUT:
            if isinstance(screen, LoadingScreen):
                log_with_context(logger, "info", "Query cancelled", query_id=screen.query_id)
            self.screen = InputScreen(QueryInput(), screen.network)
            return None

        if isinstance(screen, (TransactionDetailScreen, AccountDetailScreen)):
            self._handle_detail(screen, event)
        return None

    def _handle_input(self, screen: InputScreen, event: KeyEvent) -> Effect:
        action = event.action
        query = screen.query

        if action is Action.SUBMIT:
            if not query.kind.submittable:
                return None
            self._last_query_id += 1
            self.screen = LoadingScreen(self._last_query_id, query, screen.network)
            return FetchRequest(self._last_query_id, query.kind, query.identifier, screen.network)

        if action is Action.NETWORK_UP:
            self.screen = replace(screen, network=screen.network.prev())
        elif action is Action.NETWORK_DOWN:
            self.screen = replace(screen, network=screen.network.next())
        elif action in (Action.INSERT_CHAR, Action.INSERT_TEXT) and event.text:
            self.screen = replace(screen, query=query.insert(event.text, MAX_INPUT_LENGTH))
        elif action is Action.DELETE_CHAR:
            self.screen = replace(screen, query=query.backspace())
        elif action is Action.DELETE_FORWARD:
            self.screen = replace(screen, query=query.delete())
        elif action is Action.CURSOR_LEFT:
            self.screen = replace(screen, query=query.move_cursor(query.cursor - 1))
        elif action is Action.CURSOR_RIGHT:
            self.screen = replace(screen, query=query.move_cursor(query.cursor + 1))
        elif action is Action.CURSOR_START:
            self.screen = replace(screen, query=query.move_cursor(0))
        elif action is Action.CURSOR_END:
            self.screen = replace(screen, query=query.move_cursor(len(query.text)))
        elif action is Action.CLEAR_INPUT:
            self.screen = replace(screen, query=QueryInput())
        return None

    def _max_offset(self, screen: DetailScreen) -> int:
        return max(0, content_length(screen) - self.viewport_height)

    def _scrolled(self, screen: DetailScreen, offset: int) -> DetailScreen:
        offset = min(max(0, offset), self._max_offset(screen))
        return replace(screen, tabs=screen.tabs.with_offset(offset))

    def _handle_detail(self, screen: DetailScreen, event: KeyEvent) -> None:
        action = event.action
        tabs = screen.tabs
        offset = tabs.offset

        if action is Action.TAB_NEXT:
            self.screen = replace(screen, tabs=tabs.select(tabs.active + 1))
        elif action is Action.TAB_PREV:
            self.screen = replace(screen, tabs=tabs.select(tabs.active - 1))
        elif action is Action.SCROLL_UP:
            self.screen = self._scrolled(screen, offset - 1)
        elif action is Action.SCROLL_DOWN:
            self.screen = self._scrolled(screen, offset + 1)
        elif action is Action.PAGE_UP:
            self.screen = self._scrolled(screen, offset - self.viewport_height)
        elif action is Action.PAGE_DOWN:
            self.screen = self._scrolled(screen, offset + self.viewport_height)
        elif action is Action.HOME:
            self.screen = self._scrolled(screen, 0)

    def set_viewport_height(self, height: int) -> None:
        """Record a new viewport height and re-clamp the visible tab."""
        self.viewport_height = max(1, height)
        screen = self.screen
        if isinstance(screen, (TransactionDetailScreen, AccountDetailScreen)):
            self.screen = self._scrolled(screen, screen.tabs.offset)

    def apply_fetch_result(self, query_id: int, result: FetchResult) -> bool:
        """Leave the loading screen with the outcome of a fetch.

        Results whose query is no longer the live loading screen are
        discarded.

        Args:
            query_id: Id from the ``FetchRequest`` that produced ``result``
            result: Outcome of the fetch

        Returns:
            True if the result was applied, False if it was stale
        """
        screen = self.screen
        if not isinstance(screen, LoadingScreen) or screen.query_id != query_id:
            log_with_context(logger, "info", "Discarding stale fetch result", query_id=query_id,
                             result=type(result).__name__)
            return False

        self.screen = self._screen_for(screen, result)
        log_with_context(logger, "info", "Fetch applied", query_id=query_id,
                         screen=type(self.screen).__name__)
        return True

    def _screen_for(self, loading: LoadingScreen, result: FetchResult) -> Screen:
        network = loading.network
        try:
            if isinstance(result, TxFound):
                return TransactionDetailScreen(
                    view=decode_transaction(result.raw),
                    tabs=TabState.initial(len(TRANSACTION_TABS)),
                    network=network,
                )
            if isinstance(result, AccountFound):
                return AccountDetailScreen(
                    view=decode_account(result.raw, self.signature_limit),
                    tabs=TabState.initial(len(ACCOUNT_TABS)),
                    network=network,
                )
        except DecodeError as e:
            return ErrorScreen(f"Could not decode the RPC response ({e.message})", network,
                               title="Decode Error")
        except Exception as e:
            logger.exception(f"Unexpected failure decoding query {loading.query_id}")
            return ErrorScreen(
                f"Could not decode the RPC response ({type(e).__name__}: {e})", network,
                title="Decode Error"
            )

        if isinstance(result, NotFound):
            what = "Transaction" if result.kind is InputKind.SIGNATURE else "Account"
            return ErrorScreen(f"{what} {result.identifier} was not found on {result.network.label}",
                               network, title="Not Found")

        if isinstance(result, TransportFailure):
            if result.timed_out:
                return ErrorScreen(result.detail, network, title="Timeout")
            return ErrorScreen(f"RPC request failed: {result.detail}", network,
                               title="Transport Error")

        return ErrorScreen(f"Unexpected fetch result: {result!r}", network)
