"""Textual application shell for the explorer.

The shell only moves data around: terminal keys go through
``translate_key`` to the navigator, effects returned by the navigator are
carried out (fetch in a worker, quit), and the live screen is redrawn.
"""

import asyncio
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from solana_tui.config import SolanaConfig, get_solana_config
from solana_tui.logging_config import get_logger, log_with_context
from solana_tui.models.screens import LoadingScreen
from solana_tui.services.fetcher import Fetcher, TransportFailure
from solana_tui.tui.events import BOUND_KEYS, Action, KeyEvent, translate_key, translate_paste
from solana_tui.tui.navigator import FetchRequest, Navigator, Quit
from solana_tui.tui.renderer import CHROME_HEIGHT, render_screen

logger = get_logger(__name__)

FETCH_GROUP = "fetch"


class ExplorerApp(App):
    """Single-view terminal explorer for Solana transactions and accounts."""

    TITLE = "Solana Explorer"
    CSS = """
    #view {
        height: 100%;
        width: 100%;
    }
    """

    # Priority bindings so focus traversal and the default quit key never see these
    BINDINGS = [
        Binding(key, f"dispatch_key('{key}')", show=False, priority=True)
        for key in BOUND_KEYS
    ]

    def __init__(
        self,
        config: Optional[SolanaConfig] = None,
        fetcher: Optional[Fetcher] = None,
        navigator: Optional[Navigator] = None
    ):
        super().__init__()
        self.config = config or get_solana_config()
        self.fetcher = fetcher or Fetcher(self.config)
        self.navigator = navigator or Navigator(signature_limit=self.config.signature_limit)

    def compose(self) -> ComposeResult:
        yield Static(id="view")

    def on_mount(self) -> None:
        self.navigator.set_viewport_height(self.size.height - CHROME_HEIGHT)
        self.refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.navigator.set_viewport_height(event.size.height - CHROME_HEIGHT)
        self.refresh_view()

    def refresh_view(self) -> None:
        """Redraw the live screen."""
        renderable = render_screen(self.navigator.screen, self.navigator.viewport_height)
        self.query_one("#view", Static).update(renderable)

    def action_dispatch_key(self, key: str) -> None:
        self._dispatch(key, None)

    def on_key(self, event: events.Key) -> None:
        if event.key in BOUND_KEYS:
            return
        character = event.character if event.is_printable else None
        if self._dispatch(event.key, character):
            event.stop()

    def _dispatch(self, key: str, character: Optional[str]) -> bool:
        key_event = translate_key(key, character, on_input=self.navigator.on_input)
        if key_event is None:
            return False
        self._apply(key_event)
        return True

    def on_paste(self, event: events.Paste) -> None:
        key_event = translate_paste(event.text, on_input=self.navigator.on_input)
        if key_event is not None:
            self._apply(key_event)
            event.stop()

    def _apply(self, key_event: KeyEvent) -> None:
        previous = self.navigator.screen
        effect = self.navigator.handle(key_event)

        if isinstance(previous, LoadingScreen) and key_event.action is Action.RETURN_TO_INPUT:
            self.workers.cancel_group(self, FETCH_GROUP)

        if isinstance(effect, Quit):
            logger.info("Quit requested")
            self.exit(return_code=0)
            return
        if isinstance(effect, FetchRequest):
            self.run_worker(self._fetch(effect), exclusive=True, group=FETCH_GROUP)

        self.refresh_view()

    async def _fetch(self, request: FetchRequest) -> None:
        log_with_context(logger, "info", "Dispatching fetch", query_id=request.query_id,
                         kind=request.kind.value, network=request.network.value)
        try:
            result = await self.fetcher.fetch(request.kind, request.text, request.network)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"Fetch {request.query_id} failed unexpectedly")
            result = TransportFailure(str(e) or type(e).__name__)

        if self.navigator.apply_fetch_result(request.query_id, result):
            self.refresh_view()
