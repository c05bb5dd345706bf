"""Rendering of navigator screens into rich renderables.

``render_screen`` is a pure function of the screen and the viewport height;
it never changes navigator state.
"""

from typing import List

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from solana_tui import __version__
from solana_tui.models.network import Network
from solana_tui.models.screens import (
    AccountDetailScreen,
    ErrorScreen,
    InputScreen,
    LoadingScreen,
    QueryInput,
    Screen,
    TransactionDetailScreen,
)
from solana_tui.tui.content import detail_lines, truncate_pubkey
from solana_tui.utils.validation import InputKind

# Lines a detail screen uses outside its scrollable body:
# title bar, tab bar, two panel borders, key help
CHROME_HEIGHT = 5

INPUT_HELP = "Enter submit · ↑/↓ network · ←/→ move · Backspace delete · Ctrl+U clear · Esc quit"
LOADING_HELP = "r cancel · q quit"
DETAIL_HELP = "Tab/Shift+Tab switch tab · ↑/↓ scroll · PgUp/PgDn page · Home top · r new query · q quit"
ERROR_HELP = "r new query · q quit"


def _title_bar(network: Network) -> Text:
    title = Text(f" Solana Explorer v{__version__} ", style="bold white on blue")
    title.append("  ")
    title.append(f" {network.label} ", style="bold black on yellow")
    return title


def _help(text: str) -> Text:
    return Text(text, style="dim")


def _network_selector(selected: Network) -> Text:
    line = Text("Network:  ")
    for network in Network:
        if network is selected:
            line.append(f"[{network.label}]", style="bold reverse")
        else:
            line.append(f" {network.label} ", style="dim")
        line.append(" ")
    return line


def _kind_label(kind: InputKind) -> Text:
    if kind is InputKind.SIGNATURE:
        return Text("Transaction", style="bold green")
    if kind is InputKind.ADDRESS:
        return Text("Account", style="bold cyan")
    return Text("")


def _prompt(query: QueryInput) -> Text:
    prompt = Text("> ", style="bold")
    prompt.append(query.text[:query.cursor])
    if query.cursor < len(query.text):
        prompt.append(query.text[query.cursor], style="reverse")
        prompt.append(query.text[query.cursor + 1:])
    else:
        prompt.append("█", style="blink")
    return prompt


def render_input(screen: InputScreen) -> RenderableType:
    prompt = _prompt(screen.query)

    detected = Text("Detected: ")
    detected.append(_kind_label(screen.query.kind))

    body = Group(
        Text("Enter a transaction signature or an account address"),
        Text(""),
        prompt,
        detected,
        Text(""),
        _network_selector(screen.network),
    )
    return Group(
        _title_bar(screen.network),
        Panel(body, title="Search", border_style="blue"),
        _help(INPUT_HELP),
    )


def render_loading(screen: LoadingScreen) -> RenderableType:
    query = screen.query
    message = Text(f"Fetching {query.kind.value.lower()} ", style="bold")
    message.append(truncate_pubkey(query.identifier), style="cyan")
    message.append(f" on {screen.network.label}…")
    return Group(
        _title_bar(screen.network),
        Panel(message, title="Loading", border_style="yellow"),
        _help(LOADING_HELP),
    )


def render_error(screen: ErrorScreen) -> RenderableType:
    return Group(
        _title_bar(screen.network),
        Panel(Text(screen.message), title=screen.title, border_style="red"),
        _help(ERROR_HELP),
    )


def _tab_bar(names, active: int) -> Text:
    bar = Text()
    for index, name in enumerate(names):
        style = "bold reverse" if index == active else "dim"
        bar.append(f" {name} ", style=style)
        bar.append(" ")
    return bar


def _visible_lines(lines: List[Text], offset: int, viewport_height: int) -> List[Text]:
    visible = lines[offset:offset + viewport_height]
    for line in visible:
        line.no_wrap = True
        line.overflow = "ellipsis"
    return visible


def render_detail(screen, viewport_height: int) -> RenderableType:
    """Render a transaction or account detail screen.

    Args:
        screen: Detail screen to draw
        viewport_height: Number of body lines that fit on the terminal

    Returns:
        The rich renderable for the whole screen
    """
    viewport_height = max(1, viewport_height)
    lines = detail_lines(screen)
    # The navigator clamps offsets; this only guards a stale height
    offset = min(screen.tabs.offset, max(0, len(lines) - viewport_height))
    visible = _visible_lines(lines, offset, viewport_height)

    if isinstance(screen, TransactionDetailScreen):
        title = f"Transaction {truncate_pubkey(screen.view.signature)}"
    else:
        title = f"Account {truncate_pubkey(screen.view.address)}"

    last = offset + len(visible)
    position = f"{offset + 1}-{last} of {len(lines)}" if lines else "empty"

    return Group(
        _title_bar(screen.network),
        _tab_bar(screen.tab_names, screen.tabs.active),
        Panel(
            Group(*visible),
            title=title,
            subtitle=position,
            border_style="green",
            height=viewport_height + 2,
        ),
        _help(DETAIL_HELP),
    )


def render_screen(screen: Screen, viewport_height: int) -> RenderableType:
    """Render whichever screen is live.

    Args:
        screen: The navigator's current screen
        viewport_height: Number of body lines visible on detail screens

    Returns:
        The rich renderable for the screen
    """
    if isinstance(screen, InputScreen):
        return render_input(screen)
    if isinstance(screen, LoadingScreen):
        return render_loading(screen)
    if isinstance(screen, (TransactionDetailScreen, AccountDetailScreen)):
        return render_detail(screen, viewport_height)
    return render_error(screen)
