"""Screen variants owned by the navigator.

Exactly one screen is live at a time. Screens are frozen: every transition
builds a new one, so nothing from a previous query leaks into the next.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from solana_tui.models.network import Network
from solana_tui.models.views import AccountView, TransactionView
from solana_tui.utils.validation import InputKind, classify

TRANSACTION_TABS: Tuple[str, ...] = (
    "Overview",
    "Accounts",
    "Instructions",
    "Token Transfers",
    "Logs",
)

ACCOUNT_TABS: Tuple[str, ...] = (
    "Overview",
    "Token Holdings",
    "Transactions",
)


@dataclass(frozen=True)
class QueryInput:
    """Text typed by the operator, the edit cursor and the live classification."""

    text: str = ""
    kind: InputKind = InputKind.INVALID
    cursor: int = 0

    @classmethod
    def from_text(cls, text: str, cursor: Optional[int] = None) -> "QueryInput":
        """Classify ``text``; the cursor defaults to the end of the line."""
        if cursor is None:
            cursor = len(text)
        return cls(text=text, kind=classify(text), cursor=min(max(0, cursor), len(text)))

    @property
    def identifier(self) -> str:
        return self.text.strip()

    def insert(self, text: str, max_length: int) -> "QueryInput":
        """Insert ``text`` at the cursor, keeping at most ``max_length`` characters."""
        text = text[:max(0, max_length - len(self.text))]
        if not text:
            return self
        head, tail = self.text[:self.cursor], self.text[self.cursor:]
        return QueryInput.from_text(head + text + tail, self.cursor + len(text))

    def backspace(self) -> "QueryInput":
        if self.cursor == 0:
            return self
        head, tail = self.text[:self.cursor - 1], self.text[self.cursor:]
        return QueryInput.from_text(head + tail, self.cursor - 1)

    def delete(self) -> "QueryInput":
        if self.cursor >= len(self.text):
            return self
        head, tail = self.text[:self.cursor], self.text[self.cursor + 1:]
        return QueryInput.from_text(head + tail, self.cursor)

    def move_cursor(self, position: int) -> "QueryInput":
        return replace(self, cursor=min(max(0, position), len(self.text)))


@dataclass(frozen=True)
class TabState:
    """Active tab plus a remembered scroll offset for every tab."""

    active: int
    offsets: Tuple[int, ...]

    @classmethod
    def initial(cls, tab_count: int) -> "TabState":
        return cls(active=0, offsets=(0,) * tab_count)

    @property
    def tab_count(self) -> int:
        return len(self.offsets)

    @property
    def offset(self) -> int:
        return self.offsets[self.active]

    def select(self, index: int) -> "TabState":
        return replace(self, active=index % self.tab_count)

    def with_offset(self, offset: int) -> "TabState":
        offsets = list(self.offsets)
        offsets[self.active] = max(0, offset)
        return replace(self, offsets=tuple(offsets))


@dataclass(frozen=True)
class InputScreen:
    query: QueryInput
    network: Network


@dataclass(frozen=True)
class LoadingScreen:
    """A query is in flight; ``query_id`` ties the eventual result to it."""

    query_id: int
    query: QueryInput
    network: Network


@dataclass(frozen=True)
class TransactionDetailScreen:
    view: TransactionView
    tabs: TabState
    network: Network

    tab_names = TRANSACTION_TABS


@dataclass(frozen=True)
class AccountDetailScreen:
    view: AccountView
    tabs: TabState
    network: Network

    tab_names = ACCOUNT_TABS


@dataclass(frozen=True)
class ErrorScreen:
    message: str
    network: Network
    title: str = "Error"


DetailScreen = Union[TransactionDetailScreen, AccountDetailScreen]
Screen = Union[InputScreen, LoadingScreen, TransactionDetailScreen, AccountDetailScreen, ErrorScreen]
