"""Data models for the Solana TUI explorer."""

from solana_tui.models.network import Network
from solana_tui.models.views import (
    AccountEntry,
    AccountKind,
    AccountView,
    InstructionView,
    LogKind,
    LogLine,
    SignatureSummary,
    TokenHolding,
    TokenTransferView,
    TransactionStatus,
    TransactionView,
)

__all__ = [
    "AccountEntry",
    "AccountKind",
    "AccountView",
    "InstructionView",
    "LogKind",
    "LogLine",
    "Network",
    "SignatureSummary",
    "TokenHolding",
    "TokenTransferView",
    "TransactionStatus",
    "TransactionView",
]
