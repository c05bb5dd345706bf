"""Line builders for the scrollable body of detail tabs.

The navigator uses these to know how long a tab's content is (for scroll
clamping); the renderer slices the same lines into the viewport.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Union

from rich.text import Text

from solana_tui.constants import LAMPORTS_PER_SOL
from solana_tui.models.screens import AccountDetailScreen, TransactionDetailScreen
from solana_tui.models.views import (
    AccountEntry,
    AccountView,
    InstructionView,
    LogKind,
    TokenTransferView,
    TransactionView,
)

LOG_STYLES: Dict[LogKind, str] = {
    LogKind.INVOKE: "cyan",
    LogKind.SUCCESS: "green",
    LogKind.FAILURE: "bold red",
    LogKind.LOG: "white",
    LogKind.DATA: "magenta",
    LogKind.RETURN: "magenta",
    LogKind.COMPUTE: "dim",
    LogKind.OTHER: "yellow",
}


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_sol(lamports: int) -> str:
    """Format lamports as SOL with full precision, e.g. ``0.000005000 SOL``."""
    sol = Decimal(lamports) / Decimal(LAMPORTS_PER_SOL)
    return f"{sol:.9f} SOL"


def format_delta(delta: int) -> str:
    """Format a signed lamport balance change."""
    if delta == 0:
        return format_sol(0)
    sign = "+" if delta > 0 else "-"
    return f"{sign}{format_sol(abs(delta))}"


def truncate_pubkey(value: str, keep: int = 8) -> str:
    """Shorten a base58 identifier to its first and last ``keep`` characters."""
    if len(value) <= keep * 2 + 1:
        return value
    return f"{value[:keep]}…{value[-keep:]}"


def format_block_time(value: Optional[datetime]) -> str:
    if value is None:
        return "unknown"
    return value.strftime("%Y-%m-%d %H:%M:%S UTC")


def format_amount(value: Decimal) -> str:
    """Format a token amount without trailing zeros."""
    return format(value.normalize(), "f")


def format_optional(value: Optional[int], suffix: str = "") -> str:
    if value is None:
        return "n/a"
    return f"{value:,}{suffix}"


def _field(label: str, value: Union[str, Text], width: int = 22) -> Text:
    line = Text()
    line.append(f"{label}:".ljust(width), style="bold")
    line.append(value if isinstance(value, Text) else Text(value))
    return line


def _placeholder(message: str) -> List[Text]:
    return [Text(message, style="dim italic")]


# ---------------------------------------------------------------------------
# Transaction tabs
# ---------------------------------------------------------------------------

def _status_text(view: TransactionView) -> Text:
    if view.status.succeeded:
        return Text("Success", style="bold green")
    return Text(f"Failed: {view.status.error}", style="bold red")


def transaction_overview_lines(view: TransactionView) -> List[Text]:
    price = view.compute_unit_price
    return [
        _field("Signature", view.signature),
        _field("Status", _status_text(view)),
        _field("Slot", f"{view.slot:,}"),
        _field("Block Time", format_block_time(view.block_time)),
        _field("Version", view.version or "n/a"),
        _field("Recent Blockhash", view.recent_blockhash or "n/a"),
        _field("Fee", format_sol(view.fee)),
        _field("Priority Fee", format_sol(view.priority_fee)),
        _field("Compute Units", format_optional(view.compute_units_consumed)),
        _field("Compute Unit Limit", format_optional(view.compute_unit_limit)),
        _field("Compute Unit Price", format_optional(price, " micro-lamports")),
        _field("Signers", str(view.signer_count)),
        _field("Accounts", str(len(view.accounts))),
        _field(
            "Instructions",
            f"{len(view.instructions)} ({view.inner_instruction_count} inner)",
        ),
        _field("Token Transfers", str(len(view.token_transfers))),
    ]


def _account_line(index: int, entry: AccountEntry) -> Text:
    flags = ("S" if entry.is_signer else "-") + ("W" if entry.is_writable else "-")
    line = Text(f"{index:>3}  ")
    line.append(flags, style="bold cyan")
    line.append(f"  {entry.address:<44}  ")
    line.append(f"{format_sol(entry.pre_balance)} -> {format_sol(entry.post_balance)}  ")
    delta_style = "green" if entry.delta > 0 else "red" if entry.delta < 0 else "dim"
    line.append(f"({format_delta(entry.delta)})", style=delta_style)
    if entry.source != "transaction":
        line.append(f"  [{entry.source}]", style="dim")
    return line


def transaction_account_lines(view: TransactionView) -> List[Text]:
    if not view.accounts:
        return _placeholder("No accounts")
    return [_account_line(i, entry) for i, entry in enumerate(view.accounts)]


def _instruction_line(ix: InstructionView, prefix: str, indent: int) -> Text:
    line = Text(" " * indent + f"{prefix} ")
    style = "bold" if ix.is_known_program else "yellow"
    line.append(ix.program_label, style=style)
    line.append(f" · {ix.instruction_type}")
    if ix.data_length is not None:
        line.append(f"  ({ix.data_length} bytes)", style="dim")
    return line


def transaction_instruction_lines(view: TransactionView) -> List[Text]:
    if not view.instructions:
        return _placeholder("No instructions")
    lines = []
    for ix in view.instructions:
        lines.append(_instruction_line(ix, f"#{ix.index + 1}", 0))
        lines.append(Text(f"     program: {ix.program_id}", style="dim"))
        for inner in ix.inner_instructions:
            lines.append(_instruction_line(inner, f"↳ {ix.index + 1}.{inner.index + 1}", 5))
    return lines


def _transfer_line(index: int, transfer: TokenTransferView) -> Text:
    line = Text(f"{index:>3}  ")
    line.append(format_amount(transfer.ui_amount), style="bold")
    if not transfer.decimals_adjusted:
        line.append(" (raw)", style="yellow")
    mint = truncate_pubkey(transfer.mint) if transfer.mint else "unknown mint"
    line.append(f"  {mint}  ", style="cyan")
    line.append(f"{truncate_pubkey(transfer.source)} -> {truncate_pubkey(transfer.destination)}")
    line.append(f"  [{transfer.program_label}]", style="dim")
    if transfer.inner:
        line.append(" inner", style="dim")
    return line


def transaction_transfer_lines(view: TransactionView) -> List[Text]:
    if not view.token_transfers:
        return _placeholder("No token transfers")
    return [_transfer_line(i + 1, transfer) for i, transfer in enumerate(view.token_transfers)]


def transaction_log_lines(view: TransactionView) -> List[Text]:
    if not view.logs:
        return _placeholder("No log messages")
    return [Text(log.text, style=LOG_STYLES[log.kind]) for log in view.logs]


TRANSACTION_TAB_BUILDERS: List[Callable[[TransactionView], List[Text]]] = [
    transaction_overview_lines,
    transaction_account_lines,
    transaction_instruction_lines,
    transaction_transfer_lines,
    transaction_log_lines,
]


# ---------------------------------------------------------------------------
# Account tabs
# ---------------------------------------------------------------------------

def account_overview_lines(view: AccountView) -> List[Text]:
    return [
        _field("Address", view.address),
        _field("Type", view.kind.value),
        _field("Balance", format_sol(view.lamports)),
        _field("Owner", f"{view.owner_label} ({view.owner})"),
        _field("Executable", "yes" if view.executable else "no"),
        _field("Data Size", f"{view.data_size:,} bytes"),
        _field("Rent Epoch", format_optional(view.rent_epoch)),
        _field("Token Accounts", str(len(view.token_holdings))),
    ]


def account_holding_lines(view: AccountView) -> List[Text]:
    if not view.token_holdings:
        return _placeholder("No token accounts")
    lines = []
    for holding in view.token_holdings:
        line = Text(f"{holding.mint:<44}  ", style="cyan")
        line.append(format_amount(holding.ui_amount), style="bold")
        line.append(f"  ({holding.decimals} decimals)", style="dim")
        lines.append(line)
    return lines


def account_signature_lines(view: AccountView) -> List[Text]:
    if not view.recent_signatures:
        return _placeholder("No recent transactions")
    lines = []
    for summary in view.recent_signatures:
        line = Text(f"{truncate_pubkey(summary.signature, 12)}  ")
        line.append(f"slot {summary.slot:,}  ")
        line.append(format_block_time(summary.block_time), style="dim")
        if summary.status.succeeded:
            line.append("  ok", style="green")
        else:
            line.append("  failed", style="red")
        if summary.memo:
            line.append(f"  {summary.memo}", style="italic")
        lines.append(line)
    return lines


ACCOUNT_TAB_BUILDERS: List[Callable[[AccountView], List[Text]]] = [
    account_overview_lines,
    account_holding_lines,
    account_signature_lines,
]


def detail_lines(screen: Union[TransactionDetailScreen, AccountDetailScreen]) -> List[Text]:
    """Build the body lines of the active tab of a detail screen."""
    if isinstance(screen, TransactionDetailScreen):
        return TRANSACTION_TAB_BUILDERS[screen.tabs.active](screen.view)
    return ACCOUNT_TAB_BUILDERS[screen.tabs.active](screen.view)


def content_length(screen: Union[TransactionDetailScreen, AccountDetailScreen]) -> int:
    return len(detail_lines(screen))
