"""View models produced by the decoder.

All models are immutable so a decoded view can be shared between the
navigator and the renderer without either side changing it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class TransactionStatus:
    """Outcome of a transaction; ``error`` is set only when it failed."""

    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> "TransactionStatus":
        return cls()

    @classmethod
    def failed(cls, message: str) -> "TransactionStatus":
        return cls(error=message)


class LogKind(str, Enum):
    """Classification of a program log line."""

    INVOKE = "invoke"
    SUCCESS = "success"
    FAILURE = "failure"
    LOG = "log"
    DATA = "data"
    RETURN = "return"
    COMPUTE = "compute"
    OTHER = "other"


@dataclass(frozen=True)
class LogLine:
    """One raw log line and its classification."""

    text: str
    kind: LogKind


@dataclass(frozen=True)
class InstructionView:
    """A single (outer or inner) instruction."""

    index: int
    program_id: str
    program_label: str
    instruction_type: str
    data_length: Optional[int] = None  # None for jsonParsed instructions
    accounts: Tuple[str, ...] = ()
    inner_instructions: Tuple["InstructionView", ...] = ()

    @property
    def is_known_program(self) -> bool:
        return self.program_label != "Unknown"


@dataclass(frozen=True)
class AccountEntry:
    """An account referenced by a transaction with its SOL balance change."""

    address: str
    pre_balance: int
    post_balance: int
    delta: int
    is_signer: bool
    is_writable: bool
    source: str = "transaction"


@dataclass(frozen=True)
class TokenTransferView:
    """A Token / Token-2022 transfer found in the instruction stream."""

    source: str
    destination: str
    amount: int
    program_label: str
    mint: Optional[str] = None
    authority: Optional[str] = None
    decimals: Optional[int] = None
    inner: bool = False

    @property
    def decimals_adjusted(self) -> bool:
        """Whether ``ui_amount`` reflects the mint decimals."""
        return self.decimals is not None

    @property
    def ui_amount(self) -> Decimal:
        """Amount scaled by decimals, or the raw integer when unknown."""
        if self.decimals is None:
            return Decimal(self.amount)
        return Decimal(self.amount).scaleb(-self.decimals)


@dataclass(frozen=True)
class TransactionView:
    """Normalized view of a confirmed transaction."""

    signature: str
    slot: int
    block_time: Optional[datetime]
    status: TransactionStatus
    fee: int
    compute_units_consumed: Optional[int]
    priority_fee: int
    instructions: Tuple[InstructionView, ...] = ()
    accounts: Tuple[AccountEntry, ...] = ()
    token_transfers: Tuple[TokenTransferView, ...] = ()
    logs: Tuple[LogLine, ...] = ()
    version: Optional[str] = None
    recent_blockhash: Optional[str] = None
    compute_unit_limit: Optional[int] = None
    compute_unit_price: Optional[int] = None  # micro-lamports per compute unit

    @property
    def signer_count(self) -> int:
        return sum(1 for account in self.accounts if account.is_signer)

    @property
    def inner_instruction_count(self) -> int:
        return sum(len(ix.inner_instructions) for ix in self.instructions)


class AccountKind(str, Enum):
    """Broad category of an account."""

    SYSTEM_ACCOUNT = "System Account"
    PROGRAM_ACCOUNT = "Program Account"
    DATA_ACCOUNT = "Data Account"


@dataclass(frozen=True)
class TokenHolding:
    """A token account owned by the inspected address."""

    mint: str
    amount: int
    decimals: int
    token_account: Optional[str] = None

    @property
    def ui_amount(self) -> Decimal:
        return Decimal(self.amount).scaleb(-self.decimals)


@dataclass(frozen=True)
class SignatureSummary:
    """Entry of an address' signature history."""

    signature: str
    slot: int
    block_time: Optional[datetime] = None
    status: TransactionStatus = field(default_factory=TransactionStatus.success)
    memo: Optional[str] = None


@dataclass(frozen=True)
class AccountView:
    """Normalized view of an account.

    ``owner`` is the owning program; for ``DATA_ACCOUNT`` it identifies the
    program that interprets the data.
    """

    address: str
    lamports: int
    kind: AccountKind
    owner: str
    owner_label: str
    executable: bool = False
    data_size: int = 0
    rent_epoch: Optional[int] = None
    token_holdings: Tuple[TokenHolding, ...] = ()
    recent_signatures: Tuple[SignatureSummary, ...] = ()
