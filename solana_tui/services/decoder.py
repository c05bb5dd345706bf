"""Decoder for raw Solana RPC payloads.

Turns the loosely typed ``getTransaction`` / account payloads into the view
models in ``solana_tui.models.views``. Decoding is all-or-nothing: either a
complete view is returned or ``DecodeError`` is raised.

Both ``jsonParsed`` and ``json`` transaction encodings are understood.
Binary encodings (``base58``/``base64``) are rejected as unsupported.
"""

import base64
import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import base58

from solana_tui.constants import (
    COMPUTE_BUDGET_PROGRAM_ID,
    LAMPORTS_PER_SIGNATURE,
    MEMO_PROGRAM_ID,
    MEMO_V1_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_IDS,
)
from solana_tui.logging_config import get_logger
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
from solana_tui.programs.registry import (
    UNKNOWN_INSTRUCTION,
    guess_instruction_type,
    normalize_parsed_type,
    resolve_program_label,
)
from solana_tui.utils.errors import DecodeError

logger = get_logger(__name__)

DEFAULT_SIGNATURE_LIMIT = 10

_LOG_PATTERNS: Tuple[Tuple[re.Pattern, LogKind], ...] = (
    (re.compile(r"^Program \S+ invoke \[\d+\]$"), LogKind.INVOKE),
    (re.compile(r"^Program \S+ success$"), LogKind.SUCCESS),
    (re.compile(r"^Program \S+ failed"), LogKind.FAILURE),
    (re.compile(r"^Program failed to complete"), LogKind.FAILURE),
    (re.compile(r"^Program log: "), LogKind.LOG),
    (re.compile(r"^Program data: "), LogKind.DATA),
    (re.compile(r"^Program return: "), LogKind.RETURN),
    (re.compile(r"^Program \S+ consumed \d+ of \d+ compute units$"), LogKind.COMPUTE),
)


class _Key(NamedTuple):
    address: str
    signer: bool
    writable: bool
    source: str


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _require_dict(value: Any, name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError.malformed(f"{name} must be an object")
    return value


def _require_list(value: Any, name: str) -> List[Any]:
    if not isinstance(value, list):
        raise DecodeError.malformed(f"missing or invalid {name}")
    return value


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError.malformed(f"{name} must be an integer")
    return value


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise DecodeError.malformed(f"{name} must be a non-empty string")
    return value


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value is None:
        return None
    return _require_int(value, name)


def _parse_amount(value: Any, name: str) -> int:
    """Token amounts arrive as decimal strings (u64 does not fit JSON numbers)."""
    if isinstance(value, str) and value.isdigit():
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise DecodeError.malformed(f"{name} is not a token amount")


def _block_time(value: Any) -> Optional[datetime]:
    seconds = _optional_int(value, "blockTime")
    if seconds is None:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise DecodeError.malformed(f"blockTime {seconds} is out of range") from e


def _decode_instruction_data(data: Any) -> Optional[bytes]:
    if not isinstance(data, str):
        return None
    try:
        return base58.b58decode(data)
    except ValueError:
        return None


def _status(err: Any) -> TransactionStatus:
    if err is None:
        return TransactionStatus.success()
    if isinstance(err, str):
        return TransactionStatus.failed(err)
    return TransactionStatus.failed(json.dumps(err))


def classify_log_line(line: str) -> LogKind:
    """Classify a single program log line."""
    for pattern, kind in _LOG_PATTERNS:
        if pattern.match(line):
            return kind
    return LogKind.OTHER


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

def _account_keys(message: Dict[str, Any], meta: Dict[str, Any]) -> List[_Key]:
    raw_keys = _require_list(message.get("accountKeys"), "message.accountKeys")
    if not raw_keys:
        raise DecodeError.malformed("transaction has no account keys")

    if all(isinstance(key, dict) for key in raw_keys):
        return [
            _Key(
                address=_require_str(key.get("pubkey"), "accountKeys[].pubkey"),
                signer=bool(key.get("signer", False)),
                writable=bool(key.get("writable", False)),
                source=key.get("source") or "transaction",
            )
            for key in raw_keys
        ]

    if not all(isinstance(key, str) and key for key in raw_keys):
        raise DecodeError.malformed("accountKeys mixes strings and objects")

    header = _require_dict(message.get("header"), "message.header")
    num_signers = _require_int(header.get("numRequiredSignatures"), "numRequiredSignatures")
    readonly_signed = _require_int(header.get("numReadonlySignedAccounts"), "numReadonlySignedAccounts")
    readonly_unsigned = _require_int(header.get("numReadonlyUnsignedAccounts"), "numReadonlyUnsignedAccounts")

    writable_signed = max(num_signers - readonly_signed, 0)
    writable_unsigned = max(len(raw_keys) - num_signers - readonly_unsigned, 0)

    keys = []
    for idx, address in enumerate(raw_keys):
        is_signer = idx < num_signers
        is_writable = idx < writable_signed or (
            num_signers <= idx < num_signers + writable_unsigned
        )
        keys.append(_Key(address, is_signer, is_writable, "transaction"))

    # v0 transactions resolve extra keys through address lookup tables
    loaded = meta.get("loadedAddresses")
    if isinstance(loaded, dict):
        for address in _require_list(loaded.get("writable", []), "loadedAddresses.writable"):
            keys.append(_Key(_require_str(address, "loadedAddresses.writable[]"), False, True, "lookupTable"))
        for address in _require_list(loaded.get("readonly", []), "loadedAddresses.readonly"):
            keys.append(_Key(_require_str(address, "loadedAddresses.readonly[]"), False, False, "lookupTable"))
    return keys


def _balances(meta: Dict[str, Any], name: str) -> List[int]:
    values = _require_list(meta.get(name), f"meta.{name}")
    return [_require_int(value, f"meta.{name}[]") for value in values]


def _account_entries(keys: Sequence[_Key], pre: Sequence[int], post: Sequence[int]) -> Tuple[AccountEntry, ...]:
    if not (len(keys) == len(pre) == len(post)):
        raise DecodeError.malformed(
            f"balance arrays do not match account keys "
            f"(keys={len(keys)}, preBalances={len(pre)}, postBalances={len(post)})"
        )
    return tuple(
        AccountEntry(
            address=key.address,
            pre_balance=before,
            post_balance=after,
            delta=after - before,
            is_signer=key.signer,
            is_writable=key.writable,
            source=key.source,
        )
        for key, before, after in zip(keys, pre, post)
    )


def _token_mints_by_account(meta: Dict[str, Any], addresses: Sequence[str]) -> Dict[str, str]:
    """Map token account address -> mint using pre/post token balances."""
    mints: Dict[str, str] = {}
    for name in ("preTokenBalances", "postTokenBalances"):
        entries = meta.get(name)
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            index = entry.get("accountIndex")
            mint = entry.get("mint")
            if isinstance(index, int) and 0 <= index < len(addresses) and isinstance(mint, str):
                mints[addresses[index]] = mint
    return mints


def _resolve_accounts(indices: Any, addresses: Sequence[str], name: str) -> Tuple[str, ...]:
    resolved = []
    for index in _require_list(indices, name):
        index = _require_int(index, f"{name}[]")
        if not 0 <= index < len(addresses):
            raise DecodeError.malformed(f"{name} index {index} out of range")
        resolved.append(addresses[index])
    return tuple(resolved)


class _DecodedInstruction(NamedTuple):
    view: InstructionView
    data: Optional[bytes]
    parsed: Optional[Any]


def _decode_instruction(
    raw: Any, index: int, addresses: Sequence[str],
    inner: Tuple[InstructionView, ...] = ()
) -> _DecodedInstruction:
    ix = _require_dict(raw, "instruction")

    if "programIdIndex" in ix:
        program_index = _require_int(ix.get("programIdIndex"), "programIdIndex")
        if not 0 <= program_index < len(addresses):
            raise DecodeError.malformed(f"programIdIndex {program_index} out of range")
        program_id = addresses[program_index]
        accounts = _resolve_accounts(ix.get("accounts", []), addresses, "instruction.accounts")
        data = _decode_instruction_data(ix.get("data", ""))
        parsed = None
        instruction_type = guess_instruction_type(program_id, data)
    else:
        program_id = _require_str(ix.get("programId"), "instruction.programId")
        if "parsed" in ix:
            parsed = ix["parsed"]
            data = None
            accounts = ()
            if isinstance(parsed, dict):
                instruction_type = normalize_parsed_type(parsed.get("type"))
            elif program_id in (MEMO_PROGRAM_ID, MEMO_V1_PROGRAM_ID):
                instruction_type = "Memo"
            else:
                instruction_type = UNKNOWN_INSTRUCTION
        else:
            # Partially decoded: programId, account addresses and base58 data
            parsed = None
            accounts = tuple(
                _require_str(account, "instruction.accounts[]")
                for account in _require_list(ix.get("accounts", []), "instruction.accounts")
            )
            data = _decode_instruction_data(ix.get("data", ""))
            instruction_type = guess_instruction_type(program_id, data)

    view = InstructionView(
        index=index,
        program_id=program_id,
        program_label=resolve_program_label(program_id),
        instruction_type=instruction_type,
        data_length=len(data) if data is not None else None,
        accounts=accounts,
        inner_instructions=inner,
    )
    return _DecodedInstruction(view, data, parsed)


def _token_transfer(
    decoded: _DecodedInstruction, mints: Mapping[str, str], inner: bool
) -> Optional[TokenTransferView]:
    view = decoded.view
    if view.program_id not in TOKEN_PROGRAM_IDS:
        return None

    parsed = decoded.parsed
    if isinstance(parsed, dict):
        kind = parsed.get("type")
        if kind not in ("transfer", "transferChecked"):
            return None
        info = _require_dict(parsed.get("info"), "parsed.info")
        source = _require_str(info.get("source"), "info.source")
        destination = _require_str(info.get("destination"), "info.destination")
        authority = info.get("authority") or info.get("multisigAuthority")
        if kind == "transferChecked":
            token_amount = _require_dict(info.get("tokenAmount"), "info.tokenAmount")
            amount = _parse_amount(token_amount.get("amount"), "tokenAmount.amount")
            decimals = _require_int(token_amount.get("decimals"), "tokenAmount.decimals")
            mint = info.get("mint") or mints.get(source) or mints.get(destination)
        else:
            amount = _parse_amount(info.get("amount"), "info.amount")
            decimals = None
            mint = mints.get(source) or mints.get(destination)
    else:
        data = decoded.data
        accounts = view.accounts
        if not data:
            return None
        if data[0] == 3 and len(data) >= 9 and len(accounts) >= 3:
            source, destination, authority = accounts[0], accounts[1], accounts[2]
            amount = int.from_bytes(data[1:9], "little")
            decimals = None
            mint = mints.get(source) or mints.get(destination)
        elif data[0] == 12 and len(data) >= 10 and len(accounts) >= 4:
            source, mint, destination, authority = accounts[0], accounts[1], accounts[2], accounts[3]
            amount = int.from_bytes(data[1:9], "little")
            decimals = data[9]
        else:
            return None

    return TokenTransferView(
        source=source,
        destination=destination,
        amount=amount,
        program_label=view.program_label,
        mint=mint if isinstance(mint, str) else None,
        authority=authority if isinstance(authority, str) else None,
        decimals=decimals,
        inner=inner,
    )


def _inner_instruction_groups(meta: Dict[str, Any]) -> Dict[int, List[Any]]:
    raw_groups = meta.get("innerInstructions")
    if raw_groups is None:
        return {}
    groups: Dict[int, List[Any]] = {}
    for group in _require_list(raw_groups, "meta.innerInstructions"):
        group = _require_dict(group, "innerInstructions[]")
        outer_index = _require_int(group.get("index"), "innerInstructions[].index")
        groups.setdefault(outer_index, []).extend(
            _require_list(group.get("instructions"), "innerInstructions[].instructions")
        )
    return groups


def _compute_budget(instructions: Sequence[_DecodedInstruction]) -> Tuple[Optional[int], Optional[int]]:
    """Return (compute unit limit, compute unit price in micro-lamports)."""
    limit = price = None
    for decoded in instructions:
        data = decoded.data
        if decoded.view.program_id != COMPUTE_BUDGET_PROGRAM_ID or not data:
            continue
        if data[0] == 2 and len(data) >= 5:
            limit = int.from_bytes(data[1:5], "little")
        elif data[0] == 3 and len(data) >= 9:
            price = int.from_bytes(data[1:9], "little")
    return limit, price


def _decode_transaction(raw: Any) -> TransactionView:
    if raw is None or raw == {}:
        raise DecodeError.empty("transaction result is empty")
    if not isinstance(raw, dict):
        raise DecodeError.malformed("transaction result must be an object")

    transaction = raw.get("transaction")
    if transaction is None:
        raise DecodeError.malformed("missing transaction")
    if isinstance(transaction, (list, str)):
        encoding = transaction[1] if isinstance(transaction, list) and len(transaction) > 1 else "binary"
        raise DecodeError.unsupported_encoding(f"transaction is {encoding}-encoded")
    transaction = _require_dict(transaction, "transaction")

    meta = raw.get("meta")
    if meta is None:
        raise DecodeError.malformed("missing transaction metadata")
    meta = _require_dict(meta, "meta")
    message = _require_dict(transaction.get("message"), "transaction.message")

    signatures = _require_list(transaction.get("signatures"), "transaction.signatures")
    if not signatures:
        raise DecodeError.malformed("transaction has no signatures")
    signature = _require_str(signatures[0], "transaction.signatures[0]")

    keys = _account_keys(message, meta)
    accounts = _account_entries(keys, _balances(meta, "preBalances"), _balances(meta, "postBalances"))
    addresses = [key.address for key in keys]
    mints = _token_mints_by_account(meta, addresses)
    inner_groups = _inner_instruction_groups(meta)

    outer: List[_DecodedInstruction] = []
    transfers: List[TokenTransferView] = []
    raw_instructions = _require_list(message.get("instructions"), "message.instructions")
    for index, raw_ix in enumerate(raw_instructions):
        inner_decoded = [
            _decode_instruction(raw_inner, inner_index, addresses)
            for inner_index, raw_inner in enumerate(inner_groups.get(index, []))
        ]
        decoded = _decode_instruction(
            raw_ix, index, addresses, inner=tuple(d.view for d in inner_decoded)
        )
        outer.append(decoded)

        transfer = _token_transfer(decoded, mints, inner=False)
        if transfer is not None:
            transfers.append(transfer)
        for inner_ix in inner_decoded:
            transfer = _token_transfer(inner_ix, mints, inner=True)
            if transfer is not None:
                transfers.append(transfer)

    fee = _require_int(meta.get("fee", 0), "meta.fee")
    compute_unit_limit, compute_unit_price = _compute_budget(outer)

    log_messages = _require_list(meta.get("logMessages") or [], "meta.logMessages")
    if not all(isinstance(line, str) for line in log_messages):
        raise DecodeError.malformed("meta.logMessages must contain strings")
    logs = tuple(LogLine(text=line, kind=classify_log_line(line)) for line in log_messages)

    version = raw.get("version")
    recent_blockhash = message.get("recentBlockhash")

    return TransactionView(
        signature=signature,
        slot=_require_int(raw.get("slot"), "slot"),
        block_time=_block_time(raw.get("blockTime")),
        status=_status(meta.get("err")),
        fee=fee,
        compute_units_consumed=_optional_int(meta.get("computeUnitsConsumed"), "computeUnitsConsumed"),
        priority_fee=max(fee - LAMPORTS_PER_SIGNATURE * len(signatures), 0),
        instructions=tuple(d.view for d in outer),
        accounts=accounts,
        token_transfers=tuple(transfers),
        logs=logs,
        version=str(version) if version is not None else None,
        recent_blockhash=recent_blockhash if isinstance(recent_blockhash, str) else None,
        compute_unit_limit=compute_unit_limit,
        compute_unit_price=compute_unit_price,
    )


def decode_transaction(raw: Any) -> TransactionView:
    """Normalize a ``getTransaction`` result.

    Args:
        raw: The JSON-decoded RPC result

    Returns:
        The complete transaction view

    Raises:
        DecodeError: If the payload is empty, malformed or binary-encoded
    """
    try:
        return _decode_transaction(raw)
    except DecodeError as e:
        logger.warning(f"Transaction decode failed: {e.message}")
        raise
    except (AttributeError, KeyError, IndexError, TypeError, ValueError, OverflowError) as e:
        logger.warning(f"Transaction decode failed: {type(e).__name__}: {e}")
        raise DecodeError.malformed(f"{type(e).__name__}: {e}") from e


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

def _data_size(account: Dict[str, Any]) -> int:
    space = account.get("space")
    if space is not None:
        return _require_int(space, "account.space")
    data = account.get("data")
    if isinstance(data, list) and data:
        encoded = data[0] or ""
        encoding = data[1] if len(data) > 1 else "base64"
        if not isinstance(encoded, str):
            raise DecodeError.malformed("account.data[0] must be a string")
        if encoding == "base64":
            return len(base64.b64decode(encoded))
        if encoding == "base58":
            return len(base58.b58decode(encoded))
        raise DecodeError.unsupported_encoding(f"account data is {encoding}-encoded")
    if isinstance(data, dict):
        parsed_space = data.get("space")
        return _require_int(parsed_space, "account.data.space") if parsed_space is not None else 0
    return 0


def _account_kind(owner: str, executable: bool, data_size: int) -> AccountKind:
    if executable:
        return AccountKind.PROGRAM_ACCOUNT
    if owner == SYSTEM_PROGRAM_ID and data_size == 0:
        return AccountKind.SYSTEM_ACCOUNT
    return AccountKind.DATA_ACCOUNT


def _token_holdings(raw_accounts: Any) -> Tuple[TokenHolding, ...]:
    holdings = []
    for entry in _require_list(raw_accounts or [], "tokenAccounts"):
        entry = _require_dict(entry, "tokenAccounts[]")
        account = _require_dict(entry.get("account"), "tokenAccounts[].account")
        data = account.get("data")
        # Only jsonParsed token accounts carry mint and amount
        if not isinstance(data, dict) or not isinstance(data.get("parsed"), dict):
            continue
        info = _require_dict(data["parsed"].get("info"), "token account info")
        token_amount = _require_dict(info.get("tokenAmount"), "info.tokenAmount")
        holdings.append(TokenHolding(
            mint=_require_str(info.get("mint"), "info.mint"),
            amount=_parse_amount(token_amount.get("amount"), "tokenAmount.amount"),
            decimals=_require_int(token_amount.get("decimals"), "tokenAmount.decimals"),
            token_account=entry.get("pubkey") if isinstance(entry.get("pubkey"), str) else None,
        ))
    return tuple(holdings)


def _recent_signatures(raw_signatures: Any, limit: int) -> Tuple[SignatureSummary, ...]:
    summaries = []
    for entry in _require_list(raw_signatures or [], "signatures"):
        entry = _require_dict(entry, "signatures[]")
        memo = entry.get("memo")
        summaries.append(SignatureSummary(
            signature=_require_str(entry.get("signature"), "signatures[].signature"),
            slot=_require_int(entry.get("slot"), "signatures[].slot"),
            block_time=_block_time(entry.get("blockTime")),
            status=_status(entry.get("err")),
            memo=memo if isinstance(memo, str) else None,
        ))
    summaries.sort(key=lambda summary: summary.slot, reverse=True)
    return tuple(summaries[:limit])


def _decode_account(raw: Any, signature_limit: int) -> AccountView:
    if raw is None or raw == {}:
        raise DecodeError.empty("account result is empty")
    if not isinstance(raw, dict):
        raise DecodeError.malformed("account result must be an object")

    account = raw.get("account")
    if account is None:
        raise DecodeError.empty("account does not exist")
    account = _require_dict(account, "account")

    address = _require_str(raw.get("address"), "address")
    owner = _require_str(account.get("owner"), "account.owner")
    executable = bool(account.get("executable", False))
    data_size = _data_size(account)

    return AccountView(
        address=address,
        lamports=_require_int(account.get("lamports"), "account.lamports"),
        kind=_account_kind(owner, executable, data_size),
        owner=owner,
        owner_label=resolve_program_label(owner),
        executable=executable,
        data_size=data_size,
        rent_epoch=_optional_int(account.get("rentEpoch"), "account.rentEpoch"),
        token_holdings=_token_holdings(raw.get("tokenAccounts")),
        recent_signatures=_recent_signatures(raw.get("signatures"), signature_limit),
    )


def decode_account(raw: Any, signature_limit: int = DEFAULT_SIGNATURE_LIMIT) -> AccountView:
    """Normalize an assembled account payload.

    Args:
        raw: Mapping with ``address``, ``account``, ``tokenAccounts`` and
            ``signatures`` as produced by the fetcher
        signature_limit: Maximum number of recent signatures kept

    Returns:
        The complete account view

    Raises:
        DecodeError: If the payload is empty or malformed
    """
    try:
        return _decode_account(raw, signature_limit)
    except DecodeError as e:
        logger.warning(f"Account decode failed: {e.message}")
        raise
    except (AttributeError, KeyError, IndexError, TypeError, ValueError, OverflowError) as e:
        logger.warning(f"Account decode failed: {type(e).__name__}: {e}")
        raise DecodeError.malformed(f"{type(e).__name__}: {e}") from e
