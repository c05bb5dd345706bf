"""Fetcher service for the Solana TUI explorer.

The fetcher wraps the RPC client. One submitted query produces one fetch,
whose outcome is a tagged ``FetchResult`` rather than an exception.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from solana_tui.clients.rpc_client import SolanaRpcClient
from solana_tui.config import SolanaConfig, get_solana_config
from solana_tui.logging_config import get_logger, log_with_context
from solana_tui.models.network import Network
from solana_tui.utils.errors import RpcTimeoutError, TransportError, ValidationError
from solana_tui.utils.validation import InputKind

logger = get_logger(__name__)


@dataclass(frozen=True)
class TxFound:
    raw: Dict[str, Any]


@dataclass(frozen=True)
class AccountFound:
    """Account payload assembled from the account, token and signature calls."""

    raw: Dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    kind: InputKind
    identifier: str
    network: Network


@dataclass(frozen=True)
class TransportFailure:
    detail: str
    timed_out: bool = False


FetchResult = Union[TxFound, AccountFound, NotFound, TransportFailure]

ClientFactory = Callable[[Network], SolanaRpcClient]


class Fetcher:
    """Issues the RPC calls for one query against a frozen network."""

    def __init__(
        self,
        config: Optional[SolanaConfig] = None,
        client_factory: Optional[ClientFactory] = None
    ):
        """Initialize the fetcher.

        Args:
            config: Solana configuration. Defaults to environment-based config.
            client_factory: Builds the RPC client for a network
        """
        self.config = config or get_solana_config()
        self.client_factory = client_factory or self._default_client

    def _default_client(self, network: Network) -> SolanaRpcClient:
        return SolanaRpcClient(
            self.config.rpc_url(network),
            commitment=self.config.commitment,
            timeout=self.config.timeout
        )

    async def fetch(self, kind: InputKind, text: str, network: Network) -> FetchResult:
        """Fetch a transaction or account.

        Args:
            kind: Classification of ``text``
            text: Signature or address
            network: Cluster captured when the query was submitted

        Returns:
            The tagged fetch outcome

        Raises:
            ValidationError: If ``kind`` is INVALID
        """
        if not kind.submittable:
            raise ValidationError(f"Cannot fetch invalid input: {text!r}", details={"input": text})

        identifier = text.strip()
        log_with_context(logger, "info", "Fetching", kind=kind.value, network=network.value,
                         identifier=identifier)

        try:
            return await asyncio.wait_for(
                self._fetch(kind, identifier, network),
                timeout=self.config.timeout
            )
        except (asyncio.TimeoutError, RpcTimeoutError):
            logger.warning(f"Fetch of {identifier} on {network.label} timed out")
            return TransportFailure(
                f"Request timed out after {self.config.timeout}s",
                timed_out=True
            )
        except TransportError as e:
            log_with_context(logger, "warning", f"Fetch of {identifier} on {network.label} failed",
                             error=e.to_dict())
            return TransportFailure(e.message)

    async def _fetch(self, kind: InputKind, identifier: str, network: Network) -> FetchResult:
        async with self.client_factory(network) as client:
            if kind is InputKind.SIGNATURE:
                return await self._fetch_transaction(client, identifier, network)
            return await self._fetch_account(client, identifier, network)

    async def _fetch_transaction(
        self, client: SolanaRpcClient, signature: str, network: Network
    ) -> FetchResult:
        raw = await client.get_transaction(signature)
        if raw is None:
            return NotFound(InputKind.SIGNATURE, signature, network)
        return TxFound(raw)

    async def _fetch_account(
        self, client: SolanaRpcClient, address: str, network: Network
    ) -> FetchResult:
        account = await client.get_account_info(address)
        if account is None:
            return NotFound(InputKind.ADDRESS, address, network)

        token_accounts = await client.get_token_accounts_by_owner(address)
        signatures = await client.get_signatures_for_address(address, limit=self.config.signature_limit)

        return AccountFound({
            "address": address,
            "account": account,
            "tokenAccounts": token_accounts,
            "signatures": signatures,
        })
