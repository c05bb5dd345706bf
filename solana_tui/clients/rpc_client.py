"""Async Solana JSON-RPC client.

This module provides the RPC collaborator used by the fetcher. Responses
are returned as decoded JSON structures; nothing here interprets them.
"""

# Standard library imports
import json
from typing import Any, Dict, List, Optional

# Third-party library imports
import httpx

# Internal imports
from solana_tui.constants import TOKEN_PROGRAM_ID
from solana_tui.logging_config import get_logger
from solana_tui.utils.errors import RpcTimeoutError, SolanaRpcError, TransportError

# Get logger
logger = get_logger(__name__)


class SolanaRpcClient:
    """Client for one Solana RPC endpoint.

    Every call is a single attempt; failures surface as ``TransportError``
    subclasses and are never retried.
    """

    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize the client.

        Args:
            rpc_url: Endpoint URL of the cluster
            commitment: Commitment level sent with every request
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None
        self._request_id = 0

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            )
        return self._http_client

    async def _make_request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a JSON-RPC request to the Solana node.

        Args:
            method: The RPC method to call
            params: The parameters to pass to the method

        Returns:
            The ``result`` member of the JSON-RPC response

        Raises:
            SolanaRpcError: If the RPC server returns an error
            RpcTimeoutError: If the request times out
            TransportError: If there's an HTTP, network or parse error
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or []
        }
        logger.debug(f"RPC {method} -> {self.rpc_url}")

        try:
            response = await self._client().post(self.rpc_url, headers=self.headers, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as e:
            raise RpcTimeoutError(
                f"{method} timed out after {self.timeout}s", timeout=self.timeout
            ) from e
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"HTTP {e.response.status_code} from {self.rpc_url}",
                details={"method": method, "status_code": e.response.status_code}
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"Could not reach {self.rpc_url}: {str(e) or type(e).__name__}",
                details={"method": method}
            ) from e
        except json.JSONDecodeError as e:
            raise TransportError(
                f"Invalid JSON in {method} response",
                details={"method": method}
            ) from e

        if not isinstance(body, dict):
            raise TransportError(f"Unexpected {method} response shape", details={"method": method})

        if body.get("error") is not None:
            error = body["error"]
            if isinstance(error, dict):
                message = f"Solana RPC error: {error.get('message', 'Unknown error')}"
                if "data" in error:
                    message += f" - {json.dumps(error['data'])}"
            else:
                message = f"Solana RPC error: {error}"
                error = {"message": str(error)}
            raise SolanaRpcError(message, error)

        return body.get("result")

    async def get_transaction(self, signature: str) -> Optional[Dict[str, Any]]:
        """Get a confirmed transaction.

        Args:
            signature: Base58 transaction signature

        Returns:
            The transaction with status meta, or None if it is unknown
        """
        return await self._make_request(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": self.commitment,
                },
            ]
        )

    async def get_account_info(self, address: str) -> Optional[Dict[str, Any]]:
        """Get account information.

        Args:
            address: The account public key

        Returns:
            The account, or None if it does not exist
        """
        result = await self._make_request(
            "getAccountInfo",
            [address, {"encoding": "jsonParsed", "commitment": self.commitment}]
        )
        if isinstance(result, dict) and "value" in result:
            return result["value"]
        return result

    async def get_signatures_for_address(self, address: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Get recent signatures involving an address, newest first.

        Args:
            address: The account public key
            limit: Maximum number of signatures

        Returns:
            List of signature records
        """
        result = await self._make_request(
            "getSignaturesForAddress",
            [address, {"limit": limit, "commitment": self.commitment}]
        )
        return result or []

    async def get_token_accounts_by_owner(
        self,
        owner: str,
        program_id: str = TOKEN_PROGRAM_ID
    ) -> List[Dict[str, Any]]:
        """Get token accounts owned by an address.

        Args:
            owner: The owner public key
            program_id: Token program to filter by

        Returns:
            List of keyed token accounts
        """
        result = await self._make_request(
            "getTokenAccountsByOwner",
            [
                owner,
                {"programId": program_id},
                {"encoding": "jsonParsed", "commitment": self.commitment},
            ]
        )
        if isinstance(result, dict):
            return result.get("value") or []
        return result or []

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
