"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    solana_config,
    mock_rpc_client,
    fetcher,
    navigator,
    transfer_transaction,
    token_transaction,
    compiled_transaction,
    account_payload,
)
