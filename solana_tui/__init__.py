"""Solana TUI Explorer.

Terminal explorer for Solana transactions and accounts across Mainnet,
Devnet and Testnet.
"""

__version__ = "0.1.0"
__author__ = "Solana TUI Contributors"
__email__ = "maintainers@solana-tui.dev"
