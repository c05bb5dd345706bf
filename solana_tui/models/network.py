"""Solana cluster selection."""

from enum import Enum


class Network(str, Enum):
    """Cluster a query is sent to.

    Members are declared in cycling order.
    """

    MAINNET = "mainnet"
    DEVNET = "devnet"
    TESTNET = "testnet"

    @property
    def label(self) -> str:
        """Human readable cluster name."""
        return self.value.capitalize()

    def next(self) -> "Network":
        members = list(Network)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> "Network":
        members = list(Network)
        return members[(members.index(self) - 1) % len(members)]
