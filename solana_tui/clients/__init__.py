"""RPC clients for the Solana TUI explorer."""
