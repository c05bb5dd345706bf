"""Utility helpers for the Solana TUI explorer."""
