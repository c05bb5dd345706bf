"""Fetching and decoding services."""
