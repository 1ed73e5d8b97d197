"""Parsing helpers for transaction files and exchange-rate sources."""
