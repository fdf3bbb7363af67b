"""Shared value encodings."""
