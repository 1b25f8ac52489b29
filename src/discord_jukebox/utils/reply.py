"""Utility functions for formatting Discord replies and messages."""

from __future__ import annotations


def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"
