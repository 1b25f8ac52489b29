"""Base class for interactive Discord views with common patterns."""

from __future__ import annotations

import discord


class BaseInteractiveView(discord.ui.View):
    """Base view that remembers the message it is attached to."""

    def __init__(self, *, timeout: float | None = 180.0) -> None:
        super().__init__(timeout=timeout)
        self._message: discord.Message | None = None

    @property
    def message(self) -> discord.Message | None:
        return self._message

    def set_message(self, message: discord.Message) -> None:
        self._message = message
