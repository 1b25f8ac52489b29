"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the package is defined here once,
so models can simply annotate their fields::

    from discord_jukebox.domain.shared.types import NonEmptyStr, PositiveInt

    class MyModel(BaseModel):
        title: NonEmptyStr
        attempts: PositiveInt
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

DiscordSnowflake = Annotated[int, Field(gt=0, lt=2**64)]
"""Positive integer that fits a Discord snowflake (1 … 2^64-1)."""

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""


# ── Playback constraints ────────────────────────────────────────────

RetryBudget = Annotated[int, Field(ge=0, le=10)]
"""Number of delayed retries allowed for a transient failure: 0 … 10."""

DelaySeconds = Annotated[float, Field(ge=0.0, le=60.0)]
"""Delay in seconds: 0 … 60."""
