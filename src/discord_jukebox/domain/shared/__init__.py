"""
Shared Domain Kernel

Contains exceptions and message constants shared across the whole package.
"""

from discord_jukebox.domain.shared.exceptions import (
    DomainError,
    EmptyPlaylist,
    InvalidCommandState,
    InvalidOperationError,
    RetriesExhaustedError,
    SourceError,
    SourceNotFound,
    SourceRateLimited,
    SourceUnavailable,
    SurfaceRenderFailure,
    TransportError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "InvalidOperationError",
    "InvalidCommandState",
    "EmptyPlaylist",
    "SourceError",
    "SourceUnavailable",
    "SourceNotFound",
    "SourceRateLimited",
    "RetriesExhaustedError",
    "SurfaceRenderFailure",
    "TransportError",
]
