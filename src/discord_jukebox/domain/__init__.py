"""
Domain Layer

Contains pure business logic:
- shared/: Cross-cutting exceptions, messages and annotated types
- playback/: Tracks, playlist queue, state machine, retry policy and control surface model
"""

from discord_jukebox.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
