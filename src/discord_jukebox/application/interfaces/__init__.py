"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_jukebox.application.interfaces.audio_source import PlaylistSource, TrackSource
from discord_jukebox.application.interfaces.control_surface import ControlSurface
from discord_jukebox.application.interfaces.transport import TrackEndCallback, Transport

__all__ = [
    "TrackSource",
    "PlaylistSource",
    "Transport",
    "TrackEndCallback",
    "ControlSurface",
]
