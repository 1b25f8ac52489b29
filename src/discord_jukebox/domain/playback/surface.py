"""Control surface model and its renderer.

``build_control_surface`` is a pure function of the playback state, the
playlist queue, the loop target and the last recorded action. Adapters only
ever receive its output.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.playback.entities import PlaybackState, Track
from discord_jukebox.domain.playback.queue import PlaylistQueue
from discord_jukebox.domain.playback.value_objects import ActionKind, PlaybackStatus
from discord_jukebox.domain.shared.messages import DiscordUIMessages

_ACCEPTED_DESCRIPTIONS: dict[ActionKind, str] = {
    ActionKind.PLAY: DiscordUIMessages.ACTION_PLAY,
    ActionKind.LOOP: DiscordUIMessages.ACTION_LOOP,
    ActionKind.PLAYLIST: DiscordUIMessages.ACTION_PLAYLIST,
    ActionKind.SKIP: DiscordUIMessages.ACTION_SKIP,
    ActionKind.PAUSE: DiscordUIMessages.ACTION_PAUSE,
    ActionKind.RESUME: DiscordUIMessages.ACTION_RESUME,
    ActionKind.STOP: DiscordUIMessages.ACTION_STOP,
    ActionKind.SHUFFLE: DiscordUIMessages.ACTION_SHUFFLE,
}

_DECLINED_DESCRIPTIONS: dict[ActionKind, str] = {
    ActionKind.SKIP: DiscordUIMessages.ACTION_SKIP_DECLINED,
    ActionKind.PAUSE: DiscordUIMessages.ACTION_PAUSE_DECLINED,
    ActionKind.RESUME: DiscordUIMessages.ACTION_RESUME_DECLINED,
    ActionKind.SHUFFLE: DiscordUIMessages.ACTION_SHUFFLE_DECLINED,
}


class LastAction(BaseModel):
    """The most recent user action and whether it was carried out."""

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    accepted: bool
    actor_name: str

    @property
    def description(self) -> str:
        if self.accepted:
            return _ACCEPTED_DESCRIPTIONS[self.kind]
        return _DECLINED_DESCRIPTIONS.get(
            self.kind,
            DiscordUIMessages.ACTION_DECLINED.format(action=self.kind.value.capitalize()),
        )


class ControlSurfaceModel(BaseModel):
    """Everything the control surface displays, derived entirely from state."""

    model_config = ConfigDict(frozen=True)

    header_text: str
    body_text: str = ""
    last_action: LastAction | None = None

    @property
    def content(self) -> str:
        content = "\n\n".join(part for part in (self.header_text, self.body_text) if part)
        if self.last_action is not None and self.last_action.actor_name:
            content += "\n\n" + DiscordUIMessages.SURFACE_LAST_ACTION.format(
                description=self.last_action.description,
                actor=self.last_action.actor_name,
            )
        return content


def build_control_surface(
    state: PlaybackState,
    queue: PlaylistQueue,
    loop_target: Track | None,
    last_action: LastAction | None,
    skipped: Track | None = None,
) -> ControlSurfaceModel:
    """Render the panel for the current session.

    ``skipped`` is set only for the render announcing that an unavailable
    playlist item is being passed over.
    """
    if queue.is_loaded:
        header = DiscordUIMessages.SURFACE_PLAYLIST_HEADER.format(title=queue.title)
        body = _playlist_body(state, queue, skipped)
    elif loop_target is not None or state.track is not None:
        header = _single_track_header(state, loop_target)
        body = ""
    else:
        header = DiscordUIMessages.SURFACE_STOPPED_HEADER
        body = ""

    return ControlSurfaceModel(header_text=header, body_text=body, last_action=last_action)


def _position_line(position: int, total: int) -> str:
    return DiscordUIMessages.SURFACE_POSITION.format(position=position, total=total)


def _playlist_body(state: PlaybackState, queue: PlaylistQueue, skipped: Track | None) -> str:
    total = len(queue)

    if skipped is not None:
        return "\n".join(
            [
                DiscordUIMessages.SURFACE_SKIPPING.format(title=skipped.display_title),
                _position_line(queue.position, total),
            ]
        )

    track = state.track
    if track is not None:
        if state.status is PlaybackStatus.PAUSED:
            line = DiscordUIMessages.SURFACE_PAUSED
        elif state.status is PlaybackStatus.BUFFERING:
            line = DiscordUIMessages.SURFACE_LOADING
        else:
            line = DiscordUIMessages.SURFACE_NOW_PLAYING
        return "\n".join(
            [
                line.format(title=track.display_title),
                _position_line(queue.position, total),
                DiscordUIMessages.SURFACE_URL.format(url=track.source_url),
            ]
        )

    if queue.is_exhausted:
        return DiscordUIMessages.SURFACE_FINISHED

    if queue.position == 0:
        return "\n".join([DiscordUIMessages.SURFACE_LOADING_FIRST, _position_line(1, total)])

    current = queue.peek_current()
    return "\n".join(
        [
            DiscordUIMessages.SURFACE_LOADING.format(title=current.display_title),
            _position_line(queue.position, total),
        ]
    )


def _single_track_header(state: PlaybackState, loop_target: Track | None) -> str:
    track = state.track or loop_target

    if state.status is PlaybackStatus.PAUSED:
        header = DiscordUIMessages.SURFACE_SINGLE_PAUSED_HEADER
    elif loop_target is not None:
        header = DiscordUIMessages.SURFACE_LOOP_HEADER
    elif state.status is PlaybackStatus.BUFFERING:
        header = DiscordUIMessages.SURFACE_LOADING_HEADER
    else:
        header = DiscordUIMessages.SURFACE_SINGLE_HEADER

    return header + "\n" + DiscordUIMessages.SURFACE_URL.format(url=track.source_url)
