"""Centralized message constants for error messages, log templates, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"

    # Discord Validation Errors
    INVALID_SNOWFLAKE = "Invalid Discord snowflake ID: {value}"

    # Queue Validation Errors
    INVALID_QUEUE_CURSOR = "Queue cursor must be within 0..{length}"

    # Settings Validation Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Authentication/Bootstrap Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Playback State
    STATE_TRANSITION = "Playback state %s -> %s"
    STATE_TRANSITION_REJECTED = "Rejected '%s' while %s"

    # Orchestrator
    COMMAND_RECEIVED = "Command %s from %s"
    COMMAND_DECLINED = "Declined %s from %s: %s"
    TRACK_STARTED = "Started playing: %s"
    TRACK_FAILED = "Failed to play %s: %s"
    TRACK_SKIPPED_UNAVAILABLE = "Skipping unavailable track %s (%s/%s)"
    TRACK_ENDED = "Track ended (playback id %s)"
    TRACK_END_IGNORED = "Ignoring track end for playback id %s (current %s, state %s)"
    STALE_FETCH_DISCARDED = "Discarding stale fetch for %s (generation %s, current %s)"
    ADVANCE_ALREADY_IN_FLIGHT = "Advance already in flight for generation %s"
    LOOP_REPLAY = "Replaying loop target %s"
    LOOP_DROPPED = "Loop target %s could not be replayed, leaving loop"
    QUEUE_EXHAUSTED = "Playlist '%s' finished"
    PLAYBACK_STOPPED = "Playback stopped"

    # Playlist Queue
    PLAYLIST_LOADING = "Attempting to load playlist: %s"
    PLAYLIST_LOADED = "Loaded playlist: %s with %s entries"
    PLAYLIST_FILTERED = "Filtered to %s playable tracks"
    PLAYLIST_LOAD_FAILED = "Error loading playlist %s: %s"
    QUEUE_SHUFFLED = "Shuffled %s remaining tracks"

    # Retry
    RETRY_SCHEDULED = "Transient failure for %s, retrying in %.1f seconds (%s/%s)"
    RETRY_GIVING_UP = "Giving up on %s after %s attempts (%s)"

    # Control Surface
    SURFACE_CREATED = "Created control surface in channel %s"
    SURFACE_RENDER_FAILED = "Failed to update control message: %s"
    SURFACE_MISSING = "No control surface to update"

    # Voice / Transport
    VOICE_CONNECTED = "Connected to voice channel %s"
    VOICE_READY = "The connection has entered the ready state - ready to play audio!"
    VOICE_MOVED = "Moved to voice channel %s"
    VOICE_DISCONNECTED = "Disconnected from voice"
    VOICE_NOT_CONNECTED = "Not connected to voice"
    VOICE_CONNECTION_TIMEOUT = "Voice connection timeout for channel %s"
    VOICE_CLIENT_ERROR = "Discord client error: %s"
    VOICE_NO_PERMISSION = "No permission to join channel %s"
    VOICE_SELF_DEAFEN_FAILED = "Failed to self-deafen in guild %s: %s"
    CHANNEL_NOT_VOICE = "Channel %s is not a voice channel"
    PLAYBACK_STARTED = "Transport playing %s (playback id %s)"
    PLAYBACK_PAUSED = "Paused playback"
    PLAYBACK_RESUMED = "Resumed playback"
    PLAYBACK_ERROR = "AudioPlayerError (playback id %s): %s"
    PLAYBACK_CALLBACK_ERROR = "Error in track end callback (playback id %s): %s"
    PLAYBACK_NO_CALLBACK = "No track end callback registered (playback id %s)"

    # yt-dlp
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s: %s"
    YTDLP_FAILED_EXTRACT_PLAYLIST = "Failed to extract playlist from %s: %s"
    YTDLP_NO_STREAM_URL = "No stream URL found for %s"
    YTDLP_POT_CONFIGURED = "bgutil-ytdlp-pot-provider configured (server=%s)"

    # Bot Lifecycle
    BOT_STARTING = "Starting Discord Jukebox in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %s seconds"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_READY = "Logged in as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"
    BOT_SYNC_ON_STARTUP_FAILED = "Failed to sync commands on startup: %s"
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"


class DiscordUIMessages:
    """User-facing strings rendered in Discord messages, replies, and buttons."""

    # Command replies
    PONG = "Pong!"
    PLAY_STARTED = "🎵 Started playing!"
    LOOP_STARTED = "🔁 Started looping!"
    PLAY_FAILED = "❌ Failed to play this video. It might be unavailable or restricted."
    PLAY_SUPERSEDED = "⏭️ Another command replaced this request."
    COMMAND_FAILED = "An error occurred while processing your request."
    ERROR_GENERIC = "❌ An error occurred: {error}"

    # Voice
    STATE_SERVER_ONLY = "This command can only be used in a server."
    STATE_VERIFY_VOICE_FAILED = "Could not verify your voice state."
    STATE_NEED_TO_BE_IN_VOICE = "You need to be in a voice channel."
    ERROR_COULD_NOT_JOIN_VOICE = "❌ Could not join your voice channel."

    # Playlist replies
    PLAYLIST_LOADING = "Loading playlist..."
    PLAYLIST_LOADING_RETRY = "Loading playlist... (retry {attempt}/{max_attempts})"
    PLAYLIST_CREATED = "🎶 Created control panel for: **{title}** ({count} videos)"
    PLAYLIST_EMPTY = "No playable videos found in this playlist."
    PLAYLIST_ERROR_PREFIX = "Error loading playlist. "
    PLAYLIST_ERROR_BLOCKED = (
        "YouTube is temporarily blocking requests. Please try again in a few minutes."
    )
    PLAYLIST_ERROR_UNAVAILABLE = "This playlist might be private or unavailable."
    PLAYLIST_ERROR_INVALID = "Make sure the URL is a valid YouTube playlist."

    # Control surface
    SURFACE_PLAYLIST_HEADER = "🎶 **{title}**"
    SURFACE_SINGLE_HEADER = "🎵 **Now Playing:** Single Track"
    SURFACE_LOOP_HEADER = "🔁 **Looping:** Single Track"
    SURFACE_SINGLE_PAUSED_HEADER = "⏸️ **Paused:** Single Track"
    SURFACE_LOADING_HEADER = "⏳ **Loading:** Single Track"
    SURFACE_STOPPED_HEADER = "⏹️ **Playback stopped**"
    SURFACE_URL = "🔗 **URL:** {url}"
    SURFACE_NOW_PLAYING = "🎵 **Now Playing:** {title}"
    SURFACE_PAUSED = "⏸️ **Paused:** {title}"
    SURFACE_LOADING = "⏳ **Loading:** {title}"
    SURFACE_LOADING_FIRST = "⏳ **Loading first song...**"
    SURFACE_SKIPPING = "🎵 **Skipping unavailable:** {title}"
    SURFACE_POSITION = "📍 **Position:** {position}/{total}"
    SURFACE_FINISHED = "✅ **Playlist finished**"
    SURFACE_LAST_ACTION = "🔧 **Last Action:** {description} by {actor}"

    # Buttons
    BUTTON_SKIP = "⏭️ Skip"
    BUTTON_PAUSE = "⏸️ Pause"
    BUTTON_RESUME = "▶️ Resume"
    BUTTON_STOP = "⏹️ Stop"
    BUTTON_SHUFFLE = "🔀 Shuffle"

    # Last actions (accepted)
    ACTION_PLAY = "🎵 Started a track"
    ACTION_LOOP = "🔁 Started a loop"
    ACTION_PLAYLIST = "🎶 Started a playlist"
    ACTION_SKIP = "⏭️ Skipped to next song"
    ACTION_PAUSE = "⏸️ Paused playback"
    ACTION_RESUME = "▶️ Resumed playback"
    ACTION_STOP = "⏹️ Stopped playback"
    ACTION_SHUFFLE = "🔀 Shuffled remaining playlist"

    # Last actions (declined)
    ACTION_SKIP_DECLINED = "❌ Skip failed - no playlist playing"
    ACTION_PAUSE_DECLINED = "❌ Pause failed - nothing playing"
    ACTION_RESUME_DECLINED = "❌ Resume failed - not paused"
    ACTION_SHUFFLE_DECLINED = "❌ Shuffle failed - no playlist loaded"
    ACTION_DECLINED = "❌ {action} failed"
