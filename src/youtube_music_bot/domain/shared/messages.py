"""Centralized message constants for error messages, log templates, and user replies."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Input Validation Errors
    EMPTY_QUERY = "Please provide a valid song name or URL!"
    INVALID_VOLUME = "Volume must be a whole number between 0 and 100."
    INVALID_REPEAT_MODE = "Repeat mode must be one of: none, track, queue."
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    FAILURE_REQUIRES_MESSAGE = "A failed result must carry a non-empty message"

    # Configuration Errors
    CONTAINER_NOT_FOUND = "Container not found on bot instance"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."

    # Engine Errors
    ENGINE_FFMPEG_MISSING = "FFmpeg executable '{path}' was not found on PATH"
    ENGINE_NO_QUEUE = "There is no queue in guild {guild_id}"
    ENGINE_NO_UP_NEXT = "There is no up next song"
    ENGINE_NO_PREVIOUS = "There is no previous song in this queue"
    ENGINE_ALREADY_PAUSED = "The queue has been paused already"
    ENGINE_NOT_PAUSED = "The queue is not paused"
    ENGINE_GUILD_NOT_FOUND = "Guild {guild_id} is not available"
    ENGINE_CHANNEL_NOT_VOICE = "Channel {channel_id} is not a voice channel"
    ENGINE_NOT_CONNECTED = "Not connected to voice in guild {guild_id}"
    ENGINE_VOICE_TIMEOUT = "Timed out connecting to voice channel {channel_id}"
    ENGINE_NO_STREAM = "No playable stream found for {url}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Bot Lifecycle
    BOT_STARTING = "Starting YouTube music bot (environment=%s)"
    BOT_STOPPED = "Bot stopped"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down"
    BOT_FATAL_ERROR = "Fatal error while running the bot: %s"
    BOT_READY = "Bot ready: %s (ID: %s)"
    BOT_CONNECTED_GUILDS = "Serving %d Discord servers"
    BOT_INVITE_URL = "Invite URL: %s"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot"
    BOT_SHUTDOWN_COMPLETE = "Shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Shutdown did not finish within %.1fs"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error while shutting down services: %r"
    BOT_PRESENCE_FAILED = "Failed to update presence: %r"
    BOT_GATEWAY_ERROR = "Discord error in event %s"
    CONFIG_INVALID = "Invalid environment configuration: missing %s"
    INVITE_MISSING_APPLICATION_ID = "DISCORD__APPLICATION_ID is required to build the invite URL"
    CONFIG_VALIDATION_FAILED = "Invalid environment configuration: %s"

    # Command Registration
    COMMANDS_REGISTERING_GUILD = "Registering commands to guild %s for instant availability"
    COMMANDS_REGISTERING_GLOBAL = "Registering commands globally"
    COMMANDS_REGISTERED_GUILD = "Registered %d commands to guild %s"
    COMMANDS_REGISTERED_GLOBAL = "Registered %d commands globally"
    COMMANDS_REGISTRATION_FAILED = "Command registration failed"

    # Guild Events
    GUILD_JOINED = "Bot added to new server: %s (%s)"
    GUILD_REMOVED = "Bot removed from server: %s (%s)"
    GATEWAY_CONNECTED = "WebSocket connected"
    GATEWAY_DISCONNECTED = "WebSocket disconnected"
    GATEWAY_RESUMED = "WebSocket session resumed"

    # Interactions
    COMMAND_RECEIVED = "Command: %s from %s in %s"
    COMMAND_FAILED = "Error handling command %s"
    COMMAND_ERROR_REPLY_FAILED = "Failed to send error response: %r"
    COMMAND_DM_REPLY_FAILED = "Failed to respond to DM interaction: %r"

    # Engine Lifecycle
    ENGINE_INITIALIZED = "Playback engine initialization completed successfully"
    ENGINE_INIT_FAILED = "Playback engine initialization failed (attempt %d/%d): %s"
    ENGINE_INIT_RETRY = "Retrying playback engine initialization in %.1fs"
    ENGINE_INIT_GAVE_UP = "Playback engine unavailable after %d attempts"
    ENGINE_LAZY_REINIT = "Playback engine not ready, attempting lazy re-initialization"

    # Engine Events
    ENGINE_NOW_PLAYING = "Now playing: %s (guild %s)"
    ENGINE_SONG_ADDED = "Added to queue: %s (guild %s)"
    ENGINE_SONG_FINISHED = "Finished: %s (guild %s)"
    ENGINE_QUEUE_FINISHED = "Queue finished (guild %s)"
    ENGINE_ERROR = "Playback engine error in guild %s: %s"
    ENGINE_LISTENER_FAILED = "Engine event listener for %s failed"

    # Adapter
    ADAPTER_PLAY_FAILED = "Play failed in guild %s: %r"
    ADAPTER_PLAY_TIMEOUT = "Play timed out after %.1fs in guild %s"
    ADAPTER_BACKGROUND_PLAY_FAILED = "Abandoned play finished with error in guild %s: %r"
    ADAPTER_OPERATION_FAILED = "Engine %s failed in guild %s: %r"

    # Voice
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_MOVED = "Moved to voice channel %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_SELF_DEAFEN_FAILED = "Failed to self-deafen in guild %s: %r"
    VOICE_DISCONNECT_FAILED = "Failed to disconnect voice client in %s: %r"

    # Playback
    PLAYBACK_STARTED = "Started playing '%s' in guild %s"
    PLAYBACK_STOPPED = "Stopped playback in guild %s"
    PLAYBACK_PAUSED = "Paused playback in guild %s"
    PLAYBACK_RESUMED = "Resumed playback in guild %s"
    PLAYBACK_ERROR = "Playback error in guild %s: %s"
    PLAYBACK_ADVANCE_FAILED = "Failed to start next track in guild %s"
    PLAYBACK_HEAD_FAILED = "Could not start '%s' in guild %s, moving on: %s"

    # Search
    SEARCH_NO_RESULTS = "YouTube search returned no results for '%s'"
    SEARCH_TIMEOUT = "YouTube search timed out for '%s'"
    SEARCH_FAILED = "YouTube search failed for '%s'"
    SEARCH_HTTP_ERROR = "YouTube search HTTP %s for '%s'"
    SEARCH_BAD_URL = "Rejected URL query '%s'"

    # yt-dlp
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract stream info for %s"
    CACHE_HIT_URL = "Cache hit for URL: %s"
    CACHE_EXPIRED_CLEANED = "Cleaned %d expired cache entries"


class DiscordUIMessages:
    """User-facing reply texts."""

    # Guards
    STATE_SERVER_ONLY = "This bot only works in servers, not in DMs!"
    STATE_MUST_BE_IN_VOICE = "❌ You must be in a voice channel to use this command!"
    UNKNOWN_COMMAND = "Unknown command!"
    ERROR_GENERIC = "There was an error executing this command!"

    # Failures
    FAILURE = "❌ {message}"
    NO_RESULTS = "No results found for: {query}"

    # Play
    PLAY_STARTED = "🎵 {message}\n**Channel:** {uploader}"
    PLAY_QUEUED = "➕ {message}\n**Channel:** {uploader}"

    # Controls
    ACTION_PAUSED = "⏸️ Paused playback"
    ACTION_RESUMED = "▶️ Resumed playback"
    ACTION_SKIPPED = "⏭️ Skipped to next song"
    ACTION_PREVIOUS = "⏮️ Playing previous song"
    ACTION_STOPPED = "⏹️ Stopped playback and cleared queue"
    ACTION_VOLUME = "🔊 Volume set to {volume}%"
    ACTION_REPEAT = "{emoji} Repeat mode set to: **{mode}**"
    ACTION_JOINED = "✅ {message}"
    ACTION_LEFT = "✅ Left voice channel!"

    # Now playing / queue
    NOW_PLAYING = (
        "{status_emoji} **Now Playing**\n"
        "**{title}**\n"
        "by *{uploader}*\n\n"
        "🔊 Volume: {volume}%\n"
        "{repeat_emoji} Repeat: {repeat_mode}\n"
        "📋 Queue: {queue_length} songs"
    )
    NOTHING_PLAYING = "❌ No song is currently playing."
    QUEUE_HEADER = "🎵 **Now Playing:**\n{title} by *{uploader}*\n\n"
    QUEUE_UPCOMING = "📋 **Queue ({count} songs):**\n"
    QUEUE_LINE = "{index}. {title} by *{uploader}*\n"
    QUEUE_MORE = "... and {count} more songs"
    QUEUE_NOTHING_UPCOMING = "📋 Queue is empty"
    QUEUE_EMPTY = "❌ Queue is empty."

    # Debug
    DEBUG_INFO = (
        "🔧 **Bot Debug Info**\n\n"
        "**Playback Engine:** {engine_status}\n"
        "**Python Version:** {python_version}\n"
        "**Uptime:** {uptime} seconds\n"
        "**Memory Usage:** {memory_mb} MB\n"
        "**Environment:** {environment}\n"
        "**Servers:** {guild_count}"
    )
    ENGINE_STATUS_READY = "✅ Initialized"
    ENGINE_STATUS_UNINITIALIZED = "❌ Not Initialized"

    # Presence
    PRESENCE_READY = "🎵 Ready to play music"
    PRESENCE_PAUSED = "⏸️ Paused"
    PRESENCE_TRACK = "🎵 {title}"
    PRESENCE_PLAYING = "Playing"


class AdapterMessages:
    """Messages carried by adapter CommandResults; relayed verbatim on failure."""

    NOW_PLAYING = "Now playing: {title}"
    ADDED_TO_QUEUE = "Added to queue: {title}"
    PAUSED = "Paused"
    RESUMED = "Resumed"
    SKIPPED = "Skipped to next song"
    PREVIOUS = "Playing previous song"
    STOPPED = "Stopped"
    VOLUME_SET = "Volume set to {volume}%"
    REPEAT_SET = "Repeat mode set to {mode}"
    JOINED = "Joined your voice channel!"
    ALREADY_CONNECTED = "Already connected to voice channel!"
    LEFT = "Disconnected"

    NOTHING_PLAYING = "Nothing is playing"
    NOTHING_PAUSED = "Nothing is paused"
    ALREADY_PAUSED = "Playback is already paused"
    NO_NEXT_SONG = "No next song in queue"
    NO_PREVIOUS_SONG = "No previous song"
    NOT_CONNECTED = "Not connected to a voice channel."
    ENGINE_NOT_READY = (
        "The music engine is still starting up. Please try again in a few seconds."
    )
    PLAY_TIMEOUT = "Timed out starting playback. Please try again."
    PLAY_ERROR = "Error playing track: {error}"
    YOUTUBE_BLOCKED = (
        "YouTube blocked this request. Try again later or pick a different song."
    )
    JOIN_ERROR = "Could not join your voice channel: {error}"
    LEAVE_ERROR = "Could not leave the voice channel: {error}"
    VOLUME_ERROR = "Unable to set volume"
    REPEAT_ERROR = "Unable to set repeat mode"
    OPERATION_ERROR = "Could not {operation}: {error}"
