"""Shared string enumerations for type-safe comparisons across layers."""

from __future__ import annotations

from enum import StrEnum


class RepeatMode(StrEnum):
    """Per-guild repeat behaviour applied when a track finishes."""

    NONE = "none"
    TRACK = "track"
    QUEUE = "queue"


class EngineState(StrEnum):
    """Lifecycle of the playback engine handle."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"


class EngineEvent(StrEnum):
    """Instrumentation events emitted by the playback engine."""

    SONG_START = "song_start"
    SONG_ADDED = "song_added"
    SONG_END = "song_end"
    QUEUE_EMPTY = "queue_empty"
    ERROR = "error"


class CommandName(StrEnum):
    """Slash commands understood by the interpreter."""

    PLAY = "play"
    PAUSE = "pause"
    RESUME = "resume"
    SKIP = "skip"
    PREVIOUS = "previous"
    VOLUME = "volume"
    REPEAT = "repeat"
    NOW_PLAYING = "nowplaying"
    QUEUE = "queue"
    STOP = "stop"
    JOIN = "join"
    LEAVE = "leave"
    DEBUG = "debug"
