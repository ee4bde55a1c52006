"""
errors.py – exceptions raised by playback control operations.
"""


class PlaybackError(Exception):
    """Base class for rejected playback operations."""


class InvalidArgumentError(PlaybackError, ValueError):
    """A configuration value is out of range (e.g. frame interval < 1)."""


class IllegalStateError(PlaybackError, RuntimeError):
    """The operation is not allowed in the current playback state."""


class NotReadyError(IllegalStateError):
    """play() was called with no frame provider attached."""
