"""
playback.py – playback timing state machine.

Public API
----------
play() / pause() / stop()
tick()                → media time presented (ms) or None
current_media_time()
set_frame_provider(p) / set_loop(b) / set_frame_interval_ms(n)
can_play() / is_playing()
close()               → stop and join the cadence thread

While playing, a daemon cadence thread calls tick() every
`frame_interval_ms`: it maps elapsed monotonic time onto the media
timeline, selects that timestamp on the frame provider and asks the
redraw sink for a repaint.  Drawing itself happens on the host's thread.

Each play run owns its own cancellation Event.  stop()/pause() set it
under the session lock, and tick() checks it under the same lock before
touching the provider or the sink, so once stop()/pause() has returned
no further redraw is requested by the cancelled run.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import config
from errors import IllegalStateError, InvalidArgumentError, NotReadyError
from frames import FrameProvider
from timing import media_time, past_end, uptime_ms

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = getattr(config, "FRAME_INTERVAL_MS", 67)
LOOP_PLAY         = getattr(config, "LOOP_PLAY", False)


class PlaybackState(enum.Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED  = "paused"


class RedrawSink(Protocol):
    def request_redraw(self) -> None: ...


class PlaybackObserver(Protocol):
    def on_played(self) -> None: ...
    def on_stopped(self) -> None: ...


@dataclass
class PlaybackSession:
    state: PlaybackState = PlaybackState.STOPPED
    media_origin_ms: int = 0       # clock reading that corresponds to media time 0
    paused_offset_ms: int = 0      # media time to resume from
    loop: bool = LOOP_PLAY
    frame_interval_ms: int = FRAME_INTERVAL_MS


def _check_interval(value) -> int:
    try:
        interval = int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"frame interval must be an integer, got {value!r}")
    if interval != value:
        raise InvalidArgumentError(f"frame interval must be whole milliseconds, got {value!r}")
    if interval < 1:
        raise InvalidArgumentError(f"frame interval must be >= 1 ms, got {interval}")
    return interval


class PlaybackController:
    def __init__(
        self,
        provider: Optional[FrameProvider] = None,
        sink: Optional[RedrawSink] = None,
        observer: Optional[PlaybackObserver] = None,
        *,
        loop: bool = LOOP_PLAY,
        frame_interval_ms: int = FRAME_INTERVAL_MS,
        clock: Callable[[], int] = uptime_ms,
    ):
        self._lock = threading.RLock()
        self._session = PlaybackSession(
            loop=bool(loop),
            frame_interval_ms=_check_interval(frame_interval_ms),
        )
        self._provider = provider
        self._sink = sink
        self._observer = observer
        self._clock = clock

        self._thread: Optional[threading.Thread] = None
        self._cancel: Optional[threading.Event] = None

    # ── state queries ───────────────────────────────────────────────────
    @property
    def session(self) -> PlaybackSession:
        """Snapshot of the session fields."""
        with self._lock:
            return dataclasses.replace(self._session)

    @property
    def state(self) -> PlaybackState:
        with self._lock:
            return self._session.state

    @property
    def provider(self) -> Optional[FrameProvider]:
        return self._provider

    def can_play(self) -> bool:
        return self._provider is not None

    def is_playing(self) -> bool:
        with self._lock:
            return (self._session.state is PlaybackState.PLAYING
                    and self._thread is not None
                    and self._thread.is_alive())

    def current_media_time(self) -> int:
        """Media time being presented now (ms); the resume point when not playing."""
        with self._lock:
            s = self._session
            if s.state is not PlaybackState.PLAYING or self._provider is None:
                return s.paused_offset_ms
            duration = self._provider.duration()
            rel = media_time(self._clock() - s.media_origin_ms, duration, loop=s.loop)
            return rel if s.loop else min(rel, duration)

    # ── configuration ───────────────────────────────────────────────────
    @property
    def loop(self) -> bool:
        with self._lock:
            return self._session.loop

    def set_loop(self, loop: bool) -> None:
        with self._lock:
            self._session.loop = bool(loop)

    @property
    def frame_interval_ms(self) -> int:
        with self._lock:
            return self._session.frame_interval_ms

    def set_frame_interval_ms(self, interval_ms: int) -> None:
        try:
            interval = _check_interval(interval_ms)
        except InvalidArgumentError:
            logger.warning("Rejected frame interval %r", interval_ms)
            raise
        with self._lock:
            self._session.frame_interval_ms = interval

    def set_frame_provider(self, provider: Optional[FrameProvider]) -> None:
        with self._lock:
            if self.is_playing():
                logger.warning("Refused to replace the frame provider during playback")
                raise IllegalStateError("cannot replace the frame provider while playing")
            self._provider = provider

    def set_redraw_sink(self, sink: Optional[RedrawSink]) -> None:
        with self._lock:
            self._sink = sink

    def set_observer(self, observer: Optional[PlaybackObserver]) -> None:
        with self._lock:
            self._observer = observer

    # ── control ─────────────────────────────────────────────────────────
    def play(self) -> None:
        with self._lock:
            if self.is_playing():
                return
            if self._provider is None:
                raise NotReadyError("no frame provider attached")

            s = self._session
            s.media_origin_ms = self._clock() - s.paused_offset_ms
            s.state = PlaybackState.PLAYING

            cancel = threading.Event()
            thread = threading.Thread(target=self._run, args=(cancel,),
                                      name="movie-cadence", daemon=True)
            self._cancel, self._thread = cancel, thread
            thread.start()
            observer = self._observer
            logger.debug("Playing from %d ms (interval %d ms, loop=%s)",
                         s.paused_offset_ms, s.frame_interval_ms, s.loop)

        if observer is not None:
            observer.on_played()

    def stop(self) -> None:
        self._reset_to(0, PlaybackState.STOPPED)

    def pause(self) -> None:
        with self._lock:
            observer = self._reset_locked(self.current_media_time(), PlaybackState.PAUSED)
        if observer is not None:
            observer.on_stopped()

    def close(self, timeout: float = 0.5) -> None:
        """Stop and wait briefly for the cadence thread to exit."""
        self.stop()
        self.join(timeout)

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def tick(self) -> Optional[int]:
        """
        Present the current media time.  Normally driven by the cadence
        thread; hosts may also call it directly.
        """
        return self._tick(self._cancel)

    # ── internals ───────────────────────────────────────────────────────
    def _reset_to(self, time_ms: int, state: PlaybackState) -> None:
        with self._lock:
            observer = self._reset_locked(time_ms, state)
        if observer is not None:
            observer.on_stopped()

    def _reset_locked(self, time_ms: int, state: PlaybackState):
        """
        Cancel the running loop and leave PLAYING.  Caller holds the lock
        and fires on_stopped on the returned observer once released.
        """
        s = self._session
        if s.state is not PlaybackState.PLAYING or self._provider is None:
            return None
        if self._cancel is not None:
            self._cancel.set()
        s.paused_offset_ms = max(0, int(time_ms))
        s.state = state
        logger.debug("Playback %s at %d ms", state.value, s.paused_offset_ms)
        return self._observer

    def _tick(self, cancel: Optional[threading.Event]) -> Optional[int]:
        with self._lock:
            s = self._session
            provider = self._provider
            if (cancel is None or cancel.is_set()
                    or s.state is not PlaybackState.PLAYING or provider is None):
                return None

            duration = provider.duration()
            rel = media_time(self._clock() - s.media_origin_ms, duration, loop=s.loop)
            finished = not s.loop and past_end(rel, duration)
            provider.select_frame(min(rel, duration) if finished else rel)
            if self._sink is not None:
                self._sink.request_redraw()

            if not finished:
                return rel
            logger.debug("Reached end of media (%d ms)", duration)
            observer = self._reset_locked(0, PlaybackState.STOPPED)

        if observer is not None:
            observer.on_stopped()
        return rel

    def _run(self, cancel: threading.Event) -> None:
        try:
            while not cancel.is_set():
                self._tick(cancel)
                if cancel.wait(self.frame_interval_ms / 1000.0):
                    break
        except Exception:
            logger.exception("Cadence loop failed; stopping playback")
            with self._lock:
                if self._cancel is not cancel or self._session.state is not PlaybackState.PLAYING:
                    return
                cancel.set()
                self._session.state = PlaybackState.STOPPED
                observer = self._observer
            if observer is not None:
                observer.on_stopped()
