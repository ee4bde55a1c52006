#!/usr/bin/env python3
"""
events.py  – central hub

• RedrawQueue: thread-safe redraw hand-off from the cadence loop to the
  single-threaded presentation loop.  Requests coalesce; at most one is
  ever pending.
• Translates raw Pygame events to high-level action dicts and exposes a
  queue so *any* external source can inject the same actions.
"""

from __future__ import annotations
import queue
from pygame.locals import *

Action = dict      # alias for readability

# digit keys → fit policy names, in FitPolicy declaration order
_POLICY_KEYS = {
    K_1: "center",
    K_2: "center_crop",
    K_3: "center_inside",
    K_4: "fit_center",
    K_5: "fit_start",
    K_6: "fit_end",
    K_7: "fit_xy",
}


class RedrawQueue:
    """RedrawSink that coalesces requests into a one-slot queue."""

    def __init__(self) -> None:
        self._q: "queue.Queue[bool]" = queue.Queue(maxsize=1)

    # ── producer (any thread) ──────────────────────────────────────────
    def request_redraw(self) -> None:
        try:
            self._q.put_nowait(True)
        except queue.Full:
            pass                    # one request already pending

    # ── consumer (presentation loop) ───────────────────────────────────
    def poll(self) -> bool:
        """True if a redraw was requested since the last poll."""
        try:
            return self._q.get_nowait()
        except queue.Empty:
            return False

    @property
    def pending(self) -> bool:
        return not self._q.empty()


class EventManager:
    _fifo: "queue.Queue[Action]" = queue.Queue()      # global, thread-safe

    # ── SDL / keyboard path ────────────────────────────────────────────
    @classmethod
    def handle(cls, event, playing: bool) -> None:
        """Translate one Pygame event → action and enqueue it."""
        act = cls._translate_pygame(event, playing)
        if act:
            cls._fifo.put(act)

    # ── external / programmatic path ───────────────────────────────────
    @classmethod
    def post(cls, action: Action) -> None:
        """
        Any thread may call this to inject an already-formed action dict, e.g.:
            EventManager.post({"type":"scale_type","to":"fit_xy"})
        """
        cls._fifo.put(action)

    # ── main-loop consumer ─────────────────────────────────────────────
    @classmethod
    def poll(cls) -> Action | None:
        """Return next queued action or None (non-blocking)."""
        try:
            return cls._fifo.get_nowait()
        except queue.Empty:
            return None

    @classmethod
    def clear(cls) -> None:
        while cls.poll() is not None:
            pass

    # ── internal translator ───────────────────────────────────────────
    @staticmethod
    def _translate_pygame(event, playing: bool) -> Action | None:
        if event.type == QUIT:
            return {"type": "quit"}

        if event.type == KEYDOWN:
            if event.key in (K_ESCAPE, K_q):
                return {"type": "quit"}
            if event.key == K_SPACE:
                return {"type": "pause" if playing else "play"}
            if event.key == K_s:
                return {"type": "stop"}
            if event.key == K_l:
                return {"type": "toggle_loop"}
            if event.key == K_f:
                return {"type": "toggle_fullscreen"}
            if event.key in _POLICY_KEYS:
                return {"type": "scale_type", "to": _POLICY_KEYS[event.key]}

        return None
