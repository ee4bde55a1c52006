"""
frames.py

In-memory frame provider for the movie view.

A `FrameSequence` holds already-decoded RGB frames (HxWx3 uint8 numpy
arrays) together with the display time of each frame in milliseconds.
Timestamps are mapped to frames on a cumulative timeline, the same way
a playlist maps an offset to the clip that covers it.
"""

from __future__ import annotations

import bisect
import colorsys
import logging
from typing import List, Protocol, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class FrameProvider(Protocol):
    """What the playback controller and the draw step need from media."""

    def duration(self) -> int: ...
    def select_frame(self, timestamp_ms: int) -> None: ...
    def intrinsic_size(self) -> Tuple[int, int]: ...


class DrawableProvider(FrameProvider, Protocol):
    """A provider the Pygame draw step can composite."""

    def current_frame(self) -> np.ndarray: ...


# ── Frame sequence ─────────────────────────────────────────────────────────
class FrameSequence:
    """Frames plus per-frame delays; timestamps select a frame."""

    def __init__(self, frames: Sequence[np.ndarray], delays_ms: Sequence[int]):
        if not frames:
            raise ValueError("FrameSequence needs at least one frame")
        if len(frames) != len(delays_ms):
            raise ValueError(
                f"{len(frames)} frames but {len(delays_ms)} delays")

        self.frames: List[np.ndarray] = [self._as_rgb(f) for f in frames]
        h, w = self.frames[0].shape[:2]
        for f in self.frames[1:]:
            if f.shape[:2] != (h, w):
                raise ValueError(
                    f"frame size {f.shape[1]}x{f.shape[0]} != {w}x{h}")
        self._w, self._h = w, h

        self.delays_ms: List[int] = [max(0, int(d)) for d in delays_ms]
        self.start_ms: List[int] = [0]
        for d in self.delays_ms[:-1]:
            self.start_ms.append(self.start_ms[-1] + d)
        self.total_ms: int = self.start_ms[-1] + self.delays_ms[-1]

        self.index: int = 0
        self.timestamp_ms: int = 0

    @classmethod
    def uniform(cls, frames: Sequence[np.ndarray], delay_ms: int) -> "FrameSequence":
        frames = list(frames)
        return cls(frames, [delay_ms] * len(frames))

    # ── FrameProvider ───────────────────────────────────────────────────
    def duration(self) -> int:
        return self.total_ms

    def select_frame(self, timestamp_ms: int) -> None:
        t = max(0, int(timestamp_ms))
        self.timestamp_ms = t
        # zero-delay frames share a start time; bisect lands on the last one
        self.index = min(len(self.frames) - 1,
                         max(0, bisect.bisect_right(self.start_ms, t) - 1))

    def intrinsic_size(self) -> Tuple[int, int]:
        return self._w, self._h

    # ── host side ───────────────────────────────────────────────────────
    def current_frame(self) -> np.ndarray:
        return self.frames[self.index]

    def __len__(self) -> int:
        return len(self.frames)

    @staticmethod
    def _as_rgb(frame) -> np.ndarray:
        arr = np.asarray(frame)
        if arr.ndim == 2:                          # greyscale → RGB
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"unsupported frame shape {arr.shape}")
        if arr.shape[2] == 4:                      # drop alpha
            arr = arr[:, :, :3]
        return np.ascontiguousarray(arr, dtype=np.uint8)


# ── Generated sequences ────────────────────────────────────────────────────
def color_cycle(width: int, height: int, count: int,
                delay_ms: int) -> FrameSequence:
    """
    Hue-cycling test pattern with a white bar sweeping left → right, so
    both the frame index and the placement are visible on screen.
    """
    if width <= 0 or height <= 0 or count <= 0:
        raise ValueError(f"bad pattern size {width}x{height}x{count}")
    bar_color = np.array((255, 255, 255), dtype=np.uint8)
    bar_w = max(1, width // max(count, 1))

    frames = []
    for i in range(count):
        r, g, b = colorsys.hsv_to_rgb(i / count, 0.8, 0.9)
        frame = np.empty((height, width, 3), dtype=np.uint8)
        frame[:, :] = (int(r * 255), int(g * 255), int(b * 255))
        x0 = (i * width) // count
        frame[:, x0:x0 + bar_w] = bar_color
        frames.append(frame)

    logger.debug("Generated %d-frame %dx%d pattern (%d ms/frame)",
                 count, width, height, delay_ms)
    return FrameSequence.uniform(frames, delay_ms)
