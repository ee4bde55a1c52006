import math

import numpy as np
import pygame

from scale_geometry import Placement


def frame_surface(frame: np.ndarray) -> pygame.Surface:
    """Wrap an HxWx3 uint8 RGB array as a Pygame surface (no copy)."""
    frame = np.ascontiguousarray(frame, dtype=np.uint8)
    return pygame.image.frombuffer(frame, frame.shape[1::-1], "RGB")


def _source_span(lo: int, hi: int, start: int, length: int, size: int) -> tuple[int, int]:
    """Frame pixels [a, b) that land on screen pixels [lo, hi) of a target span."""
    a = int(math.floor((lo - start) * size / length))
    b = int(math.ceil((hi - start) * size / length))
    a = min(max(0, a), size - 1)
    return a, min(size, max(a + 1, b))


def render_frame(screen: pygame.Surface, frame, placement: Placement,
                 device_scale: float) -> pygame.Rect:
    """
    Scale a raw RGB frame per `placement` and blit it onto `screen`.
    Only the part of the frame that lands on the screen is scaled.
    Returns the full (unclipped) target rect.
    """
    fh, fw = np.shape(frame)[:2]
    x, y, w, h = placement.to_screen_rect(fw, fh, device_scale)
    rect = pygame.Rect(x, y, max(0, w), max(0, h))
    if fw == 0 or fh == 0 or rect.width == 0 or rect.height == 0:
        return rect

    visible = rect.clip(screen.get_rect())
    if visible.width == 0 or visible.height == 0:
        return rect

    surf = frame_surface(frame)
    if visible != rect:
        sx0, sx1 = _source_span(visible.left, visible.right, rect.left, rect.width, fw)
        sy0, sy1 = _source_span(visible.top, visible.bottom, rect.top, rect.height, fh)
        surf = surf.subsurface(pygame.Rect(sx0, sy0, sx1 - sx0, sy1 - sy0))
    if surf.get_size() != visible.size:
        surf = pygame.transform.scale(surf, visible.size)
    screen.blit(surf, visible.topleft)
    return rect
