"""
movie_view.py

A view that plays a frame-animated image (a `FrameSequence` or any other
frame provider) on a Pygame surface.

The view owns a `PlaybackController` for timing and resolves the
placement of the media on every draw, so resizing the target surface or
changing the density takes effect on the next frame.

    view = MovieView(color_cycle(320, 180, 24, 80), sink=redraws)
    view.scale_type = "fit_center"
    view.play()
    ...
    if redraws.poll():
        view.draw(screen)
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

import config
from density import DeviceScaleSource, device_scale
from frames import DrawableProvider
from playback import PlaybackController, PlaybackObserver, RedrawSink
from renderer import render_frame
from scale_geometry import FitPolicy, Placement, resolve

logger = logging.getLogger(__name__)

SCALE_TYPE       = getattr(config, "SCALE_TYPE", "center_crop")
BACKGROUND_COLOR = getattr(config, "BACKGROUND_COLOR", (0, 0, 0))


class MovieView:
    def __init__(
        self,
        movie: Optional[DrawableProvider] = None,
        *,
        sink: Optional[RedrawSink] = None,
        scale_type: FitPolicy | str = SCALE_TYPE,
        density: Optional[DeviceScaleSource] = None,
        display_dpi: Optional[float] = None,
        controller: Optional[PlaybackController] = None,
    ):
        self.controller = controller or PlaybackController(sink=sink)
        if sink is not None and controller is not None:
            self.controller.set_redraw_sink(sink)
        if movie is not None:
            self.controller.set_frame_provider(movie)

        self._scale_type = FitPolicy.parse(scale_type)
        self.density = density
        self.display_dpi = display_dpi
        self._scale = self.get_scale()
        self.background = BACKGROUND_COLOR

    # ── movie ───────────────────────────────────────────────────────────
    @property
    def movie(self) -> Optional[DrawableProvider]:
        return self.controller.provider

    def set_movie(self, movie: Optional[DrawableProvider]) -> None:
        """Replace the media; raises IllegalStateError while playing."""
        self.controller.set_frame_provider(movie)
        if movie is not None:
            w, h = movie.intrinsic_size()
            logger.info("Movie set: %dx%d, %d ms", w, h, movie.duration())

    # ── playback (delegated) ────────────────────────────────────────────
    def can_play(self) -> bool:
        return self.controller.can_play()

    def is_playing(self) -> bool:
        return self.controller.is_playing()

    def play(self) -> None:
        self.controller.play()

    def stop(self) -> None:
        self.controller.stop()

    def pause(self) -> None:
        self.controller.pause()

    def set_listener(self, listener: Optional[PlaybackObserver]) -> None:
        self.controller.set_observer(listener)

    @property
    def loop_play(self) -> bool:
        return self.controller.loop

    @loop_play.setter
    def loop_play(self, value: bool) -> None:
        self.controller.set_loop(value)

    @property
    def frame_duration(self) -> int:
        return self.controller.frame_interval_ms

    @frame_duration.setter
    def frame_duration(self, value: int) -> None:
        self.controller.set_frame_interval_ms(value)

    # ── geometry ────────────────────────────────────────────────────────
    @property
    def scale_type(self) -> FitPolicy:
        return self._scale_type

    @scale_type.setter
    def scale_type(self, value: FitPolicy | str) -> None:
        self._scale_type = FitPolicy.parse(value)

    def get_scale(self) -> float:
        """Clamped device-scale factor for the current density."""
        self._scale = device_scale(self.display_dpi, self.density)
        return self._scale

    def measure(self) -> None:
        """Layout pass: pick up density changes."""
        self.get_scale()

    def placement(self, viewport: tuple[int, int]) -> Placement:
        movie = self.movie
        if movie is None:
            return Placement()
        mw, mh = movie.intrinsic_size()
        return resolve(viewport[0], viewport[1], mw, mh, self._scale, self._scale_type)

    # ── drawing ─────────────────────────────────────────────────────────
    def draw(self, surface: pygame.Surface) -> Optional[pygame.Rect]:
        """Clear `surface` and composite the selected frame onto it."""
        surface.fill(self.background)
        movie = self.movie
        if movie is None:
            return None
        frame = movie.current_frame()
        return render_frame(surface, frame, self.placement(surface.get_size()),
                            self._scale)
