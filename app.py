#!/usr/bin/env python3
"""
app.py – Pygame demo host for MovieView

Plays a generated frame sequence in a window.  The cadence thread only
posts redraw requests to a RedrawQueue; this loop drains it (and the
EventManager actions) on the main thread and does all drawing.

Keys: space play/pause · s stop · l loop · 1-7 scale type ·
      f fullscreen · q/esc quit
"""
from __future__ import annotations

import logging
from typing import Optional

import pygame

import config
from errors import PlaybackError
from events import EventManager, RedrawQueue
from frames import color_cycle
from movie_view import MovieView

logger = logging.getLogger(__name__)


class _LogObserver:
    def on_played(self) -> None:
        logger.info("played")

    def on_stopped(self) -> None:
        logger.info("stopped")


# ── main application ───────────────────────────────────────────────────────
class MovieApp:
    def __init__(self, view: Optional[MovieView] = None):
        # window ----------------------------------------------------------
        pygame.init()
        self.screen = self._set_mode()
        pygame.display.set_caption("movieview")
        self.clock = pygame.time.Clock()

        # core state ------------------------------------------------------
        self.redraws = RedrawQueue()
        if view is None:
            w, h = config.DEMO_MEDIA_SIZE
            view = MovieView(
                color_cycle(w, h, config.DEMO_FRAME_COUNT, config.DEMO_FRAME_DELAY),
                scale_type=config.SCALE_TYPE,
            )
        self.view = view
        self.view.controller.set_redraw_sink(self.redraws)
        self.view.set_listener(_LogObserver())
        self.view.loop_play = True
        self.view.measure()

    def _set_mode(self) -> pygame.Surface:
        return pygame.display.set_mode(
            (0, 0) if config.FULLSCREEN else config.WINDOWED_SIZE,
            (pygame.FULLSCREEN if config.FULLSCREEN else 0) | pygame.RESIZABLE,
        )

    # ── action dispatch ---------------------------------------------------
    def _apply(self, act: dict) -> bool:
        """Handle one action; False means quit."""
        t = act["type"]
        if t == "quit":
            return False
        try:
            if t == "play":
                self.view.play()
            elif t == "pause":
                self.view.pause()
            elif t == "stop":
                self.view.stop()
            elif t == "toggle_loop":
                self.view.loop_play = not self.view.loop_play
                logger.info("loop=%s", self.view.loop_play)
            elif t == "scale_type":
                self.view.scale_type = act["to"]
                logger.info("scale type → %s", self.view.scale_type.value)
            elif t == "toggle_fullscreen":
                config.FULLSCREEN ^= True
                self.screen = self._set_mode()
                self.view.measure()
        except (PlaybackError, KeyError, ValueError) as exc:
            logger.warning("Action %s rejected: %s", t, exc)
        self.redraws.request_redraw()
        return True

    # ── main loop ---------------------------------------------------------
    def run(self):
        running = True
        self.view.play()
        while running:
            for e in pygame.event.get():
                if e.type == pygame.VIDEORESIZE:
                    self.redraws.request_redraw()
                EventManager.handle(e, self.view.is_playing())

            while running and (act := EventManager.poll()):
                running = self._apply(act)

            if self.redraws.poll():
                self.view.draw(self.screen)
                pygame.display.flip()

            self.clock.tick(config.FPS)

        self.view.controller.close()
        pygame.quit()


if __name__ == "__main__":
    MovieApp().run()
