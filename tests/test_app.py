import pygame
import pytest

from app import MovieApp
from scale_geometry import FitPolicy


@pytest.fixture
def app():
    a = MovieApp()
    a.view.frame_duration = 60_000
    yield a
    a.view.controller.close()
    pygame.quit()


def test_actions_drive_the_view(app):
    assert app._apply({"type": "play"})
    assert app.view.is_playing()

    assert app._apply({"type": "pause"})
    assert not app.view.is_playing()

    assert app._apply({"type": "scale_type", "to": "fit_xy"})
    assert app.view.scale_type is FitPolicy.FIT_XY

    loop = app.view.loop_play
    app._apply({"type": "toggle_loop"})
    assert app.view.loop_play is not loop

    assert app._apply({"type": "quit"}) is False


def test_bad_scale_type_is_rejected_not_raised(app):
    before = app.view.scale_type

    assert app._apply({"type": "scale_type", "to": "stretch"})
    assert app.view.scale_type is before


def test_actions_request_a_redraw(app):
    app.redraws.poll()
    app._apply({"type": "stop"})

    assert app.redraws.poll() is True
    app.view.draw(app.screen)
