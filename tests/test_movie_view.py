import numpy as np
import pygame
import pytest

from density import StaticDensity
from errors import IllegalStateError, InvalidArgumentError, NotReadyError
from frames import FrameSequence
from movie_view import MovieView
from scale_geometry import FitPolicy

RED = (255, 0, 0)


def _red_movie(w=100, h=50):
    frame = np.zeros((h, w, 3), dtype=np.uint8)
    frame[:, :] = RED
    return FrameSequence.uniform([frame], 1000)


@pytest.fixture
def view():
    v = MovieView(_red_movie(), scale_type="fit_center")
    v.frame_duration = 60_000
    yield v
    v.controller.close()


def test_draw_letterboxes_with_fit_center(view):
    surface = pygame.Surface((200, 300))

    rect = view.draw(surface)

    assert tuple(rect) == (0, 100, 200, 100)
    assert tuple(surface.get_at((100, 150)))[:3] == RED
    assert tuple(surface.get_at((100, 10)))[:3] == (0, 0, 0)
    assert tuple(surface.get_at((100, 290)))[:3] == (0, 0, 0)


def test_draw_follows_scale_type_changes(view):
    surface = pygame.Surface((200, 300))
    view.scale_type = FitPolicy.FIT_XY

    rect = view.draw(surface)

    assert tuple(rect) == (0, 0, 200, 300)
    assert tuple(surface.get_at((100, 10)))[:3] == RED


def test_draw_without_movie_only_clears():
    surface = pygame.Surface((20, 20))
    surface.fill((9, 9, 9))

    assert MovieView().draw(surface) is None
    assert tuple(surface.get_at((5, 5)))[:3] == (0, 0, 0)


def test_density_feeds_device_scale():
    v = MovieView(_red_movie(), scale_type="center",
                  density=StaticDensity(120), display_dpi=240)

    assert v.get_scale() == pytest.approx(2.0)
    p = v.placement((400, 400))
    # footprint 200x100 centred in 400x400, offsets in media units
    assert (p.offset_x, p.offset_y) == pytest.approx((50, 75))

    v.density = StaticDensity(240)
    v.measure()
    assert v.get_scale() == pytest.approx(1.0)


def test_set_movie_rejected_while_playing(view):
    view.play()
    assert view.is_playing()

    with pytest.raises(IllegalStateError):
        view.set_movie(_red_movie(10, 10))

    view.stop()
    view.set_movie(_red_movie(10, 10))
    assert view.movie.intrinsic_size() == (10, 10)


def test_play_without_movie_is_not_ready():
    v = MovieView()

    assert not v.can_play()
    with pytest.raises(NotReadyError):
        v.play()


def test_listener_sees_play_and_stop(view):
    events = []

    class _Listener:
        def on_played(self):
            events.append("played")

        def on_stopped(self):
            events.append("stopped")

    view.set_listener(_Listener())
    view.play()
    view.pause()
    view.play()
    view.stop()

    assert events == ["played", "stopped", "played", "stopped"]


def test_frame_duration_and_loop_properties(view):
    view.loop_play = True
    view.frame_duration = 33

    assert view.loop_play is True
    assert view.frame_duration == 33
    with pytest.raises(InvalidArgumentError):
        view.frame_duration = 0
    assert view.frame_duration == 33


def test_draw_zero_sized_movie_only_clears():
    v = MovieView(FrameSequence.uniform([np.zeros((0, 0, 3), dtype=np.uint8)], 100))
    surface = pygame.Surface((200, 300))
    surface.fill((9, 9, 9))

    rect = v.draw(surface)

    assert rect.width == 0 or rect.height == 0
    assert tuple(surface.get_at((100, 150)))[:3] == (0, 0, 0)
