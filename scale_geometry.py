"""
scale_geometry.py

Where and how large to draw the media inside a viewport.

`resolve()` turns (viewport size, media size, device scale, fit policy)
into a `Placement`: translate by (offset_x, offset_y) in media-local
units, then scale by (scale_x, scale_y).  On screen that is

    left   = offset_x * scale_x * device_scale
    top    = offset_y * scale_y * device_scale
    width  = media_w  * scale_x * device_scale
    height = media_h  * scale_y * device_scale

The fit rules pick a ratio by comparing the media footprints: the ratio
of the smaller (crop) or larger (fit) media dimension is used, and width
wins when both footprints are equal.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import config
from density import clamp_scale

MIN_SCALE = getattr(config, "MIN_SCALE", 1e-3)


class FitPolicy(enum.Enum):
    CENTER        = "center"
    CENTER_CROP   = "center_crop"
    CENTER_INSIDE = "center_inside"
    FIT_CENTER    = "fit_center"
    FIT_START     = "fit_start"
    FIT_END       = "fit_end"
    FIT_XY        = "fit_xy"

    @classmethod
    def parse(cls, value: "FitPolicy | str") -> "FitPolicy":
        """Accept a member, its value ("fit_end") or its name ("FIT_END")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        try:
            return cls(key.lower())
        except ValueError:
            return cls[key.upper()]


@dataclass(frozen=True)
class Placement:
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale_x:  float = 1.0
    scale_y:  float = 1.0

    def to_screen_rect(self, media_w: float, media_h: float,
                       device_scale: float) -> tuple[int, int, int, int]:
        """(left, top, width, height) in viewport pixels."""
        ds = clamp_scale(device_scale)
        sx, sy = self.scale_x * ds, self.scale_y * ds
        return (
            int(round(self.offset_x * sx)),
            int(round(self.offset_y * sy)),
            int(round(media_w * sx)),
            int(round(media_h * sy)),
        )


IDENTITY = Placement()


# ── helpers ────────────────────────────────────────────────────────────────
def _ratio(view: float, media: float) -> float:
    """view/media, floored at MIN_SCALE and never inf/NaN."""
    if media <= 0 or view <= 0:
        return MIN_SCALE
    r = view / media
    if not math.isfinite(r):
        return MIN_SCALE
    return max(MIN_SCALE, r)


def _crop_scale(vw, vh, mw, mh) -> float:
    # ratio of the smaller media dimension
    if min(mw, mh) == mw:
        return _ratio(vw, mw)
    return _ratio(vh, mh)


def _fit_scale(vw, vh, mw, mh) -> float:
    # ratio of the larger media dimension
    if max(mw, mh) == mw:
        return _ratio(vw, mw)
    return _ratio(vh, mh)


def _centered(vw, vh, mw, mh, s, ds) -> tuple[float, float]:
    return (vw - mw * s) / 2 / (s * ds), (vh - mh * s) / 2 / (s * ds)


# ── main entry point ───────────────────────────────────────────────────────
def resolve(
    viewport_w: float,
    viewport_h: float,
    media_w: float,
    media_h: float,
    device_scale: float,
    policy: FitPolicy,
) -> Placement:
    """Compute the placement of the media for one draw.  Never raises."""
    ds = clamp_scale(device_scale)
    vw, vh = max(0.0, float(viewport_w)), max(0.0, float(viewport_h))
    mw, mh = max(0.0, media_w * ds), max(0.0, media_h * ds)

    if policy is FitPolicy.CENTER:
        return Placement((vw - mw) / 2 / ds, (vh - mh) / 2 / ds, 1.0, 1.0)

    if policy is FitPolicy.CENTER_CROP:
        s = _crop_scale(vw, vh, mw, mh)
        return Placement(*_centered(vw, vh, mw, mh, s, ds), s, s)

    if policy is FitPolicy.CENTER_INSIDE:
        s = 1.0
        if mw > vw or mh > vh:
            s = _fit_scale(vw, vh, mw, mh)
        return Placement(*_centered(vw, vh, mw, mh, s, ds), s, s)

    if policy is FitPolicy.FIT_CENTER:
        s = _fit_scale(vw, vh, mw, mh)
        return Placement(*_centered(vw, vh, mw, mh, s, ds), s, s)

    if policy is FitPolicy.FIT_START:
        s = _fit_scale(vw, vh, mw, mh)
        return Placement(0.0, 0.0, s, s)

    if policy is FitPolicy.FIT_END:
        s = _fit_scale(vw, vh, mw, mh)
        return Placement((vw - mw * s) / ds / s, (vh - mh * s) / ds / s, s, s)

    if policy is FitPolicy.FIT_XY:
        return Placement(0.0, 0.0, _ratio(vw, mw), _ratio(vh, mh))

    return IDENTITY
