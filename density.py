"""
density.py – device-scale factor from display density.

The host supplies a DeviceScaleSource; the scale is

    display_dpi / source density

clamped to [DEVICE_SCALE_MIN, DEVICE_SCALE_MAX].  When the source is
absent or cannot report a density, DENSITY_DEFAULT is used instead.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Protocol

import config

logger = logging.getLogger(__name__)

DENSITY_DEFAULT   = getattr(config, "DENSITY_DEFAULT", 240)
DENSITY_REFERENCE = getattr(config, "DENSITY_REFERENCE", DENSITY_DEFAULT)
DEVICE_SCALE_MIN  = getattr(config, "DEVICE_SCALE_MIN", 0.1)
DEVICE_SCALE_MAX  = getattr(config, "DEVICE_SCALE_MAX", 5.0)


class DeviceScaleSource(Protocol):
    def current_density(self) -> Optional[float]: ...


class StaticDensity:
    """Fixed density, e.g. from a command-line flag or a test."""

    def __init__(self, dpi: Optional[float] = None):
        self.dpi = dpi

    def current_density(self) -> Optional[float]:
        return self.dpi


def clamp_scale(scale: float) -> float:
    if not math.isfinite(scale):
        return DEVICE_SCALE_MAX if scale > 0 else DEVICE_SCALE_MIN
    return min(DEVICE_SCALE_MAX, max(DEVICE_SCALE_MIN, scale))


def density_of(source: Optional[DeviceScaleSource]) -> float:
    """The source's density, or DENSITY_DEFAULT when it has none."""
    if source is None:
        return float(DENSITY_DEFAULT)
    try:
        dpi = source.current_density()
    except Exception:
        logger.warning("Density query failed; using %s dpi", DENSITY_DEFAULT,
                       exc_info=True)
        return float(DENSITY_DEFAULT)
    if dpi is None or not dpi > 0:
        return float(DENSITY_DEFAULT)
    return float(dpi)


def device_scale(display_dpi: Optional[float] = None,
                 source: Optional[DeviceScaleSource] = None) -> float:
    """
    Scale factor applied to the media footprint.

    `display_dpi` is the density of the surface being drawn to; it
    defaults to DENSITY_REFERENCE, i.e. a 1:1 mapping.
    """
    if display_dpi is None or not display_dpi > 0:
        display_dpi = DENSITY_REFERENCE
    return clamp_scale(display_dpi / density_of(source))
