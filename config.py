# config.py
"""
Configuration settings for the movie view.
"""
import os

# ── Playback defaults ──────────────────────────────────────────────────────

FRAME_INTERVAL_MS = 67        # ~15 redraws per second
LOOP_PLAY         = False
SCALE_TYPE        = "center_crop"

# ── Device density ─────────────────────────────────────────────────────────

# Fallback DPI bucket when the host cannot report one (the "high" bucket)
DENSITY_DEFAULT   = 240
# DPI the media is authored for; device scale = display dpi / this
DENSITY_REFERENCE = 240

DEVICE_SCALE_MIN  = 0.1
DEVICE_SCALE_MAX  = 5.0

# Smallest fit scale handed out for zero-sized viewports or media
MIN_SCALE         = 1e-3

# ── Demo host ──────────────────────────────────────────────────────────────

FPS              = 60
FULLSCREEN       = False
WINDOWED_SIZE    = (800, 600)
BACKGROUND_COLOR = (0, 0, 0)

DEMO_FRAME_COUNT = 24
DEMO_FRAME_DELAY = 80         # ms per generated frame
DEMO_MEDIA_SIZE  = (320, 180)

# ── Logging ────────────────────────────────────────────────────────────────

LOG_LEVEL = os.getenv("MOVIEVIEW_LOG_LEVEL", "INFO").upper()
LOG_FILE  = "runtime.log"
