from __future__ import annotations

from pathlib import Path

PKG_DIR = Path(__file__).resolve().parent


# --- Palette ----------------------------------------------------------------
BG = (20, 22, 32)                # space backdrop behind the lanes
DEATH_STAR = (51, 51, 51)        # background art fill
DEATH_STAR_EDGE = (32, 34, 46)   # background art outline and dish dots
INK = (235, 235, 235)            # primary text colour
ACCENT = (255, 210, 90)          # accent colour for highlights
DIALOG_BG = (12, 14, 20, 225)
DIALOG_BORDER = (120, 200, 255)

# Placeholder colours used when a sprite image is unavailable
SPRITE_COLORS = {
    "stormtrooper-color": (230, 230, 230),
    "vader-color":        (40, 40, 40),
    "kyloren-color":      (170, 20, 20),
    "bb8-color":          (255, 150, 40),
    "r2d2-color":         (70, 110, 220),
    "chewie-color":       (120, 80, 40),
    "rebelSymbol":        (255, 90, 60),
    "jediOrder-color":    (90, 200, 255),
    "phoenix-color":      (255, 210, 90),
}
PLACEHOLDER_SIZE = (80, 70)

# --- Canvas -----------------------------------------------------------------
CANVAS_WIDTH = 505
CANVAS_HEIGHT = 750
FPS = 60

# --- Grid -------------------------------------------------------------------
COLUMN_STEP = 100
ROW_STEP = 83
LANE_ROWS = (154, 237, 320, 403, 486, 569)
COLLECTIBLE_COLUMNS = (100, 200, 300, 400)
ACTOR_COLUMNS = (0, 100, 200, 300, 400)

# --- Well-known positions ---------------------------------------------------
ACTOR_START = (200, 652)
WON_Y = -100                      # actor parked above the canvas after a crossing
OFFSCREEN_X = -100                # collected collectibles are parked here
HAZARD_SPAWN_COLUMNS = (-100, -300, -500)

# --- Gameplay ---------------------------------------------------------------
ACTOR_LIVES = 3
HIT_WIDTH = 75

# --- HUD / dialog -----------------------------------------------------------
HUD_FONT_SIZE = 22
DIALOG_TITLE_FONT_SIZE = 34
DIALOG_TEXT_FONT_SIZE = 20
DIALOG_RADIUS = 12
DIALOG_WIDTH_FACTOR = 0.86
SELECT_ICON_SIZE = 90
