"""
config.py — Shared constants for the snake widget.
No logic, no imports from internal modules.
"""

# ── Board ─────────────────────────────────────────────────────────
GRID_SIZE       = 15
CELL_SIZE       = 18
INITIAL_LENGTH  = 3
FPS             = 60

# ── Window layout ─────────────────────────────────────────────────
HEADER_H        = 36
PAD_H           = 96
MARGIN          = 12
PAD_BUTTON      = 28

# ── Colors ────────────────────────────────────────────────────────
BG          = (26,  29,  35)
GRID_COL    = (45,  50,  60)
FOOD_COL    = (239, 68,  68)
FOOD_SHINE  = (252, 165, 165)
HEAD_COL    = (34,  197, 94)
BODY_BLUE   = 94
EYE_COL     = (0,   0,   0)
TEXT_COL    = (220, 220, 230)
DIM_COL     = (120, 120, 150)
RECORD_COL  = (250, 204, 21)
PANEL_BG    = (17,  19,  24)
OVERLAY_COL = (10,  10,  15,  200)
BUTTON_COL  = (55,  65,  81)

# ── Gameplay ──────────────────────────────────────────────────────
POINTS_PER_FOOD = 10

BASE_SPEED_MS   = 150
SPEED_STEP_MS   = 10
MIN_SPEED_MS    = 80
SPEEDUP_EVERY   = 50

# ── Persistence ───────────────────────────────────────────────────
HIGH_SCORE_KEY  = "snakeHighScore"
SCORES_FILE     = "~/.snakewidget.json"
