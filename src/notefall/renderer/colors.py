"""Color palette."""

# RGB tuples
BG = (18, 14, 32)
WHITE_KEY = (240, 240, 240)
BLACK_KEY = (30, 30, 30)
KEY_PRESSED = (255, 183, 213)
KEY_HIGHLIGHT = (253, 224, 71)
LANE_LINE = (60, 50, 90)
HIT_LINE = (255, 255, 255)
NOTE_STAR = (244, 114, 182)
NOTE_DIAMOND = (96, 165, 250)
NOTE_PERFECT = (80, 220, 100)
NOTE_MISS = (220, 60, 60)
HEALTH = (74, 222, 128)
HEALTH_FEVER = (250, 204, 21)
HUD_TEXT = (220, 220, 220)
HUD_DIM = (120, 120, 140)
