"""Global constants and default settings."""

from pathlib import Path

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
WINDOW_TITLE = "Notefall"

# Magic Show (full variant) lane, progress units are percent of playfield height
MAGIC_NOTE_SPEED = 45.0  # progress per second
MAGIC_SPAWN_PROGRESS = -15.0
MAGIC_DESPAWN_PROGRESS = 105.0
MAGIC_HIT_LINE = 82.0

# Accuracy thresholds (progress units, strict) and base points, tightest first
PERFECT_WINDOW = 4.0
GREAT_WINDOW = 8.0
GOOD_WINDOW = 12.0
PERFECT_POINTS = 300
GREAT_POINTS = 200
GOOD_POINTS = 100

# Health
HEALTH_START = 50
HEALTH_MAX = 100
HEALTH_PER_HIT = 3
HEALTH_PER_MISS = 5
FEVER_THRESHOLD = 90

COMBO_PER_MULTIPLIER = 10

# Challenge (simplified variant) lane
CHALLENGE_NOTE_SPEED = 90.0
CHALLENGE_SPAWN_PROGRESS = 0.0
CHALLENGE_DESPAWN_PROGRESS = 110.0
CHALLENGE_HIT_LINE = 77.5  # centre of the 60-95 band
CHALLENGE_WINDOW = 17.5
CHALLENGE_POINTS = 10
CHALLENGE_SONG_COUNT = 15

HIT_EFFECT_LIFETIME_MS = 1000

# Free play
PLAYBACK_TAIL_MS = 1000

HIGH_SCORE_LIMIT = 3
DEFAULT_DB_PATH = Path.home() / ".notefall" / "scores.db"
DEFAULT_SOUNDFONT = ""
