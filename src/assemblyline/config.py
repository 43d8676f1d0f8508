"""Global constants and default settings."""

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
WINDOW_TITLE = "Assembly Line"

# Conveyor lane (pixels)
LANE_TOP = 120
LANE_HEIGHT = 300
ITEM_SIZE = 60
LANE_MARGIN = 10

# Difficulty presets: (seconds to cross the lane, ms between spawns, power-up offer chance)
DIFFICULTY_PRESETS = {
    "easy": (15.0, 3000, 0.20),
    "medium": (10.0, 2000, 0.15),
    "hard": (7.0, 1500, 0.10),
}
DEFAULT_DIFFICULTY = "medium"

# Category draw thresholds on a uniform [0, 1) value
DEFECTIVE_THRESHOLD = 0.10
FRUIT_THRESHOLD = 0.55

# Power-ups: (activation ms, cooldown ms)
POWER_UP_TIMINGS = {
    "slow": (5000, 15000),
    "auto_sort": (5000, 20000),
    "bonus": (10000, 25000),
}
SLOW_FACTOR = 1.5
AUTO_SORT_INTERVAL_MS = 1000

# Scoring
CORRECT_SORT_POINTS = 10
DEFECTIVE_SORT_POINTS = 15
MISSED_ITEM_POINTS = -5
INCORRECT_SORT_POINTS = -10
BONUS_MULTIPLIER = 2

INITIAL_LIVES = 3
